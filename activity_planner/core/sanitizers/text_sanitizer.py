"""
TextSanitizer - plain text fields; no HTML permitted.
"""

import re
from typing import Any

from .base_sanitizer import BaseSanitizer

_ANGLE_BRACKETS = re.compile(r"[<>]")


class TextSanitizer(BaseSanitizer):
    """Removes angle brackets, then trims surrounding whitespace."""

    def sanitize(self, value: Any) -> str:
        if self.is_blank(value):
            return ""
        return _ANGLE_BRACKETS.sub("", str(value)).strip()

    @property
    def sanitizer_type(self) -> str:
        return "text"
