"""
TimeSanitizer - time fields must be HH:MM on a 24-hour clock.
"""

import re
from typing import Any

from .base_sanitizer import BaseSanitizer

# Single-digit hours are accepted ("9:05"); minutes always take two digits.
TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")


def is_valid_time(value: Any) -> bool:
    return isinstance(value, str) and TIME_PATTERN.match(value) is not None


class TimeSanitizer(BaseSanitizer):
    """Keeps a valid HH:MM value unchanged; anything else becomes None."""

    def sanitize(self, value: Any) -> str | None:
        if self.is_blank(value):
            return None
        text = str(value)
        if not is_valid_time(text):
            return None
        return text

    @property
    def sanitizer_type(self) -> str:
        return "time"
