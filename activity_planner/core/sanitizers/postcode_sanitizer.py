"""
PostcodeSanitizer - UK postcodes, normalized to upper case.
"""

import re
from typing import Any

from .base_sanitizer import BaseSanitizer

# One or two letters, one or two digits, optional letter, optional space,
# digit, two letters.
UK_POSTCODE_PATTERN = re.compile(r"^[A-Z]{1,2}\d{1,2}[A-Z]?\s?\d[A-Z]{2}$", re.IGNORECASE)

_DISALLOWED = re.compile(r"[^A-Z0-9 ]")


def validate_postcode(postcode: Any) -> bool:
    """
    Check a postcode against the UK format.

    Empty values are valid (the field is optional).
    """
    if not postcode:
        return True
    return UK_POSTCODE_PATTERN.match(str(postcode).strip()) is not None


class PostcodeSanitizer(BaseSanitizer):
    """Uppercases, strips characters outside [A-Z0-9 ] and trims."""

    def sanitize(self, value: Any) -> str:
        if self.is_blank(value):
            return ""
        return _DISALLOWED.sub("", str(value).upper()).strip()

    @property
    def sanitizer_type(self) -> str:
        return "postcode"
