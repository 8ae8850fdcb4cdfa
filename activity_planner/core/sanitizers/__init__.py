"""
Field sanitizers.

The sanitizer for a field is chosen from its declared kind and role, never from
its name.
"""

from activity_planner.core.models import FieldSpec

from .base_sanitizer import BaseSanitizer
from .date_sanitizer import DateSanitizer, date_timestamp, parse_calendar_date
from .postcode_sanitizer import PostcodeSanitizer, validate_postcode
from .rich_text import (
    RICH_TEXT_MODES,
    AllowListHtmlSanitizer,
    EscapingHtmlSanitizer,
    RichTextSanitizer,
    build_rich_text_sanitizer,
)
from .text_sanitizer import TextSanitizer
from .time_sanitizer import TimeSanitizer, is_valid_time

_DATE = DateSanitizer()
_TIME = TimeSanitizer()
_POSTCODE = PostcodeSanitizer()
_TEXT = TextSanitizer()


def sanitizer_for_field(field: FieldSpec | None, rich_text: RichTextSanitizer) -> BaseSanitizer:
    """
    Select the sanitizer for a field.

    Args:
        field: Field specification; None for keys outside the schema
        rich_text: Rich-text capability used for richtext-role fields

    Returns:
        The sanitizer to apply
    """
    if field is None:
        return _TEXT
    if field.kind == "date":
        return _DATE
    if field.kind == "time":
        return _TIME
    if field.role == "postcode":
        return _POSTCODE
    if field.role == "richtext":
        return rich_text
    return _TEXT


__all__ = [
    "RICH_TEXT_MODES",
    "AllowListHtmlSanitizer",
    "BaseSanitizer",
    "DateSanitizer",
    "EscapingHtmlSanitizer",
    "PostcodeSanitizer",
    "RichTextSanitizer",
    "TextSanitizer",
    "TimeSanitizer",
    "build_rich_text_sanitizer",
    "date_timestamp",
    "is_valid_time",
    "parse_calendar_date",
    "sanitizer_for_field",
    "validate_postcode",
]
