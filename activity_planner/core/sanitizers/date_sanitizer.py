"""
DateSanitizer - date fields must parse as a real calendar date.
"""

from datetime import datetime, timezone
from typing import Any

from dateutil import parser as date_parser

from .base_sanitizer import BaseSanitizer


# Two defaults that differ in year, month and day. A date part missing from the
# input is filled from the default, so the two parses disagree.
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


def parse_calendar_date(value: Any) -> datetime | None:
    """
    Parse a date string into an aware datetime.

    The input must name a year, month and day itself; time-only, weekday-only
    or partial inputs ("10:30", "Monday", "2025-06") are rejected. Naive
    values are taken as UTC.

    Returns:
        The parsed datetime, or None if the value is empty or not a real date
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        parsed = date_parser.parse(text, default=_DEFAULT_A)
        check = date_parser.parse(text, default=_DEFAULT_B)
    except (ValueError, OverflowError):
        return None
    if parsed.date() != check.date():
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def date_timestamp(value: Any) -> float:
    """Timestamp of a date string; missing or unparseable dates count as epoch zero."""
    parsed = parse_calendar_date(value)
    return parsed.timestamp() if parsed else 0.0


class DateSanitizer(BaseSanitizer):
    """
    Keeps a date string (trimmed) when it parses as a calendar date.

    Empty and unparseable values become None (the invalid marker).
    """

    def sanitize(self, value: Any) -> str | None:
        if self.is_blank(value):
            return None
        if parse_calendar_date(value) is None:
            return None
        return str(value).strip()

    @property
    def sanitizer_type(self) -> str:
        return "date"
