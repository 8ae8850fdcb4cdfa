"""
Input validation utilities for caller-supplied identifiers.

Guards the values that select what to operate on (event ids, record types,
locales, CLI field assignments) before they reach the store.
"""

from typing import Any, Iterable

from activity_planner.core.models import RECORD_TYPES, SUPPORTED_LOCALES


class InputValidationError(ValueError):
    """Raised when input validation fails."""
    pass


def validate_event_id(event_id: Any, field_name: str = "event_id") -> int:
    """
    Validate an event ID.

    Event IDs are positive integers; digit strings are accepted.

    Args:
        event_id: The event ID to validate
        field_name: Name of the field (for error messages)

    Returns:
        The event ID as an int

    Raises:
        InputValidationError: If validation fails

    Examples:
        >>> validate_event_id(3)
        3
        >>> validate_event_id(" 12 ")
        12
    """
    if isinstance(event_id, bool):
        raise InputValidationError(f"{field_name} must be a positive integer")

    if isinstance(event_id, str):
        text = event_id.strip()
        if not text.isdigit():
            raise InputValidationError(f"{field_name} must be a positive integer, got '{event_id}'")
        event_id = int(text)

    if not isinstance(event_id, int) or event_id <= 0:
        raise InputValidationError(f"{field_name} must be a positive integer, got {event_id!r}")

    return event_id


def validate_record_type(record_type: Any, allowed: Iterable[str] = RECORD_TYPES) -> str:
    """
    Validate a record type key.

    Raises:
        InputValidationError: If the type is not one of the allowed keys
    """
    allowed = tuple(allowed)
    if not isinstance(record_type, str) or record_type.strip() not in allowed:
        raise InputValidationError(
            f"record type must be one of: {', '.join(allowed)}, got {record_type!r}"
        )
    return record_type.strip()


def validate_locale(locale: Any) -> str:
    """
    Validate a locale code.

    Raises:
        InputValidationError: If the locale is not supported
    """
    if not isinstance(locale, str) or locale.strip().lower() not in SUPPORTED_LOCALES:
        raise InputValidationError(
            f"locale must be one of: {', '.join(SUPPORTED_LOCALES)}, got {locale!r}"
        )
    return locale.strip().lower()


def parse_field_assignments(assignments: Iterable[str] | None) -> dict[str, str]:
    """
    Parse ``name=value`` strings into a mapping.

    The value may be empty or contain further ``=`` characters; later
    assignments to the same name win.

    Examples:
        >>> parse_field_assignments(["bride=Ada", "place=Town Hall"])
        {'bride': 'Ada', 'place': 'Town Hall'}

    Raises:
        InputValidationError: If an item has no ``=`` or an empty name
    """
    fields: dict[str, str] = {}
    for item in assignments or []:
        name, sep, value = item.partition("=")
        name = name.strip()
        if not sep or not name:
            raise InputValidationError(f"field must be given as name=value, got '{item}'")
        fields[name] = value
    return fields
