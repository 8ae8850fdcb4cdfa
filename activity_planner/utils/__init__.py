"""
Shared input guards.
"""

from .validation import (
    InputValidationError,
    parse_field_assignments,
    validate_event_id,
    validate_locale,
    validate_record_type,
)

__all__ = [
    "InputValidationError",
    "parse_field_assignments",
    "validate_event_id",
    "validate_locale",
    "validate_record_type",
]
