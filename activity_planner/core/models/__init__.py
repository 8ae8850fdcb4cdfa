"""
Core data models for the activity planner.

All models use Pydantic for runtime validation and type safety.
"""

from .event_record import RESERVED_KEYS, EventRecord
from .field_spec import (
    DEFAULT_LOCALE,
    RECORD_TYPES,
    SUPPORTED_LOCALES,
    FieldSpec,
    RecordSchema,
    RecordType,
)
from .store_result import StoreResult
from .validation_result import ValidationResult

__all__ = [
    "DEFAULT_LOCALE",
    "RECORD_TYPES",
    "RESERVED_KEYS",
    "SUPPORTED_LOCALES",
    "EventRecord",
    "FieldSpec",
    "RecordSchema",
    "RecordType",
    "StoreResult",
    "ValidationResult",
]
