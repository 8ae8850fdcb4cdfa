"""
Validation rule implementations.

Provides validators for required fields, regex patterns (postcode and time
formats) and calendar dates.
"""

from .base_validator import BaseValidator, ValidationError
from .date_format_validator import DateFormatValidator
from .regex_validator import RegexValidator
from .required_field_validator import RequiredFieldValidator

__all__ = [
    "BaseValidator",
    "ValidationError",
    "RequiredFieldValidator",
    "RegexValidator",
    "DateFormatValidator",
]
