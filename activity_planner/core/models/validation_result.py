"""
ValidationResult model representing the outcome of validating a submission (ephemeral).
"""

from typing import Any, List

from pydantic import BaseModel, Field, field_validator


class ValidationResult(BaseModel):
    """
    Outcome of sanitizing and validating one submission.

    Note: ValidationResult is ephemeral, never persisted. ``data`` is filled
    even when validation fails so the caller can redisplay cleaned input.

    Attributes:
        is_valid: Overall validation status
        errors: Human-readable messages, required-field errors first, then
            postcode, date and time format errors
        failed_fields: Machine names of the fields behind each error
        data: Sanitized value for every schema field and submitted key
    """

    is_valid: bool
    errors: List[str] = Field(default_factory=list)
    failed_fields: List[str] = Field(default_factory=list)
    data: dict[str, Any] = Field(default_factory=dict)

    @field_validator('errors')
    @classmethod
    def check_valid_consistency(cls, v, info):
        """Validate that is_valid matches the presence of errors."""
        if info.data.get('is_valid') and len(v) > 0:
            raise ValueError("is_valid=True but errors is not empty")
        if info.data.get('is_valid') is False and len(v) == 0:
            raise ValueError("is_valid=False but errors is empty")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "is_valid": False,
                "errors": ["Deceased Name is required", "Invalid UK postcode format"],
                "failed_fields": ["deceased", "postcode"],
                "data": {
                    "date": "2025-06-01",
                    "deceased": "",
                    "place": "Chapel",
                    "time": "14:00",
                    "postcode": "12345",
                    "notes": "",
                },
            }
        }
