"""
DateFormatValidator - submitted dates must parse as a calendar date.
"""

from typing import Any

from activity_planner.core.sanitizers import parse_calendar_date

from .base_validator import BaseValidator, ValidationError


class DateFormatValidator(BaseValidator):
    """
    Fails when a non-empty submitted value is not a real date.

    Runs on the raw input: the sanitizer has already replaced a bad date with
    None, which on its own is indistinguishable from an empty field.
    """

    checks_raw_input = True

    def validate(self, value: Any, record: dict[str, Any]) -> None:
        if value is None or str(value).strip() == "":
            return

        if parse_calendar_date(value) is None:
            raise ValidationError(
                rule_name="date_format",
                field_name=self.field_name,
                message=f"Value '{value}' is not a valid date"
            )

    @property
    def rule_type(self) -> str:
        return "date_format"
