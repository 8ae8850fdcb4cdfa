"""
RegexValidator - validates field values against a regular expression pattern.
"""

import re
from re import Pattern
from typing import Any

from .base_validator import BaseValidator, ValidationError


class RegexValidator(BaseValidator):
    """
    Validates that a field value matches a regular expression pattern.

    Parameters:
    - pattern: Regular expression pattern (string or compiled Pattern)
    - flags: Optional regex flags (e.g., re.IGNORECASE)
    - rule_type: Rule type reported on failure (default "regex")
    - raw_input: Validate the submitted value instead of the sanitized one

    Empty values always pass; presence is the required-field rule's job.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        pattern = self.parameters.get("pattern")
        if not pattern:
            raise ValueError("RegexValidator requires 'pattern' parameter")

        flags = self.parameters.get("flags", 0)

        try:
            if isinstance(pattern, str):
                self.pattern: Pattern = re.compile(pattern, flags)
            elif isinstance(pattern, Pattern):
                self.pattern = pattern
            else:
                raise ValueError(f"Pattern must be string or compiled Pattern, got {type(pattern)}")
        except re.error as e:
            raise ValueError(f"Invalid regex pattern: {e}")

        self._rule_type = self.parameters.get("rule_type", "regex")
        self.checks_raw_input = bool(self.parameters.get("raw_input", False))

    def validate(self, value: Any, record: dict[str, Any]) -> None:
        """
        Validate that the value matches the regex pattern.

        Args:
            value: The field value to validate
            record: The entire record

        Raises:
            ValidationError: If value doesn't match the pattern
        """
        if value is None or value == "":
            return

        value_str = value if isinstance(value, str) else str(value)

        if not self.pattern.match(value_str):
            raise ValidationError(
                rule_name=self._rule_type,
                field_name=self.field_name,
                message=f"Value '{value_str}' does not match pattern '{self.pattern.pattern}'"
            )

    @property
    def rule_type(self) -> str:
        return self._rule_type
