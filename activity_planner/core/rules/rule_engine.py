"""
Rule engine for orchestrating validation rules on one record.

The rule engine builds validators from rule configurations, applies them in
order, and collects every failure without short-circuiting.
"""

from typing import Any

from activity_planner.core.validators import (
    BaseValidator,
    DateFormatValidator,
    RegexValidator,
    RequiredFieldValidator,
    ValidationError,
)


class RuleEngine:
    """
    Applies an ordered list of validation rules to a record.
    """

    VALIDATOR_REGISTRY = {
        "required_field": RequiredFieldValidator,
        "postcode": RegexValidator,
        "date_format": DateFormatValidator,
        "time_format": RegexValidator,
        "regex": RegexValidator,
    }

    def __init__(self, rules: list[dict[str, Any]]):
        """
        Initialize the rule engine with validation rules.

        Args:
            rules: Ordered rule configurations, each containing:
                   - rule_name: str
                   - rule_type: str (required_field, postcode, date_format, time_format, regex)
                   - field_name: str
                   - parameters: Dict[str, Any] (optional)
                   - enabled: bool (default True)
        """
        self.rules = rules
        self.validators: list[tuple[str, BaseValidator]] = []
        self._build_validators()

    def _build_validators(self) -> None:
        """Build validator instances from rule configurations."""
        for rule in self.rules:
            if not rule.get("enabled", True):
                continue

            rule_name = rule["rule_name"]
            rule_type = rule["rule_type"]
            field_name = rule["field_name"]
            parameters = rule.get("parameters", {})

            validator_class = self.VALIDATOR_REGISTRY.get(rule_type)
            if not validator_class:
                raise ValueError(f"Unknown rule type: {rule_type}")

            try:
                validator = validator_class(field_name, parameters)
            except ValueError as e:
                raise ValueError(f"Failed to create validator for rule '{rule_name}': {e}")
            self.validators.append((rule_name, validator))

    def evaluate(
        self,
        data: dict[str, Any],
        raw: dict[str, Any] | None = None,
    ) -> list[ValidationError]:
        """
        Evaluate every rule and return the failures in rule order.

        Args:
            data: Sanitized record
            raw: Record as submitted (for rules that check raw input)

        Returns:
            ValidationError for each failed rule (empty when all pass)
        """
        raw = raw if raw is not None else data
        failures: list[ValidationError] = []

        for _rule_name, validator in self.validators:
            source = raw if validator.checks_raw_input else data
            value = source.get(validator.field_name)
            try:
                validator.validate(value, source)
            except ValidationError as e:
                failures.append(e)

        return failures

    def get_rule_summary(self) -> dict[str, Any]:
        """
        Get summary of loaded rules.

        Returns:
            Dictionary with rule counts by type
        """
        counts: dict[str, int] = {}
        for _, validator in self.validators:
            counts[validator.rule_type] = counts.get(validator.rule_type, 0) + 1
        return {"total_rules": len(self.validators), "rules_by_type": counts}
