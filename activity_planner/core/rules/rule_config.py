"""
Rule configuration management.

Derives the validation rules of a record schema from its field specifications.
"""

from typing import Any

from activity_planner.core.models import RecordSchema
from activity_planner.core.sanitizers.postcode_sanitizer import UK_POSTCODE_PATTERN
from activity_planner.core.sanitizers.time_sanitizer import TIME_PATTERN

# Rules run phase by phase: every required-field rule first, then postcode,
# date and time format rules.
RULE_PHASES = ("required_field", "postcode", "date_format", "time_format")


class SchemaRuleBuilder:
    """
    Build rule configurations programmatically.

    Usage:
        rules = SchemaRuleBuilder().add_required_field("date").add_postcode("postcode").build()
    """

    def __init__(self):
        """Initialize empty rule configuration."""
        self.rules: list[dict[str, Any]] = []

    def add_required_field(self, field_name: str) -> "SchemaRuleBuilder":
        """Add a required field rule."""
        self.rules.append({
            "rule_name": f"{field_name}_required",
            "rule_type": "required_field",
            "field_name": field_name,
            "parameters": {},
            "enabled": True,
        })
        return self

    def add_postcode(self, field_name: str) -> "SchemaRuleBuilder":
        """Add a UK postcode format rule (checked on the sanitized value)."""
        self.rules.append({
            "rule_name": f"{field_name}_postcode",
            "rule_type": "postcode",
            "field_name": field_name,
            "parameters": {"pattern": UK_POSTCODE_PATTERN, "rule_type": "postcode"},
            "enabled": True,
        })
        return self

    def add_date_format(self, field_name: str) -> "SchemaRuleBuilder":
        """Add a calendar date rule (checked on the submitted value)."""
        self.rules.append({
            "rule_name": f"{field_name}_date_format",
            "rule_type": "date_format",
            "field_name": field_name,
            "parameters": {},
            "enabled": True,
        })
        return self

    def add_time_format(self, field_name: str) -> "SchemaRuleBuilder":
        """Add an HH:MM rule (checked on the submitted value)."""
        self.rules.append({
            "rule_name": f"{field_name}_time_format",
            "rule_type": "time_format",
            "field_name": field_name,
            "parameters": {"pattern": TIME_PATTERN, "rule_type": "time_format", "raw_input": True},
            "enabled": True,
        })
        return self

    def build(self) -> list[dict[str, Any]]:
        """Build and return the rule configuration, ordered by phase."""
        return sorted(self.rules, key=lambda rule: RULE_PHASES.index(rule["rule_type"]))


def rules_for_schema(schema: RecordSchema) -> list[dict[str, Any]]:
    """
    Derive the validation rules of a schema.

    Required fields get a required-field rule in declaration order; postcode,
    date and time fields get a format rule from their role or kind.
    """
    builder = SchemaRuleBuilder()
    for field in schema.fields:
        if field.required:
            builder.add_required_field(field.name)
    for field in schema.fields:
        if field.role == "postcode":
            builder.add_postcode(field.name)
        if field.kind == "date":
            builder.add_date_format(field.name)
        elif field.kind == "time":
            builder.add_time_format(field.name)
    return builder.build()
