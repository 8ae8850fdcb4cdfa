"""
Sanitize-then-validate pipeline for event submissions.
"""

from typing import Any, Mapping

from activity_planner.core.messages import message
from activity_planner.core.models import DEFAULT_LOCALE, RecordSchema, ValidationResult
from activity_planner.core.sanitizers import RichTextSanitizer, sanitizer_for_field
from activity_planner.core.schema import SchemaRegistry
from activity_planner.observability import metrics
from activity_planner.observability.logger import get_logger

from .rule_config import rules_for_schema
from .rule_engine import RuleEngine

logger = get_logger(__name__)


class RecordValidator:
    """
    Turns raw submitted field values into a ValidationResult.

    Sanitization and validation read only the schema registry; nothing is
    persisted here. One rule engine is built per record type at construction.
    """

    def __init__(
        self,
        registry: SchemaRegistry,
        rich_text: RichTextSanitizer,
        default_locale: str = DEFAULT_LOCALE,
    ):
        """
        Initialize the validator.

        Args:
            registry: Schema registry to validate against
            rich_text: Sanitizer used for richtext-role fields
            default_locale: Locale for messages when the caller gives none
        """
        self.registry = registry
        self.rich_text = rich_text
        self.default_locale = default_locale
        self.engines: dict[str, RuleEngine] = {
            schema.record_type: RuleEngine(rules_for_schema(schema)) for schema in registry
        }

    def sanitize(self, schema: RecordSchema, raw: Mapping[str, Any]) -> dict[str, Any]:
        """
        Sanitize every schema field and every extra submitted key.

        Schema fields missing from ``raw`` are sanitized as empty input.
        """
        sanitized: dict[str, Any] = {}
        for field in schema.fields:
            sanitized[field.name] = sanitizer_for_field(field, self.rich_text).sanitize(raw.get(field.name))
        for key, value in raw.items():
            if key not in sanitized:
                sanitized[key] = sanitizer_for_field(None, self.rich_text).sanitize(value)
        return sanitized

    def validate_and_sanitize(
        self,
        record_type: str,
        raw: Mapping[str, Any],
        locale: str | None = None,
    ) -> ValidationResult:
        """
        Sanitize a submission and check it against its schema.

        Every rule is evaluated; errors come out as required-field errors in
        field order, then postcode, date and time format errors.

        Args:
            record_type: Event type key
            raw: Field name -> submitted value
            locale: Message locale (validator default if None)

        Returns:
            ValidationResult with the sanitized data, valid or not
        """
        locale = locale or self.default_locale
        schema = self.registry.get_schema(record_type)
        if schema is None:
            metrics.record_validation("unknown", False)
            logger.info("Rejected submission for unknown event type", extra={"record_type": record_type})
            return ValidationResult(
                is_valid=False,
                errors=[message("unknown_type", locale, record_type=str(record_type))],
                failed_fields=[],
                data={},
            )

        data = self.sanitize(schema, raw)
        failures = self.engines[record_type].evaluate(data, dict(raw))

        errors: list[str] = []
        failed_fields: list[str] = []
        for failure in failures:
            field = schema.get_field(failure.field_name)
            label = field.label(locale) if field else failure.field_name
            errors.append(message(failure.rule_name, locale, label=label))
            failed_fields.append(failure.field_name)
            metrics.record_validation_failure(record_type, failure.rule_name, failure.field_name)

        is_valid = not errors
        metrics.record_validation(record_type, is_valid)
        if not is_valid:
            logger.info(
                "Submission failed validation",
                extra={"record_type": record_type, "error_count": len(errors), "failed_fields": failed_fields},
            )

        return ValidationResult(
            is_valid=is_valid,
            errors=errors,
            failed_fields=failed_fields,
            data=data,
        )
