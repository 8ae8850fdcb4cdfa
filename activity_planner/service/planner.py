"""
Activity planner service.

Coordinates the flow: sanitize → validate → persist, and the read paths the
presentation layer uses. Everything crossing this boundary is plain data.
"""

from typing import Any, Mapping, Optional

from pydantic import BaseModel

from activity_planner.config import Settings
from activity_planner.core.models import RESERVED_KEYS, StoreResult, ValidationResult
from activity_planner.core.rules import RecordValidator
from activity_planner.core.sanitizers import build_rich_text_sanitizer
from activity_planner.core.schema import SchemaRegistry
from activity_planner.observability.logger import configure_logging, get_logger, log_operation
from activity_planner.storage import EventStore
from activity_planner.utils.validation import (
    InputValidationError,
    validate_event_id,
    validate_record_type,
)

logger = get_logger(__name__)

ALL_EVENTS = "all"


class SubmissionResult(BaseModel):
    """
    Outcome of a create or edit request.

    Attributes:
        validation: Validation outcome (None when the request failed before validation)
        store: Store outcome (None when validation rejected the submission)
    """

    validation: Optional[ValidationResult] = None
    store: Optional[StoreResult] = None

    @property
    def success(self) -> bool:
        return (
            self.validation is not None
            and self.validation.is_valid
            and self.store is not None
            and self.store.success
        )

    @property
    def errors(self) -> list[str]:
        """Messages to show the user, validation errors or the store error."""
        if self.validation is not None and not self.validation.is_valid:
            return list(self.validation.errors)
        if self.store is not None and not self.store.success:
            return [self.store.error or "Operation failed"]
        return []


class ActivityPlanner:
    """
    Caller-facing operations over the validator and the event store.

    Records only reach the store through validate_and_sanitize().
    """

    def __init__(self, registry: SchemaRegistry, validator: RecordValidator, store: EventStore):
        """
        Initialize the planner.

        Args:
            registry: Schema registry
            validator: Submission validator bound to the same registry
            store: Event store
        """
        self.registry = registry
        self.validator = validator
        self.store = store

    async def submit_event(
        self,
        record_type: str,
        raw: Mapping[str, Any],
        locale: str | None = None,
    ) -> SubmissionResult:
        """
        Validate a new event and store it when valid.

        Only the schema's fields are persisted; the record type is stored
        alongside them.
        """
        validation = self.validator.validate_and_sanitize(record_type, raw, locale)
        if not validation.is_valid:
            return SubmissionResult(validation=validation)

        schema = self.registry.get_schema(record_type)
        store_result = await self.store.create(record_type, schema.project(validation.data))
        if store_result.success:
            logger.info("Event submitted", extra={"event_id": store_result.id, "record_type": record_type})
        return SubmissionResult(validation=validation, store=store_result)

    async def edit_event(
        self,
        event_id: Any,
        raw: Mapping[str, Any],
        locale: str | None = None,
    ) -> SubmissionResult:
        """
        Validate changes to a stored event and merge them in.

        The stored fields merged with ``raw`` are validated against the
        event's own schema; only schema fields present in ``raw`` are written.
        The event's id, type and creation time never change.
        """
        try:
            event_id = validate_event_id(event_id)
        except InputValidationError as e:
            return SubmissionResult(store=StoreResult.failure("invalid_request", str(e)))

        found = await self.store.get(event_id)
        if not found.success:
            return SubmissionResult(store=found)

        record = found.record
        schema = self.registry.get_schema(record.type)
        changes = {key: value for key, value in raw.items() if key not in RESERVED_KEYS}

        validation = self.validator.validate_and_sanitize(record.type, {**record.fields, **changes}, locale)
        if not validation.is_valid:
            return SubmissionResult(validation=validation)

        update = {name: validation.data[name] for name in schema.field_names if name in changes}
        store_result = await self.store.update(event_id, update)
        return SubmissionResult(validation=validation, store=store_result)

    async def delete_event(self, event_id: Any) -> StoreResult:
        try:
            event_id = validate_event_id(event_id)
        except InputValidationError as e:
            return StoreResult.failure("invalid_request", str(e))
        return await self.store.delete(event_id)

    async def get_event(self, event_id: Any) -> StoreResult:
        try:
            event_id = validate_event_id(event_id)
        except InputValidationError as e:
            return StoreResult.failure("invalid_request", str(e))
        return await self.store.get(event_id)

    async def list_events(self, record_filter: str = ALL_EVENTS) -> StoreResult:
        """
        List events sorted by date.

        Args:
            record_filter: "all" or one record type
        """
        if record_filter == ALL_EVENTS:
            return await self.store.get_all()
        try:
            record_type = validate_record_type(record_filter, self.registry.record_types())
        except InputValidationError as e:
            return StoreResult.failure("invalid_request", str(e))
        return await self.store.get_by_type(record_type)

    async def reset(self) -> StoreResult:
        return await self.store.clear()


def build_planner(settings: Settings | None = None) -> ActivityPlanner:
    """
    Construct the planner and its collaborators once at startup.

    Args:
        settings: Settings to use (read from the environment if None)

    Returns:
        ActivityPlanner wired to a registry, validator and store
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level, settings.log_format)

    with log_operation("Loading event schemas", logger=logger, schema_file=str(settings.schema_file)):
        registry = SchemaRegistry.from_yaml(settings.schema_file)
    validator = RecordValidator(
        registry,
        build_rich_text_sanitizer(settings.richtext_sanitizer),
        default_locale=settings.locale,
    )
    store = EventStore(settings.db_path)

    logger.info(
        "Activity planner ready",
        extra={"db_path": str(settings.db_path), "richtext_sanitizer": settings.richtext_sanitizer},
    )
    return ActivityPlanner(registry, validator, store)
