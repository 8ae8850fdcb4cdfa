"""
Schema registry for event record types.

Holds the immutable schema definitions loaded once at startup.
"""

from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Optional

from activity_planner.core.models import RecordSchema
from activity_planner.observability.logger import get_logger

from .schema_config import SchemaConfigLoader

logger = get_logger(__name__)


class SchemaRegistry:
    """
    Registry of record schemas keyed by record type.

    Content is fixed at construction; there is no mutation API.
    """

    def __init__(self, schemas: Iterable[RecordSchema]):
        """
        Initialize schema registry.

        Args:
            schemas: Schema definitions, one per record type
        """
        by_type: dict[str, RecordSchema] = {}
        for schema in schemas:
            if schema.record_type in by_type:
                raise ValueError(f"Duplicate schema for record type '{schema.record_type}'")
            by_type[schema.record_type] = schema
        self._schemas = MappingProxyType(by_type)

    @classmethod
    def from_yaml(cls, config_path: str | Path | None = None) -> "SchemaRegistry":
        """Build a registry from a YAML file (packaged definitions by default)."""
        loader = SchemaConfigLoader(config_path)
        registry = cls(loader.load_schemas())
        logger.info(
            f"Loaded {len(registry)} event schemas",
            extra={"schema_file": str(loader.config_path), "record_types": registry.record_types()},
        )
        return registry

    def get_schema(self, record_type: str) -> Optional[RecordSchema]:
        """
        Get schema by record type.

        Returns:
            RecordSchema or None if the type is unknown
        """
        return self._schemas.get(record_type)

    def has_type(self, record_type: str) -> bool:
        return record_type in self._schemas

    def record_types(self) -> list[str]:
        return list(self._schemas)

    def __len__(self) -> int:
        return len(self._schemas)

    def __iter__(self):
        return iter(self._schemas.values())
