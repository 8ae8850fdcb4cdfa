"""
Schema configuration management.

Loads event schema definitions from YAML files.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from activity_planner.core.models import RECORD_TYPES, FieldSpec, RecordSchema

DEFAULT_SCHEMA_PATH = Path(__file__).resolve().parent / "event_schemas.yaml"
SUPPORTED_SCHEMA_VERSION = 1


class SchemaConfigLoader:
    """
    Loads event schemas from YAML configuration files.

    Expected YAML format:
    ```yaml
    version: 1
    schemas:
      wedding:
        title: {en: "Add New Wedding", tr: "Yeni Düğün Ekle"}
        icon: heart-fill
        fields:
          - {name: date, kind: date, required: true, labels: {en: Date, tr: Tarih}}
          - {name: postcode, kind: text, role: postcode}
    ```
    """

    def __init__(self, config_path: str | Path | None = None):
        """
        Initialize the schema config loader.

        Args:
            config_path: Path to the YAML file (packaged definitions if None)
        """
        self.config_path = Path(config_path) if config_path else DEFAULT_SCHEMA_PATH
        if not self.config_path.exists():
            raise FileNotFoundError(f"Schema configuration file not found: {self.config_path}")

    def load_schemas(self) -> list[RecordSchema]:
        """
        Load and parse event schemas from the YAML file.

        Returns:
            RecordSchema objects in file order

        Raises:
            ValueError: If YAML is invalid or a definition is malformed
        """
        with open(self.config_path, encoding="utf-8") as f:
            try:
                config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {self.config_path}: {e}")

        if not config or "schemas" not in config:
            raise ValueError("Configuration file must contain 'schemas' section")

        version = config.get("version", SUPPORTED_SCHEMA_VERSION)
        if version != SUPPORTED_SCHEMA_VERSION:
            raise ValueError(
                f"Unsupported schema file version {version!r} (expected {SUPPORTED_SCHEMA_VERSION})"
            )

        schemas = []
        for record_type, schema_def in config["schemas"].items():
            schemas.append(self._parse_schema(record_type, schema_def))

        return schemas

    def _parse_schema(self, record_type: str, schema_def: dict[str, Any]) -> RecordSchema:
        """
        Parse a single schema definition.

        Raises:
            ValueError: If the definition is invalid
        """
        if record_type not in RECORD_TYPES:
            raise ValueError(
                f"Unknown record type '{record_type}'. Must be one of: {', '.join(RECORD_TYPES)}"
            )

        if not isinstance(schema_def, dict) or not isinstance(schema_def.get("fields"), list):
            raise ValueError(f"Schema '{record_type}' must define a 'fields' list")

        try:
            fields = tuple(FieldSpec(**field_def) for field_def in schema_def["fields"])
            return RecordSchema(
                record_type=record_type,
                fields=fields,
                titles=schema_def.get("title", {}),
                icon=schema_def.get("icon"),
            )
        except (PydanticValidationError, TypeError) as e:
            raise ValueError(f"Invalid schema definition for '{record_type}': {e}")
