"""
Event schema definitions and registry.
"""

from .registry import SchemaRegistry
from .schema_config import DEFAULT_SCHEMA_PATH, SchemaConfigLoader

__all__ = [
    "DEFAULT_SCHEMA_PATH",
    "SchemaConfigLoader",
    "SchemaRegistry",
]
