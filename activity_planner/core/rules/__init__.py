"""
Validation rule engine and the submission validator built on it.
"""

from .record_validator import RecordValidator
from .rule_config import RULE_PHASES, SchemaRuleBuilder, rules_for_schema
from .rule_engine import RuleEngine

__all__ = [
    "RULE_PHASES",
    "RecordValidator",
    "RuleEngine",
    "SchemaRuleBuilder",
    "rules_for_schema",
]
