"""
Runtime settings read from the environment (and an optional .env file).
"""

import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel

from activity_planner.core.models import DEFAULT_LOCALE
from activity_planner.core.schema import DEFAULT_SCHEMA_PATH

DEFAULT_DB_PATH = Path("data") / "activity_planner.sqlite3"


class Settings(BaseModel):
    """
    Application settings.

    Attributes:
        db_path: SQLite database file
        schema_file: YAML file with the event schema definitions
        richtext_sanitizer: "allowlist" (keep formatting tags) or "escape"
        locale: Default locale for validation messages
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_format: "json" or "text"
    """

    db_path: Path = DEFAULT_DB_PATH
    schema_file: Path = DEFAULT_SCHEMA_PATH
    richtext_sanitizer: Literal["allowlist", "escape"] = "allowlist"
    locale: Literal["en", "tr"] = DEFAULT_LOCALE
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "text"] = "json"

    class Config:
        json_schema_extra = {
            "example": {
                "db_path": "data/activity_planner.sqlite3",
                "richtext_sanitizer": "allowlist",
                "locale": "en",
                "log_level": "INFO",
                "log_format": "json",
            }
        }

    @classmethod
    def from_env(cls, env_file: str | Path | None = None, **overrides) -> "Settings":
        """
        Build settings from environment variables.

        Variables: ACTIVITY_DB_PATH, ACTIVITY_SCHEMA_FILE,
        ACTIVITY_RICHTEXT_SANITIZER, ACTIVITY_LOCALE, LOG_LEVEL, LOG_FORMAT.
        Explicit keyword overrides win over the environment; None values are
        ignored.

        Raises:
            pydantic.ValidationError: If a value is not allowed
        """
        if env_file is not None:
            load_dotenv(env_file, override=False)
        else:
            load_dotenv(override=False)

        values: dict = {}
        env_map = {
            "db_path": "ACTIVITY_DB_PATH",
            "schema_file": "ACTIVITY_SCHEMA_FILE",
            "richtext_sanitizer": "ACTIVITY_RICHTEXT_SANITIZER",
            "locale": "ACTIVITY_LOCALE",
            "log_level": "LOG_LEVEL",
            "log_format": "LOG_FORMAT",
        }
        for field_name, env_name in env_map.items():
            raw = os.getenv(env_name, "").strip()
            if not raw:
                continue
            if field_name == "log_level":
                raw = raw.upper()
            elif field_name in ("richtext_sanitizer", "locale", "log_format"):
                raw = raw.lower()
            values[field_name] = raw

        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)
