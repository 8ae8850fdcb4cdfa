"""
Pytest configuration and fixtures for activity-planner tests

This module provides shared fixtures for unit and integration tests.
"""
import os
from datetime import datetime, timedelta, timezone

import pytest

from activity_planner.core.rules import RecordValidator
from activity_planner.core.sanitizers import AllowListHtmlSanitizer
from activity_planner.core.schema import SchemaRegistry
from activity_planner.service import ActivityPlanner
from activity_planner.storage import EventStore


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't touch the filesystem beyond tmp_path"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that run the service or CLI end to end"
    )


# =======================
# CLOCK
# =======================

class FakeClock:
    """Deterministic clock: every call is one second after the previous one."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> str:
        self.current += timedelta(seconds=1)
        return self.current.isoformat()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# =======================
# CORE FIXTURES
# =======================

@pytest.fixture(scope="session")
def registry() -> SchemaRegistry:
    """Registry loaded from the packaged schema definitions"""
    return SchemaRegistry.from_yaml()


@pytest.fixture
def validator(registry) -> RecordValidator:
    return RecordValidator(registry, AllowListHtmlSanitizer())


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "events.sqlite3"


@pytest.fixture
def store(db_path, clock) -> EventStore:
    return EventStore(db_path, clock=clock)


@pytest.fixture
def planner(registry, validator, store) -> ActivityPlanner:
    return ActivityPlanner(registry, validator, store)


# =======================
# SAMPLE SUBMISSIONS
# =======================

VALID_SUBMISSIONS = {
    "wedding": {"date": "2025-06-01", "bride": "Ada", "groom": "Alan", "place": "Hall"},
    "funeral": {"date": "2025-03-10", "deceased": "John Smith", "place": "Chapel", "time": "14:00"},
    "breakfast": {"date": "2025-04-20", "time": "09:30", "host": "Mary", "place": "Community Centre"},
    "musical": {
        "date": "2025-07-04",
        "time": "19:00",
        "performer": "The Quartet",
        "eventName": "Summer Evening",
        "place": "Town Hall",
    },
}


@pytest.fixture
def valid_submissions() -> dict:
    return {record_type: dict(fields) for record_type, fields in VALID_SUBMISSIONS.items()}


# =======================
# CONFIGURATION FIXTURES
# =======================

SETTINGS_ENV_VARS = (
    "ACTIVITY_DB_PATH",
    "ACTIVITY_SCHEMA_FILE",
    "ACTIVITY_RICHTEXT_SANITIZER",
    "ACTIVITY_LOCALE",
    "LOG_LEVEL",
    "LOG_FORMAT",
)


@pytest.fixture
def clean_env():
    """
    Remove settings variables before and after a test

    load_dotenv() writes straight into os.environ, so values loaded by one
    test must not leak into the next.
    """
    saved = {name: os.environ.pop(name) for name in SETTINGS_ENV_VARS if name in os.environ}
    yield
    for name in SETTINGS_ENV_VARS:
        os.environ.pop(name, None)
    os.environ.update(saved)
