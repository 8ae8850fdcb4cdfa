"""
SQLite event store.

One logical collection ("events") keyed by an auto-incrementing id, with a
secondary index on record type. Operations are async and run the blocking
SQLite work in a worker thread. Expected failures are returned as
StoreResult values, never raised.
"""

from __future__ import annotations

import asyncio
import json
import sqlite3
import threading
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

from activity_planner.core.models import RECORD_TYPES, RESERVED_KEYS, EventRecord, StoreResult
from activity_planner.core.sanitizers import date_timestamp
from activity_planner.observability import metrics
from activity_planner.observability.logger import get_logger

logger = get_logger(__name__)

SCHEMA_VERSION = 1

_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS events (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    type TEXT NOT NULL,
    date TEXT,
    fields_json TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT
);

CREATE INDEX IF NOT EXISTS idx_events_type ON events(type);
CREATE INDEX IF NOT EXISTS idx_events_date ON events(date);

-- Reserved free-text lookup index; not populated or queried yet.
CREATE TABLE IF NOT EXISTS event_search_fields (
    event_id INTEGER NOT NULL,
    term TEXT NOT NULL,
    FOREIGN KEY(event_id) REFERENCES events(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_event_search_fields_term ON event_search_fields(term);
"""

_SELECT_COLUMNS = "id, type, fields_json, created_at, updated_at"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _to_json(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"), default=str)


def _from_json(raw: str | None, default: Any) -> Any:
    if not raw:
        return default
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return default


def _strip_reserved(fields: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in fields.items() if key not in RESERVED_KEYS}


def _non_text_fields(fields: dict[str, Any]) -> list[str]:
    """Names of fields whose value is not a string or None (not storable)."""
    invalid = []
    for key, value in fields.items():
        if key in RESERVED_KEYS:
            continue
        if not isinstance(key, str) or not (value is None or isinstance(value, str)):
            invalid.append(str(key))
    return sorted(invalid)


def _row_to_record(row: tuple) -> EventRecord:
    return EventRecord(
        id=row[0],
        type=row[1],
        fields=_from_json(row[2], {}),
        created_at=row[3],
        updated_at=row[4],
    )


def sort_by_date(records: list[EventRecord]) -> list[EventRecord]:
    """
    Sort ascending by the date field parsed as a timestamp.

    Missing or unparseable dates sort as epoch zero; ties keep insertion
    (id) order.
    """
    return sorted(records, key=lambda record: (date_timestamp(record.get("date")), record.id))


class _NotFound(Exception):
    pass


class EventStore:
    """
    Durable keyed storage for event records.

    A lock serializes access within the process; concurrent updates to the
    same id resolve as last write wins.
    """

    def __init__(self, db_path: str | Path, clock: Callable[[], str] | None = None) -> None:
        """
        Initialize the store and create its tables if needed.

        Args:
            db_path: SQLite database file
            clock: Returns the current ISO-8601 timestamp (UTC now by default)

        Raises:
            sqlite3.Error, OSError: If the database cannot be initialized
        """
        self._db_path = Path(db_path)
        self._clock = clock or utc_now_iso
        self._lock = threading.Lock()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    @property
    def db_path(self) -> Path:
        return self._db_path

    @contextmanager
    def _connect(self):
        """Open a connection; commit on success, roll back on error, always close."""
        conn = sqlite3.connect(self._db_path, timeout=5.0)
        try:
            conn.execute("PRAGMA journal_mode=WAL;")
            conn.execute("PRAGMA foreign_keys=ON;")
            with conn:
                yield conn
        finally:
            conn.close()

    def _init_schema(self) -> None:
        with self._lock, self._connect() as conn:
            version = conn.execute("PRAGMA user_version").fetchone()[0]
            if version > SCHEMA_VERSION:
                raise sqlite3.DatabaseError(
                    f"event store version {version} is newer than supported version {SCHEMA_VERSION}"
                )
            conn.executescript(_SCHEMA_SQL)
            conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")

    async def _run(self, operation: str, func: Callable[..., StoreResult], *args: Any) -> StoreResult:
        """Run a blocking operation in a worker thread and map failures to results."""
        start = time.perf_counter()
        try:
            result = await asyncio.to_thread(func, *args)
        except _NotFound as e:
            result = StoreResult.failure("not_found", str(e))
        except (sqlite3.Error, OSError, ValueError) as e:
            logger.error(
                f"Store operation failed: {operation}",
                extra={"operation": operation, "error_type": type(e).__name__, "error_message": str(e)},
            )
            result = StoreResult.failure("storage_failure", f"{operation} failed: {e}")

        status = "success" if result.success else result.error_kind
        metrics.record_store_operation(operation, status, time.perf_counter() - start)
        return result

    # ------------------------------------------------------------------
    # Blocking implementations
    # ------------------------------------------------------------------

    def _create(self, record_type: str, fields: dict[str, Any]) -> StoreResult:
        payload = _strip_reserved(fields)
        created_at = self._clock()
        with self._lock, self._connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO events (type, date, fields_json, created_at)
                VALUES (?, ?, ?, ?)
                """,
                (record_type, payload.get("date"), _to_json(payload), created_at),
            )
            event_id = cursor.lastrowid
        logger.info("Event created", extra={"event_id": event_id, "record_type": record_type})
        return StoreResult.ok(id=event_id)

    def _get(self, event_id: int) -> StoreResult:
        with self._lock, self._connect() as conn:
            row = conn.execute(
                f"SELECT {_SELECT_COLUMNS} FROM events WHERE id = ?",
                (event_id,),
            ).fetchone()
        if row is None:
            raise _NotFound(f"event {event_id} not found")
        return StoreResult.ok(record=_row_to_record(row))

    def _get_all(self) -> StoreResult:
        with self._lock, self._connect() as conn:
            rows = conn.execute(f"SELECT {_SELECT_COLUMNS} FROM events ORDER BY id ASC").fetchall()
        records = sort_by_date([_row_to_record(row) for row in rows])

        counts = {record_type: 0 for record_type in RECORD_TYPES}
        for record in records:
            counts[record.type] += 1
        metrics.record_type_counts(counts)

        return StoreResult.ok(records=records)

    def _get_by_type(self, record_type: str) -> StoreResult:
        with self._lock, self._connect() as conn:
            rows = conn.execute(
                f"SELECT {_SELECT_COLUMNS} FROM events WHERE type = ? ORDER BY id ASC",
                (record_type,),
            ).fetchall()
        return StoreResult.ok(records=sort_by_date([_row_to_record(row) for row in rows]))

    def _update(self, event_id: int, changes: dict[str, Any]) -> StoreResult:
        changes = _strip_reserved(changes)
        with self._lock, self._connect() as conn:
            row = conn.execute("SELECT fields_json FROM events WHERE id = ?", (event_id,)).fetchone()
            if row is None:
                raise _NotFound(f"event {event_id} not found")

            merged = {**_from_json(row[0], {}), **changes}
            conn.execute(
                """
                UPDATE events
                SET date = ?, fields_json = ?, updated_at = ?
                WHERE id = ?
                """,
                (merged.get("date"), _to_json(merged), self._clock(), event_id),
            )
        logger.info("Event updated", extra={"event_id": event_id, "changed_fields": sorted(changes)})
        return StoreResult.ok(id=event_id)

    def _delete(self, event_id: int) -> StoreResult:
        with self._lock, self._connect() as conn:
            cursor = conn.execute("DELETE FROM events WHERE id = ?", (event_id,))
            if cursor.rowcount == 0:
                raise _NotFound(f"event {event_id} not found")
        logger.info("Event deleted", extra={"event_id": event_id})
        return StoreResult.ok(id=event_id)

    def _clear(self) -> StoreResult:
        with self._lock, self._connect() as conn:
            cursor = conn.execute("DELETE FROM events")
            conn.execute("DELETE FROM event_search_fields")
        logger.warning("Event store cleared", extra={"deleted": cursor.rowcount})
        return StoreResult.ok(count=cursor.rowcount)

    def _count(self) -> StoreResult:
        with self._lock, self._connect() as conn:
            total = conn.execute("SELECT COUNT(*) FROM events").fetchone()[0]
        return StoreResult.ok(count=total)

    # ------------------------------------------------------------------
    # Public async API
    # ------------------------------------------------------------------

    async def create(self, record_type: str, fields: dict[str, Any]) -> StoreResult:
        """
        Store a new record.

        The store assigns the id and stamps ``created_at``; reserved keys in
        ``fields`` are ignored.

        Returns:
            StoreResult with ``id`` set; invalid_request for an unknown type
            or non-text values; storage_failure if the write fails
        """
        if record_type not in RECORD_TYPES:
            return StoreResult.failure("invalid_request", f"unknown record type: {record_type}")
        invalid = _non_text_fields(fields)
        if invalid:
            return StoreResult.failure("invalid_request", f"field values must be text: {', '.join(invalid)}")
        return await self._run("create", self._create, record_type, dict(fields))

    async def get(self, event_id: int) -> StoreResult:
        """Fetch one record (``record``), or a not_found result."""
        return await self._run("get", self._get, event_id)

    async def get_all(self) -> StoreResult:
        """All records (``records``), sorted ascending by date."""
        return await self._run("get_all", self._get_all)

    async def get_by_type(self, record_type: str) -> StoreResult:
        """Records of one type (``records``), sorted ascending by date."""
        return await self._run("get_by_type", self._get_by_type, record_type)

    async def update(self, event_id: int, changes: dict[str, Any]) -> StoreResult:
        """
        Merge partial field changes into a stored record and stamp ``updated_at``.

        Fields absent from ``changes`` are left untouched; ``id``, ``type`` and
        ``created_at`` cannot be changed.

        Returns:
            Success, not_found, invalid_request (non-text values) or
            storage_failure result
        """
        invalid = _non_text_fields(changes)
        if invalid:
            return StoreResult.failure("invalid_request", f"field values must be text: {', '.join(invalid)}")
        return await self._run("update", self._update, event_id, dict(changes))

    async def delete(self, event_id: int) -> StoreResult:
        """Permanently delete a record; not_found if it does not exist."""
        return await self._run("delete", self._delete, event_id)

    async def clear(self) -> StoreResult:
        """Delete every record (reset utility). ``count`` holds the number removed."""
        return await self._run("clear", self._clear)

    async def count(self) -> StoreResult:
        return await self._run("count", self._count)
