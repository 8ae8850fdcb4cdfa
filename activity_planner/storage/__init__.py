"""
Local persistence for event records.
"""

from .event_store import SCHEMA_VERSION, EventStore, sort_by_date, utc_now_iso

__all__ = [
    "SCHEMA_VERSION",
    "EventStore",
    "sort_by_date",
    "utc_now_iso",
]
