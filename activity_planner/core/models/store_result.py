"""
StoreResult model: explicit success/failure outcome of a store operation.
"""

from typing import List, Literal

from pydantic import BaseModel, Field

from .event_record import EventRecord

StoreErrorKind = Literal["not_found", "storage_failure", "invalid_request"]


class StoreResult(BaseModel):
    """
    Outcome of a persistence operation.

    Store operations never raise for expected failures; callers branch on
    ``success`` and ``error_kind`` instead.

    Attributes:
        success: Whether the operation completed
        id: Identifier assigned by create
        record: Single record returned by get
        records: Records returned by list operations
        count: Row count returned by count
        error: Failure message
        error_kind: "not_found", "storage_failure" or "invalid_request"
    """

    success: bool
    id: int | None = None
    record: EventRecord | None = None
    records: List[EventRecord] = Field(default_factory=list)
    count: int | None = None
    error: str | None = None
    error_kind: StoreErrorKind | None = None

    @property
    def not_found(self) -> bool:
        return self.error_kind == "not_found"

    @classmethod
    def ok(cls, **kwargs) -> "StoreResult":
        return cls(success=True, **kwargs)

    @classmethod
    def failure(cls, error_kind: StoreErrorKind, error: str) -> "StoreResult":
        return cls(success=False, error=error, error_kind=error_kind)
