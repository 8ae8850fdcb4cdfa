"""
EventRecord model representing one persisted activity.
"""

from typing import Any

from pydantic import BaseModel, Field

from .field_spec import RecordType

# Keys owned by the store; never taken from caller-supplied field mappings.
RESERVED_KEYS = frozenset({"id", "type", "createdAt", "updatedAt", "created_at", "updated_at"})


class EventRecord(BaseModel):
    """
    A stored event.

    Attributes:
        id: Store-assigned identifier, never reused
        type: Record type, immutable after creation
        fields: Field name -> normalized value (string or None)
        created_at: ISO-8601 creation timestamp
        updated_at: ISO-8601 timestamp of the last update (None until updated)
    """

    id: int = Field(..., ge=1)
    type: RecordType
    fields: dict[str, str | None] = Field(default_factory=dict)
    created_at: str
    updated_at: str | None = None

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "type": "wedding",
                "fields": {
                    "date": "2025-06-01",
                    "bride": "Ada",
                    "groom": "Alan",
                    "place": "Hall",
                    "postcode": "",
                },
                "created_at": "2025-05-01T10:00:00+00:00",
                "updated_at": None,
            }
        }

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)

    def to_dict(self) -> dict[str, Any]:
        """Flatten into the caller-facing shape (fields at top level)."""
        flat: dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            **self.fields,
            "createdAt": self.created_at,
        }
        if self.updated_at is not None:
            flat["updatedAt"] = self.updated_at
        return flat
