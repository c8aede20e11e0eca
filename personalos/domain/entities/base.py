from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..value_objects.ids import EntityId, new_entity_id


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Entity(BaseModel):
    """Persisted record with a stable identity and a timestamp pair.

    ``id`` cannot be reassigned once the entity exists. ``updated_at`` never
    precedes ``created_at``; when only ``created_at`` is supplied the two
    start out equal.
    """

    id: EntityId = Field(default_factory=new_entity_id, frozen=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(validate_assignment=True)

    @model_validator(mode="before")
    @classmethod
    def _default_updated_at(cls, data: Any) -> Any:
        if isinstance(data, dict) and "created_at" in data and "updated_at" not in data:
            data = {**data, "updated_at": data["created_at"]}
        return data

    @field_validator("created_at", "updated_at")
    @classmethod
    def _ensure_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            raise ValueError("entity timestamps must be timezone-aware")
        return v.astimezone(timezone.utc)

    @model_validator(mode="after")
    def _check_timestamp_order(self) -> "Entity":
        if self.updated_at < self.created_at:
            raise ValueError("updated_at cannot precede created_at")
        return self
