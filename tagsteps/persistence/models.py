"""Data models for persisted instance state."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class TransitionRecord(BaseModel):
    """Record of a status transition applied to an instance."""

    id: Optional[int] = None
    instance_id: str
    transition: str
    from_status: str
    to_status: str
    applied_at: Optional[datetime] = None


class Instance(BaseModel):
    """Persisted workflow instance with a store-controlled status."""

    id: str
    definition: str = ""
    status: str
    fields: dict[str, Any] = Field(default_factory=dict)
    history: list[TransitionRecord] = Field(default_factory=list)


class InstanceFilter(BaseModel):
    """Subset of instances to read; unset criteria match everything."""

    ids: Optional[list[str]] = None
    status: Optional[str] = None
    definition: Optional[str] = None

    def matches(self, instance: Instance) -> bool:
        if self.ids is not None and instance.id not in self.ids:
            return False
        if self.status is not None and instance.status != self.status:
            return False
        if self.definition is not None and instance.definition != self.definition:
            return False
        return True
