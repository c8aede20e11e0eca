from __future__ import annotations

from pydantic import Field

from .base import Entity


class TodoItem(Entity):
    title: str
    is_completed: bool = False
    category: str = "Life"
    priority: int = Field(1, ge=0)
