from __future__ import annotations

from pydantic import Field

from .base import Entity


class HabitItem(Entity):
    title: str
    icon: str
    is_completed: bool = False
    streak: int = Field(0, ge=0, description="Consecutive days the habit was completed")
