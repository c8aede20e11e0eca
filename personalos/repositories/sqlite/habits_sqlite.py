from __future__ import annotations

from ...domain.entities import HabitItem
from .base_sqlite import SqliteRepository


class HabitsRepoSqlite(SqliteRepository[HabitItem]):
    """SQLite repository for :class:`HabitItem`."""

    entity_type = HabitItem
    table = "habits"
