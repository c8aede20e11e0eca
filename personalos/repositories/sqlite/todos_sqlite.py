from __future__ import annotations

from ...domain.entities import TodoItem
from .base_sqlite import SqliteRepository


class TodosRepoSqlite(SqliteRepository[TodoItem]):
    """SQLite repository for :class:`TodoItem`."""

    entity_type = TodoItem
    table = "todos"

    def fetch_pending(self) -> list[TodoItem]:
        return self.fetch(lambda t: not t.is_completed)

    def fetch_completed(self) -> list[TodoItem]:
        return self.fetch(lambda t: t.is_completed)
