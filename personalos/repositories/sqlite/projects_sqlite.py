from __future__ import annotations

from ...domain.entities import ProjectItem
from ...domain.value_objects.enums import ProjectStatus
from .base_sqlite import SqliteRepository


class ProjectsRepoSqlite(SqliteRepository[ProjectItem]):
    """SQLite repository for :class:`ProjectItem`."""

    entity_type = ProjectItem
    table = "projects"

    def fetch_active(self) -> list[ProjectItem]:
        return self.fetch(lambda p: p.status is ProjectStatus.ACTIVE)
