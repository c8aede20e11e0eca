from __future__ import annotations

from ...domain.entities import CodeSnippet
from .base_sqlite import SqliteRepository


class SnippetsRepoSqlite(SqliteRepository[CodeSnippet]):
    """SQLite repository for :class:`CodeSnippet`."""

    entity_type = CodeSnippet
    table = "code_snippets"
