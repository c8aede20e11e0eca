"""One repository per entity kind, all sharing a single store serializer."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

from .sqlite.base_sqlite import SqliteRepository
from .sqlite.habits_sqlite import HabitsRepoSqlite
from .sqlite.news_sqlite import NewsRepoSqlite, RSSFeedsRepoSqlite
from .sqlite.projects_sqlite import ProjectsRepoSqlite
from .sqlite.serializer import StoreSerializer
from .sqlite.snippets_sqlite import SnippetsRepoSqlite
from .sqlite.todos_sqlite import TodosRepoSqlite
from .sqlite.trading_sqlite import AssetsRepoSqlite, TradesRepoSqlite


@dataclass(frozen=True)
class Repositories:
    todo: TodosRepoSqlite
    habit: HabitsRepoSqlite
    project: ProjectsRepoSqlite
    asset: AssetsRepoSqlite
    trade: TradesRepoSqlite
    news: NewsRepoSqlite
    rss_feed: RSSFeedsRepoSqlite
    code_snippet: SnippetsRepoSqlite

    @classmethod
    def build(cls, serializer: StoreSerializer) -> "Repositories":
        """Create every repository over ``serializer``, creating missing tables.

        The serializer must already be configured.
        """
        return cls(
            todo=TodosRepoSqlite(serializer),
            habit=HabitsRepoSqlite(serializer),
            project=ProjectsRepoSqlite(serializer),
            asset=AssetsRepoSqlite(serializer),
            trade=TradesRepoSqlite(serializer),
            news=NewsRepoSqlite(serializer),
            rss_feed=RSSFeedsRepoSqlite(serializer),
            code_snippet=SnippetsRepoSqlite(serializer),
        )

    def by_kind(self) -> dict[str, SqliteRepository[Any]]:
        """Map each kind name (its table name) to its repository."""
        repos = (getattr(self, f.name) for f in fields(self))
        return {repo.table: repo for repo in repos}

    def for_kind(self, kind: str) -> SqliteRepository[Any]:
        kinds = self.by_kind()
        try:
            return kinds[kind]
        except KeyError:
            raise ValueError(
                f"Unknown kind {kind!r}; expected one of: {', '.join(sorted(kinds))}"
            ) from None
