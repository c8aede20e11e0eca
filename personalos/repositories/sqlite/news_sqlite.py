from __future__ import annotations

from typing import Optional

from ...domain.entities import NewsItem, RSSFeed
from .base_sqlite import SqliteRepository


class NewsRepoSqlite(SqliteRepository[NewsItem]):
    """SQLite repository for :class:`NewsItem`."""

    entity_type = NewsItem
    table = "news"

    def find_by_canonical_id(self, canonical_id: str) -> Optional[NewsItem]:
        return self.fetch_one(lambda n: n.canonical_id == canonical_id)


class RSSFeedsRepoSqlite(SqliteRepository[RSSFeed]):
    """SQLite repository for :class:`RSSFeed`."""

    entity_type = RSSFeed
    table = "rss_feeds"
