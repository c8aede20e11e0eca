from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ...domain.entities import AssetItem, TradeRecord, utc_now
from .base_sqlite import SqliteRepository


class AssetsRepoSqlite(SqliteRepository[AssetItem]):
    """SQLite repository for :class:`AssetItem`."""

    entity_type = AssetItem
    table = "assets"


class TradesRepoSqlite(SqliteRepository[TradeRecord]):
    """SQLite repository for :class:`TradeRecord`."""

    entity_type = TradeRecord
    table = "trades"

    def fetch_recent(self, days: int = 90, *, now: Optional[datetime] = None) -> list[TradeRecord]:
        """Return trades dated strictly after ``now - days``."""
        cutoff = (now or utc_now()) - timedelta(days=days)
        return self.fetch(lambda t: t.date > cutoff)
