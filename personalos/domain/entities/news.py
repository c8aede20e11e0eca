from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import Field, model_validator

from ..value_objects.enums import NewsDataSource
from .base import Entity, utc_now


class NewsItem(Entity):
    source: str
    title: str
    summary: str = ""
    category: str = ""
    image: str = ""
    image_url: Optional[str] = None
    date: datetime = Field(default_factory=utc_now)
    url: Optional[str] = None
    data_source: NewsDataSource = NewsDataSource.DEMO
    canonical_id: str = Field(..., description="Stable identity used to deduplicate articles")

    @model_validator(mode="before")
    @classmethod
    def _default_canonical_id(cls, data: Any) -> Any:
        # Prefer the article URL, fall back to "source:title".
        if isinstance(data, dict) and not data.get("canonical_id"):
            url = data.get("url")
            canonical = url if url else f"{data.get('source')}:{data.get('title')}"
            data = {**data, "canonical_id": canonical}
        return data

    def matches(self, other: "NewsItem") -> bool:
        return self.canonical_id == other.canonical_id


class RSSFeed(Entity):
    name: str
    url: str
    category: str = "General"
    is_enabled: bool = True
    last_fetched: Optional[datetime] = None
