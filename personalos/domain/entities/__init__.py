from .base import Entity, utc_now
from .habit import HabitItem
from .knowledge import CodeSnippet
from .news import NewsItem, RSSFeed
from .project import ProjectItem
from .todo import TodoItem
from .trading import AssetItem, TradeRecord

__all__ = [
    "AssetItem",
    "CodeSnippet",
    "Entity",
    "HabitItem",
    "NewsItem",
    "ProjectItem",
    "RSSFeed",
    "TodoItem",
    "TradeRecord",
    "utc_now",
]
