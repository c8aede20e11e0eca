from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from personalos.domain.entities import (
    AssetItem,
    CodeSnippet,
    HabitItem,
    NewsItem,
    ProjectItem,
    RSSFeed,
    TodoItem,
    TradeRecord,
)
from personalos.domain.value_objects.enums import (
    AssetType,
    KnowledgeCategory,
    NewsDataSource,
    ProjectStatus,
    TradeEmotion,
    TradeType,
)


def test_entity_gets_identity_and_ordered_timestamps() -> None:
    a = TodoItem(title="A")
    b = TodoItem(title="B")
    assert a.id and b.id and a.id != b.id
    assert a.created_at.tzinfo is not None
    assert a.updated_at >= a.created_at
    assert a.category == "Life" and a.priority == 1 and a.is_completed is False


def test_identity_is_immutable() -> None:
    todo = TodoItem(title="A")
    with pytest.raises(ValidationError):
        todo.id = "other"  # type: ignore[assignment]
    todo.title = "B"
    assert todo.title == "B"


def test_timestamps_must_be_aware_and_ordered() -> None:
    with pytest.raises(ValidationError):
        TodoItem(title="A", created_at=datetime(2024, 1, 1))
    created = datetime(2024, 1, 2, tzinfo=timezone.utc)
    with pytest.raises(ValidationError):
        TodoItem(title="A", created_at=created, updated_at=created - timedelta(seconds=1))
    todo = TodoItem(title="A", created_at=created)
    assert todo.updated_at == created


def test_timestamps_are_normalised_to_utc() -> None:
    cet = timezone(timedelta(hours=1))
    todo = TodoItem(title="A", created_at=datetime(2024, 1, 1, 12, tzinfo=cet))
    assert todo.created_at == datetime(2024, 1, 1, 11, tzinfo=timezone.utc)
    assert todo.created_at.utcoffset() == timedelta(0)


def test_habit_defaults_and_validation() -> None:
    habit = HabitItem(title="Meditation", icon="brain.head.profile")
    assert habit.streak == 0 and habit.is_completed is False
    with pytest.raises(ValidationError):
        HabitItem(title="X", icon="y", streak=-1)


def test_project_progress_bounds() -> None:
    p = ProjectItem(name="OS", status=ProjectStatus.ACTIVE, progress=0.5)
    assert p.status is ProjectStatus.ACTIVE
    with pytest.raises(ValidationError):
        ProjectItem(name="OS", progress=1.5)


def test_asset_derived_values() -> None:
    asset = AssetItem(
        symbol="AAPL",
        name="Apple",
        quantity=10,
        current_price="190.5",
        avg_cost=Decimal("150"),
        type=AssetType.STOCK,
    )
    assert asset.quantity == Decimal("10")
    assert asset.market_value == Decimal("1905.0")
    assert asset.pnl == Decimal("405.0")
    assert asset.pnl_percent == Decimal("0.27")
    assert AssetType.CRYPTO.label == "Crypto"

    free = AssetItem(
        symbol="X", name="X", quantity=1, current_price=1, avg_cost=0, type=AssetType.CRYPTO
    )
    assert free.pnl_percent == Decimal(0)


def test_trade_record_totals_and_scaled_values() -> None:
    trade = TradeRecord(
        symbol="BTC",
        type=TradeType.BUY,
        price=0.1,
        quantity="2.5",
        asset_type=AssetType.CRYPTO,
        emotion=TradeEmotion.FEARFUL,
    )
    assert trade.price == Decimal("0.1")
    assert trade.total_value == Decimal("0.25")
    assert trade.price_scaled == 1000
    assert trade.quantity_scaled == 25000
    with pytest.raises(ValidationError):
        TradeRecord(
            symbol="BTC",
            type=TradeType.SELL,
            price=1,
            quantity=1,
            asset_type=AssetType.CRYPTO,
            date=datetime(2024, 1, 1),
        )


def test_news_canonical_id_prefers_url() -> None:
    with_url = NewsItem(source="HN", title="T", url="https://example.com/a")
    without_url = NewsItem(source="HN", title="T")
    explicit = NewsItem(source="HN", title="T", canonical_id="abc")
    assert with_url.canonical_id == "https://example.com/a"
    assert without_url.canonical_id == "HN:T"
    assert explicit.canonical_id == "abc"
    assert without_url.data_source is NewsDataSource.DEMO
    assert without_url.matches(NewsItem(source="HN", title="T"))
    assert not with_url.matches(without_url)


def test_feed_and_snippet_defaults() -> None:
    feed = RSSFeed(name="Hacker News", url="https://news.ycombinator.com/rss")
    assert feed.category == "General" and feed.is_enabled and feed.last_fetched is None
    snippet = CodeSnippet(
        title="Attention", language="Python", code="pass", category=KnowledgeCategory.AI
    )
    assert snippet.category.value == "AI/ML"


def test_json_round_trip_keeps_values() -> None:
    trade = TradeRecord(
        symbol="EURUSD",
        type=TradeType.SELL,
        price="1.0850",
        quantity=1000,
        asset_type=AssetType.FOREX,
        note="fade",
    )
    again = TradeRecord.model_validate_json(trade.model_dump_json())
    assert again == trade
    assert again.price == Decimal("1.0850")
