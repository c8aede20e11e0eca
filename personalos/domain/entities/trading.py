from __future__ import annotations

from datetime import datetime, timezone
from decimal import ROUND_HALF_EVEN, Decimal

from pydantic import Field, field_validator

from ..value_objects.enums import AssetType, TradeEmotion, TradeType
from .base import Entity, utc_now

# Prices and quantities are also exposed as integers scaled by this factor so
# they can be compared and sorted without decimal arithmetic.
SCALE_FACTOR = Decimal(10000)


def _to_decimal(v: Decimal | int | float | str) -> Decimal:
    if isinstance(v, Decimal):
        return v
    return Decimal(str(v))


def scaled(value: Decimal) -> int:
    return int((value * SCALE_FACTOR).to_integral_value(rounding=ROUND_HALF_EVEN))


class AssetItem(Entity):
    symbol: str
    name: str
    quantity: Decimal
    current_price: Decimal
    avg_cost: Decimal
    type: AssetType

    @field_validator("quantity", "current_price", "avg_cost", mode="before")
    @classmethod
    def _ensure_decimal(cls, v: Decimal | int | float | str) -> Decimal:
        return _to_decimal(v)

    @property
    def market_value(self) -> Decimal:
        return self.quantity * self.current_price

    @property
    def pnl(self) -> Decimal:
        return (self.current_price - self.avg_cost) * self.quantity

    @property
    def pnl_percent(self) -> Decimal:
        if self.avg_cost == 0:
            return Decimal(0)
        return (self.current_price - self.avg_cost) / self.avg_cost


class TradeRecord(Entity):
    symbol: str
    type: TradeType
    price: Decimal = Field(..., ge=0)
    quantity: Decimal = Field(..., ge=0)
    asset_type: AssetType
    emotion: TradeEmotion = TradeEmotion.NEUTRAL
    note: str = ""
    date: datetime = Field(default_factory=utc_now)

    @field_validator("price", "quantity", mode="before")
    @classmethod
    def _ensure_decimal(cls, v: Decimal | int | float | str) -> Decimal:
        return _to_decimal(v)

    @field_validator("date")
    @classmethod
    def _ensure_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            raise ValueError("trade date must be timezone-aware")
        return v.astimezone(timezone.utc)

    @property
    def total_value(self) -> Decimal:
        return self.price * self.quantity

    @property
    def price_scaled(self) -> int:
        return scaled(self.price)

    @property
    def quantity_scaled(self) -> int:
        return scaled(self.quantity)
