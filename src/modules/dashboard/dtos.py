"""Dashboard DTOs (Pydantic v2, immutable)."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict


class AmountEntry(NamedTuple):
    """One ``(timestamp, amount)`` pair fed to the aggregator.

    Both values are raw: the aggregator parses and validates them.
    """

    timestamp: Any
    amount: Any


class RevenueBucket(BaseModel):
    """Total amount of one non-empty day / week / month."""

    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    start: datetime
    total: Decimal


class LeaderboardEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    rank: int
    id: str
    name: str
    photo_url: Optional[str]
    shipping_score: float


class DashboardSummary(BaseModel):
    """Headline figures of the dashboard home page."""

    model_config = ConfigDict(frozen=True)

    total_sales: Decimal
    order_count: int
    user_count: int
    delivery_person_count: int

