"""Dashboard service (Use Cases).

Reads the ``Commande`` and ``users`` collections and derives the figures
shown on the dashboard home page: headline counters, the revenue series,
the delivery leaderboard and the most recent orders.
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import TYPE_CHECKING, List, Optional

import structlog
from django.conf import settings

from modules.core.constants import ORDERS_COLLECTION, USERS_COLLECTION
from modules.dashboard.aggregation import Granularity, TimeBucketAggregator
from modules.dashboard.dtos import (
    AmountEntry,
    DashboardSummary,
    LeaderboardEntry,
    RevenueBucket,
)
from modules.dashboard.leaderboard import LeaderboardRanker
from modules.orders.dtos import OrderSummary
from modules.orders.services import OrderQueryService
from modules.users.dtos import PersonRecord
from shared.domain.values import from_minor_units, to_minor_units

if TYPE_CHECKING:
    from modules.core.store.interfaces import IDocumentStore

logger = structlog.get_logger(__name__)


class DashboardService:
    """Application service behind the dashboard endpoints."""

    def __init__(
        self,
        store: IDocumentStore,
        orders: Optional[OrderQueryService] = None,
        ranker: Optional[LeaderboardRanker] = None,
    ) -> None:
        self._store = store
        self._orders = orders or OrderQueryService(store)
        self._ranker = ranker or LeaderboardRanker()

    def summary(self) -> DashboardSummary:
        """Total sales plus order, user and delivery-person counts."""
        records = self._orders.load_records()
        people = self._load_people()

        cents = sum(to_minor_units(r.total_amount) for r in records)
        summary = DashboardSummary(
            total_sales=from_minor_units(cents),
            order_count=len(records),
            user_count=len(people),
            delivery_person_count=sum(1 for p in people if p.is_delivery_person),
        )
        logger.info(
            "dashboard.summary_built",
            order_count=summary.order_count,
            user_count=summary.user_count,
        )
        return summary

    def revenue(
        self, granularity: Granularity | str, tz: Optional[tzinfo] = None
    ) -> List[RevenueBucket]:
        """Order totals bucketed by placement date.

        Raises:
            ValueError: unknown *granularity*.
        """
        documents = self._store.list_documents(ORDERS_COLLECTION)
        entries = [
            AmountEntry(doc.get("DatePAssCommande"), doc.get("TotalAmount"))
            for doc in documents
        ]
        return TimeBucketAggregator(tz).aggregate(entries, granularity)

    def leaderboard(self, limit: Optional[int] = None) -> List[LeaderboardEntry]:
        """Top delivery people by shipping score."""
        if limit is None:
            limit = settings.LEADERBOARD_SIZE
        couriers = [p for p in self._load_people() if p.is_delivery_person]
        return self._ranker.rank(couriers, k=limit)

    def recent_orders(
        self, now: Optional[datetime] = None, limit: Optional[int] = None
    ) -> List[OrderSummary]:
        """The most recently placed orders, newest first."""
        if limit is None:
            limit = settings.RECENT_ORDERS_LIMIT
        return self._orders.list_orders(now=now, limit=limit)

    def _load_people(self) -> List[PersonRecord]:
        documents = self._store.list_documents(USERS_COLLECTION)
        return [PersonRecord.from_document(doc) for doc in documents]
