"""Order query service (Use Cases).

Loads raw ``Commande`` documents from the store, resolves their references
in batches and hands everything to ``OrderViewBuilder``.  Read-only: the
service never writes to the store.

Rules enforced:
- One unresolvable reference degrades one field, never the whole page.
- Stored ``TotalAmount`` is authoritative; mismatches with the line items
  are reported on the view and logged, not corrected.
- Lists are ordered by placement time, newest first; orders without a
  usable placement timestamp go last.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

import structlog
from django.utils import timezone

from modules.core.constants import ORDERS_COLLECTION
from modules.core.references import ReferenceResolver
from modules.orders.builders import OrderViewBuilder
from modules.orders.dtos import OrderRecord, OrderSummary, OrderView
from modules.orders.exceptions import OrderNotFound

if TYPE_CHECKING:
    from modules.core.store.interfaces import IDocumentStore

logger = structlog.get_logger(__name__)


class OrderQueryService:
    """Application service for reading hydrated orders.

    Receives the document store via constructor injection (DIP).
    """

    def __init__(
        self,
        store: IDocumentStore,
        resolver: Optional[ReferenceResolver] = None,
        builder: Optional[OrderViewBuilder] = None,
    ) -> None:
        self._store = store
        self._resolver = resolver or ReferenceResolver(store)
        self._builder = builder or OrderViewBuilder()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def load_records(self) -> List[OrderRecord]:
        """Parse every stored order into an ``OrderRecord``."""
        documents = self._store.list_documents(ORDERS_COLLECTION)
        return [OrderRecord.from_document(doc) for doc in documents]

    def get_order(self, order_id: str, now: Optional[datetime] = None) -> OrderView:
        """Retrieve the fully hydrated view of one order.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        document = self._store.get_document(ORDERS_COLLECTION, order_id)
        if document is None:
            raise OrderNotFound(f"Order {order_id} not found.")

        order = OrderRecord.from_document(document)
        has_delivery = order.delivery_person_ref is not None
        refs = [order.customer_ref]
        if has_delivery:
            refs.append(order.delivery_person_ref)
        refs.extend(item.product_ref for item in order.items)

        resolved = self._resolver.resolve_many(refs)
        customer = resolved[0]
        delivery = resolved[1] if has_delivery else None
        products = resolved[2:] if has_delivery else resolved[1:]

        view = self._builder.build(
            order, customer, delivery, products, now or timezone.now()
        )
        if view.has_amount_discrepancy:
            logger.warning(
                "order.amount_discrepancy",
                order_id=order.id,
                total_amount=str(view.total_amount),
                items_total=str(view.items_total),
            )
        return view

    def list_orders(
        self, now: Optional[datetime] = None, limit: Optional[int] = None
    ) -> List[OrderSummary]:
        """Return order summaries, newest first, optionally truncated."""
        records = sorted(self.load_records(), key=_placement_key, reverse=True)
        if limit is not None:
            records = records[:limit]
        return self.summarize(records, now)

    def summarize(
        self, records: List[OrderRecord], now: Optional[datetime] = None
    ) -> List[OrderSummary]:
        """Build summaries for *records*, resolving all customers in one batch."""
        now = now or timezone.now()
        customers = self._resolver.resolve_many(r.customer_ref for r in records)
        summaries = [
            self._builder.build_summary(record, customer, now)
            for record, customer in zip(records, customers)
        ]
        logger.info("order.summaries_built", count=len(summaries))
        return summaries


def _placement_key(record: OrderRecord) -> tuple:
    # Orders without a placement timestamp sort after every dated order.
    if record.placed_at is None:
        return (0, 0.0)
    return (1, record.placed_at.timestamp())
