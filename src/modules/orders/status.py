"""Delivery status derivation.

Status is never stored: it is evaluated from the order's timestamps and the
current time, so the same inputs always give the same answer and advancing
``now`` can only move an order forward (Pending -> Delivering -> Delivered).

- Pending: shipping has not started (no ``shipping_started_at``), or it is
  scheduled in the future.
- Delivering: shipping started at or before ``now`` and the order is not
  finished yet.
- Delivered: ``finished_at`` is at or before ``now`` (and shipping started).

An order carrying ``finished_at`` without ``shipping_started_at`` stays
Pending; that combination is a data-entry error fixed upstream, not here.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

import structlog

from modules.orders.constants import DeliveryStatus
from modules.orders.dtos import DeliveryDuration

logger = structlog.get_logger(__name__)


def derive_status(
    now: datetime,
    placed_at: Optional[datetime],
    shipping_started_at: Optional[datetime],
    finished_at: Optional[datetime],
) -> DeliveryStatus:
    """Evaluate the delivery status at instant *now*.

    ``placed_at`` does not influence the result; it is accepted so callers
    pass the full timestamp triple of an order.
    """
    if shipping_started_at is None:
        return DeliveryStatus.PENDING
    if finished_at is not None and finished_at <= now:
        return DeliveryStatus.DELIVERED
    if shipping_started_at <= now:
        return DeliveryStatus.DELIVERING
    return DeliveryStatus.PENDING


def delivery_duration(
    shipping_started_at: Optional[datetime],
    finished_at: Optional[datetime],
) -> Optional[DeliveryDuration]:
    """Time between shipping start and finish, ``None`` if either is missing.

    A finish recorded before the shipping start gives ``None`` as well.
    """
    if shipping_started_at is None or finished_at is None:
        return None
    elapsed = finished_at - shipping_started_at
    if elapsed.total_seconds() < 0:
        logger.warning(
            "order.duration_inverted",
            shipping_started_at=shipping_started_at.isoformat(),
            finished_at=finished_at.isoformat(),
        )
        return None
    total_minutes = int(elapsed.total_seconds()) // 60
    hours, minutes = divmod(total_minutes, 60)
    return DeliveryDuration(hours=hours, minutes=minutes)
