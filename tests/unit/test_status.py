"""Unit tests for delivery status and duration.

Covers:
- Pending / Delivering / Delivered derivation from timestamps and ``now``.
- Status never moves backwards as ``now`` advances.
- Duration truncation to whole minutes, ``hours*60 + minutes`` invariant.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from modules.orders.constants import DeliveryStatus
from modules.orders.status import delivery_duration, derive_status

pytestmark = pytest.mark.unit

PLACED = datetime(2024, 3, 1, 11, 0, tzinfo=timezone.utc)
STARTED = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
FINISHED = datetime(2024, 3, 1, 12, 45, tzinfo=timezone.utc)

RANK = {
    DeliveryStatus.PENDING: 0,
    DeliveryStatus.DELIVERING: 1,
    DeliveryStatus.DELIVERED: 2,
}


# ---------------------------------------------------------------------------
# derive_status
# ---------------------------------------------------------------------------


class TestDeriveStatus:
    def test_pending_without_shipping_start(self):
        assert derive_status(FINISHED, PLACED, None, None) == DeliveryStatus.PENDING

    def test_pending_when_shipping_scheduled_in_future(self):
        now = STARTED - timedelta(minutes=1)
        assert derive_status(now, PLACED, STARTED, None) == DeliveryStatus.PENDING

    def test_delivering_once_shipping_started(self):
        assert derive_status(STARTED, PLACED, STARTED, None) == DeliveryStatus.DELIVERING

    def test_delivering_while_finish_in_future(self):
        now = FINISHED - timedelta(seconds=1)
        assert derive_status(now, PLACED, STARTED, FINISHED) == DeliveryStatus.DELIVERING

    def test_delivered_at_finish(self):
        assert derive_status(FINISHED, PLACED, STARTED, FINISHED) == DeliveryStatus.DELIVERED

    def test_finish_without_start_stays_pending(self):
        later = FINISHED + timedelta(days=1)
        assert derive_status(later, PLACED, None, FINISHED) == DeliveryStatus.PENDING

    def test_placed_at_is_irrelevant(self):
        assert derive_status(STARTED, None, STARTED, None) == DeliveryStatus.DELIVERING

    @pytest.mark.parametrize(
        ("started", "finished"),
        [(None, None), (STARTED, None), (STARTED, FINISHED), (None, FINISHED)],
    )
    def test_monotonic_in_now(self, started, finished):
        instants = [PLACED + timedelta(minutes=5 * i) for i in range(40)]
        ranks = [RANK[derive_status(now, PLACED, started, finished)] for now in instants]
        assert ranks == sorted(ranks)


# ---------------------------------------------------------------------------
# delivery_duration
# ---------------------------------------------------------------------------


class TestDeliveryDuration:
    def test_missing_timestamp_is_none(self):
        assert delivery_duration(None, FINISHED) is None
        assert delivery_duration(STARTED, None) is None

    def test_hours_and_minutes(self):
        duration = delivery_duration(STARTED, STARTED + timedelta(hours=2, minutes=5))
        assert (duration.hours, duration.minutes) == (2, 5)
        assert str(duration) == "2h 5m"

    def test_seconds_are_truncated(self):
        duration = delivery_duration(STARTED, STARTED + timedelta(minutes=44, seconds=59))
        assert (duration.hours, duration.minutes) == (0, 44)

    def test_finish_before_start_has_no_duration(self):
        assert delivery_duration(FINISHED, STARTED) is None

    def test_same_instant_is_zero(self):
        assert str(delivery_duration(STARTED, STARTED)) == "0h 0m"

    @pytest.mark.parametrize("seconds", [0, 59, 60, 3599, 3600, 5437, 86_399, 90_061])
    def test_total_minutes_invariant(self, seconds):
        duration = delivery_duration(STARTED, STARTED + timedelta(seconds=seconds))
        assert duration.hours * 60 + duration.minutes == seconds // 60
        assert duration.total_minutes == seconds // 60
        assert 0 <= duration.minutes < 60
