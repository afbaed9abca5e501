"""Unit tests for revenue bucketing.

Covers:
- Month, week and day buckets with labels and chronological order.
- Week numbering from January 1st (week 53 on December 31st of 2024).
- Bucket boundaries computed in the configured time zone.
- Skipped entries (missing / malformed timestamp, malformed amount).
"""

from __future__ import annotations

import random
from datetime import datetime, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from modules.dashboard.aggregation import (
    Granularity,
    TimeBucketAggregator,
    week_of_year,
)
from modules.dashboard.dtos import AmountEntry

pytestmark = pytest.mark.unit

UTC = timezone.utc

MONTHLY_FIXTURE = [
    AmountEntry(datetime(2024, 1, 5, 10, tzinfo=UTC), 10),
    AmountEntry(datetime(2024, 1, 20, 10, tzinfo=UTC), 20),
    AmountEntry(datetime(2024, 2, 3, 10, tzinfo=UTC), 5),
]


def _labels_and_totals(buckets):
    return [(b.label, b.total) for b in buckets]


# ---------------------------------------------------------------------------
# Months
# ---------------------------------------------------------------------------


class TestMonthlyBuckets:
    def test_golden_fixture(self):
        buckets = TimeBucketAggregator(UTC).aggregate(MONTHLY_FIXTURE, "month")
        assert _labels_and_totals(buckets) == [
            ("January 2024", Decimal("30.00")),
            ("February 2024", Decimal("5.00")),
        ]
        assert [b.key for b in buckets] == ["2024-01", "2024-02"]

    def test_independent_of_input_order(self):
        entries = list(MONTHLY_FIXTURE)
        random.Random(7).shuffle(entries)
        buckets = TimeBucketAggregator(UTC).aggregate(entries, Granularity.MONTH)
        assert [b.label for b in buckets] == ["January 2024", "February 2024"]

    def test_chronological_not_alphabetical(self):
        entries = [
            AmountEntry(datetime(2024, 4, 1, tzinfo=UTC), 1),
            AmountEntry(datetime(2023, 12, 1, tzinfo=UTC), 1),
            AmountEntry(datetime(2024, 1, 1, tzinfo=UTC), 1),
        ]
        buckets = TimeBucketAggregator(UTC).aggregate(entries, "month")
        assert [b.label for b in buckets] == [
            "December 2023",
            "January 2024",
            "April 2024",
        ]

    def test_bucket_start_is_first_of_month(self):
        (bucket,) = TimeBucketAggregator(UTC).aggregate(
            [AmountEntry(datetime(2024, 2, 17, 9, tzinfo=UTC), 3)], "month"
        )
        assert bucket.start == datetime(2024, 2, 1, tzinfo=UTC)


# ---------------------------------------------------------------------------
# Weeks
# ---------------------------------------------------------------------------


class TestWeeklyBuckets:
    @pytest.mark.parametrize(
        ("day", "week"),
        [
            (datetime(2024, 1, 1), 1),
            (datetime(2024, 1, 7), 1),
            (datetime(2024, 1, 8), 2),
            (datetime(2024, 12, 30), 53),
            (datetime(2024, 12, 31), 53),
            (datetime(2023, 12, 31), 53),
            (datetime(2023, 12, 30), 52),
        ],
    )
    def test_week_of_year(self, day, week):
        assert week_of_year(day.date()) == week

    def test_first_and_last_week_labels(self):
        entries = [
            AmountEntry(datetime(2024, 12, 31, 12, tzinfo=UTC), 8),
            AmountEntry(datetime(2024, 1, 1, 12, tzinfo=UTC), 2),
        ]
        buckets = TimeBucketAggregator(UTC).aggregate(entries, "week")
        assert _labels_and_totals(buckets) == [
            ("Week 1, 2024", Decimal("2.00")),
            ("Week 53, 2024", Decimal("8.00")),
        ]
        assert buckets[1].start == datetime(2024, 12, 30, tzinfo=UTC)


# ---------------------------------------------------------------------------
# Days and time zones
# ---------------------------------------------------------------------------


class TestDailyBuckets:
    def test_day_labels(self):
        entries = [
            AmountEntry("2024-03-02T08:00:00Z", "1.10"),
            AmountEntry("2024-03-01T08:00:00Z", "2.20"),
            AmountEntry("2024-03-02T20:00:00Z", "3.30"),
        ]
        buckets = TimeBucketAggregator(UTC).aggregate(entries, "day")
        assert _labels_and_totals(buckets) == [
            ("2024-03-01", Decimal("2.20")),
            ("2024-03-02", Decimal("4.40")),
        ]

    def test_calendar_day_follows_time_zone(self):
        # 23:30 UTC on Jan 31st is already February 1st in Paris
        entries = [AmountEntry(datetime(2024, 1, 31, 23, 30, tzinfo=UTC), 5)]

        utc = TimeBucketAggregator(UTC).aggregate(entries, "month")
        paris = TimeBucketAggregator(ZoneInfo("Europe/Paris")).aggregate(entries, "month")

        assert utc[0].label == "January 2024"
        assert paris[0].label == "February 2024"

    def test_defaults_to_project_time_zone(self, settings):
        settings.TIME_ZONE = "Asia/Tokyo"
        entries = [AmountEntry(datetime(2024, 1, 31, 16, tzinfo=UTC), 5)]
        (bucket,) = TimeBucketAggregator().aggregate(entries, "day")
        assert bucket.label == "2024-02-01"


# ---------------------------------------------------------------------------
# Robustness
# ---------------------------------------------------------------------------


class TestSkippedEntries:
    def test_bad_entries_are_skipped(self):
        entries = [
            AmountEntry(None, 10),
            AmountEntry("not a date", 10),
            AmountEntry(datetime(2024, 1, 5, tzinfo=UTC), "ten"),
            AmountEntry(datetime(2024, 1, 6, tzinfo=UTC), 4),
        ]
        buckets = TimeBucketAggregator(UTC).aggregate(entries, "month")
        assert _labels_and_totals(buckets) == [("January 2024", Decimal("4.00"))]

    def test_out_of_range_amount_is_skipped(self):
        entries = [
            AmountEntry(datetime(2024, 1, 5, tzinfo=UTC), 10),
            AmountEntry(datetime(2024, 1, 6, tzinfo=UTC), 1e30),
        ]
        buckets = TimeBucketAggregator(UTC).aggregate(entries, "month")
        assert _labels_and_totals(buckets) == [("January 2024", Decimal("10.00"))]

    def test_missing_amount_counts_as_zero(self):
        entries = [AmountEntry(datetime(2024, 1, 5, tzinfo=UTC), None)]
        buckets = TimeBucketAggregator(UTC).aggregate(entries, "month")
        assert _labels_and_totals(buckets) == [("January 2024", Decimal("0.00"))]

    def test_cent_exact_sums(self):
        entries = [AmountEntry(datetime(2024, 1, 5, tzinfo=UTC), 0.1)] * 10
        (bucket,) = TimeBucketAggregator(UTC).aggregate(entries, "month")
        assert bucket.total == Decimal("1.00")

    def test_empty_input(self):
        assert TimeBucketAggregator(UTC).aggregate([], "day") == []

    def test_unknown_granularity(self):
        with pytest.raises(ValueError):
            TimeBucketAggregator(UTC).aggregate(MONTHLY_FIXTURE, "year")
