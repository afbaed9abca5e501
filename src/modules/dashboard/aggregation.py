"""Revenue bucketing by calendar day, week or month.

Buckets are computed in a single time zone (the project ``TIME_ZONE`` unless
one is given) and returned in chronological order of their start instant,
never in label order ("April" must not sort before "January").

Week numbering counts from the first day of the year:
``week = (day_of_year - 1) // 7 + 1``, so January 1st to 7th is week 1 and
December 31st of a leap year falls in week 53.

Amounts are summed in integer cents and converted back to two-place
``Decimal`` totals only once per bucket.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Dict, Iterable, List, Optional, Tuple

import structlog
from django.utils import timezone

from modules.dashboard.dtos import RevenueBucket
from shared.domain.values import (
    MalformedValue,
    from_minor_units,
    parse_amount,
    parse_timestamp,
    to_minor_units,
)

logger = structlog.get_logger(__name__)

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


class Granularity(str, enum.Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


def week_of_year(day: date) -> int:
    """Week number where week 1 starts on January 1st."""
    return (day.timetuple().tm_yday - 1) // 7 + 1


@dataclass(frozen=True)
class BucketKey:
    key: str
    label: str
    start: date


def bucket_for(day: date, granularity: Granularity) -> BucketKey:
    """Return the bucket containing the local calendar *day*."""
    if granularity is Granularity.DAY:
        return BucketKey(key=day.isoformat(), label=day.isoformat(), start=day)
    if granularity is Granularity.WEEK:
        week = week_of_year(day)
        start = date(day.year, 1, 1) + timedelta(days=7 * (week - 1))
        return BucketKey(
            key=f"{day.year}-W{week:02d}",
            label=f"Week {week}, {day.year}",
            start=start,
        )
    return BucketKey(
        key=f"{day.year}-{day.month:02d}",
        label=f"{MONTH_NAMES[day.month - 1]} {day.year}",
        start=day.replace(day=1),
    )


class TimeBucketAggregator:
    """Sums amounts per calendar bucket."""

    def __init__(self, tz: Optional[tzinfo] = None) -> None:
        self._tz = tz

    @property
    def tz(self) -> tzinfo:
        return self._tz or timezone.get_default_timezone()

    def aggregate(
        self,
        entries: Iterable[Tuple[object, object]],
        granularity: Granularity | str,
    ) -> List[RevenueBucket]:
        """Group ``(timestamp, amount)`` pairs into chronologically ordered buckets.

        Entries with a missing or malformed timestamp, or a malformed amount,
        are skipped and logged.  A missing amount counts as zero.

        Raises:
            ValueError: *granularity* is not ``day``, ``week`` or ``month``.
        """
        granularity = Granularity(granularity)
        tz = self.tz
        totals: Dict[BucketKey, int] = {}
        skipped = 0

        for index, (raw_timestamp, raw_amount) in enumerate(entries):
            try:
                instant = parse_timestamp(raw_timestamp)
                amount = parse_amount(raw_amount)
            except MalformedValue as exc:
                logger.warning(
                    "aggregation.entry_skipped", index=index, reason=str(exc)
                )
                skipped += 1
                continue
            if instant is None:
                logger.info(
                    "aggregation.entry_skipped", index=index, reason="missing timestamp"
                )
                skipped += 1
                continue

            bucket = bucket_for(instant.astimezone(tz).date(), granularity)
            cents = to_minor_units(amount) if amount is not None else 0
            totals[bucket] = totals.get(bucket, 0) + cents

        logger.info(
            "aggregation.completed",
            granularity=granularity.value,
            buckets=len(totals),
            skipped=skipped,
        )
        return [
            RevenueBucket(
                key=bucket.key,
                label=bucket.label,
                start=datetime.combine(bucket.start, time.min, tzinfo=tz),
                total=from_minor_units(cents),
            )
            for bucket, cents in sorted(totals.items(), key=lambda kv: kv[0].start)
        ]
