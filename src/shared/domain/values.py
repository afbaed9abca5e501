"""Value parsing for raw document fields.

Documents come from a schemaless store, so every timestamp or amount may be
absent, well-formed, or malformed.  The parsers below return ``None`` for an
absent value and raise a ``Malformed*`` error for anything they cannot
interpret, so callers can tell the two cases apart.

Accepted timestamp shapes:
- ``datetime`` (naive values are taken as UTC),
- ``{"seconds": int, "nanoseconds": int}`` maps (Firestore export format),
- ISO-8601 strings,
- epoch seconds as ``int`` / ``float``.

Money is carried as ``Decimal`` with two places; sums are accumulated in
integer minor units (cents).
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

CENT = Decimal("0.01")


class MalformedValue(ValueError):
    """A document field is present but cannot be interpreted."""


class MalformedTimestamp(MalformedValue):
    """A timestamp field is present but cannot be interpreted."""


class MalformedAmount(MalformedValue):
    """A monetary field is present but is not a finite number."""


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Return an aware ``datetime`` for *value*, or ``None`` when absent.

    Raises:
        MalformedTimestamp: *value* is present but not a recognised shape.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, bool):
        raise MalformedTimestamp(f"Boolean is not a timestamp: {value!r}")
    if isinstance(value, (int, float)):
        return _from_epoch(value)
    if isinstance(value, dict):
        seconds = value.get("seconds", value.get("_seconds"))
        if seconds is None:
            raise MalformedTimestamp(f"Timestamp map without seconds: {value!r}")
        nanos = value.get("nanoseconds", value.get("_nanoseconds", 0)) or 0
        if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
            raise MalformedTimestamp(f"Non-numeric seconds: {seconds!r}")
        if isinstance(nanos, bool) or not isinstance(nanos, (int, float)):
            raise MalformedTimestamp(f"Non-numeric nanoseconds: {nanos!r}")
        return _from_epoch(seconds + nanos / 1_000_000_000)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise MalformedTimestamp(f"Unparseable timestamp: {value!r}") from exc
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    raise MalformedTimestamp(f"Unsupported timestamp type: {type(value).__name__}")


def _from_epoch(seconds: float) -> datetime:
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise MalformedTimestamp(f"Epoch out of range: {seconds!r}") from exc


# ---------------------------------------------------------------------------
# Money
# ---------------------------------------------------------------------------


def parse_amount(value: Any) -> Optional[Decimal]:
    """Return *value* as a two-place ``Decimal``, or ``None`` when absent.

    Raises:
        MalformedAmount: *value* is present but not a finite number.
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise MalformedAmount(f"Boolean is not an amount: {value!r}")
    if isinstance(value, float):
        value = repr(value)
    try:
        amount = Decimal(value) if not isinstance(value, Decimal) else value
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise MalformedAmount(f"Not a number: {value!r}") from exc
    if not amount.is_finite():
        raise MalformedAmount(f"Not a finite number: {value!r}")
    try:
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise MalformedAmount(f"Amount out of range: {value!r}") from exc


def to_minor_units(amount: Decimal) -> int:
    """Convert a two-place amount into integer cents."""
    return int((amount * 100).to_integral_value(rounding=ROUND_HALF_UP))


def from_minor_units(cents: int) -> Decimal:
    """Convert integer cents back into a two-place ``Decimal``."""
    return (Decimal(cents) / 100).quantize(CENT)
