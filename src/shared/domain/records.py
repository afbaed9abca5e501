"""Lenient field access for raw documents.

``FieldReader`` reads typed values out of a raw document without ever
raising.  An absent field yields ``None``; a malformed one also yields
``None`` but is recorded in ``malformed`` and logged, so entity records can
expose which fields were unusable.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, List, Optional, TypeVar

import structlog
from pydantic import BaseModel, ConfigDict

from shared.domain.values import MalformedValue, parse_amount, parse_timestamp

if TYPE_CHECKING:
    from modules.core.store.interfaces import Document

logger = structlog.get_logger(__name__)

V = TypeVar("V")


class GeoPoint(BaseModel):
    """Latitude / longitude pair in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


def parse_geo_point(value: Any) -> Optional[GeoPoint]:
    """Accepts ``{latitude, longitude}`` or ``{lat, lng}`` maps (numbers or numeric strings)."""
    if value is None:
        return None
    if not isinstance(value, dict):
        raise MalformedValue(f"Geo point must be a map: {value!r}")
    lat = value.get("latitude", value.get("lat"))
    lng = value.get("longitude", value.get("lng"))
    if lat in (None, "") and lng in (None, ""):
        return None
    try:
        return GeoPoint(latitude=_coordinate(lat, 90), longitude=_coordinate(lng, 180))
    except (TypeError, ValueError) as exc:
        raise MalformedValue(f"Invalid geo point: {value!r}") from exc


def _coordinate(raw: Any, bound: float) -> float:
    if isinstance(raw, bool):
        raise ValueError("boolean coordinate")
    number = float(raw)
    if not -bound <= number <= bound:
        raise ValueError(f"coordinate out of range: {number}")
    return number


class FieldReader:
    """Typed, non-raising accessors over one document's fields."""

    def __init__(self, document: Document) -> None:
        self.document = document
        self.malformed: List[str] = []

    # ------------------------------------------------------------------
    # Typed accessors
    # ------------------------------------------------------------------

    def raw(self, key: str) -> Any:
        return self.document.data.get(key)

    def text(self, key: str) -> Optional[str]:
        return self._read(key, _parse_text)

    def timestamp(self, key: str) -> Optional[datetime]:
        return self._read(key, parse_timestamp)

    def amount(self, key: str) -> Optional[Decimal]:
        return self._read(key, parse_amount)

    def number(self, key: str) -> Optional[float]:
        return self._read(key, _parse_number)

    def integer(self, key: str) -> Optional[int]:
        return self._read(key, _parse_integer)

    def boolean(self, key: str) -> Optional[bool]:
        return self._read(key, _parse_boolean)

    def geo_point(self, key: str) -> Optional[GeoPoint]:
        return self._read(key, parse_geo_point)

    def mark_malformed(self, key: str, error: str) -> None:
        self.malformed.append(key)
        logger.warning(
            "record.malformed_field",
            collection=self.document.collection,
            document_id=self.document.id,
            field=key,
            error=error,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _read(self, key: str, parser: Callable[[Any], Optional[V]]) -> Optional[V]:
        try:
            return parser(self.document.data.get(key))
        except MalformedValue as exc:
            self.mark_malformed(key, str(exc))
            return None


def _parse_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise MalformedValue(f"Not a text value: {value!r}")
    return str(value)


def _parse_number(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise MalformedValue(f"Boolean is not a number: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise MalformedValue(f"Not a number: {value!r}") from exc
    if number != number or number in (float("inf"), float("-inf")):
        raise MalformedValue(f"Not a finite number: {value!r}")
    return number


def _parse_integer(value: Any) -> Optional[int]:
    number = _parse_number(value)
    if number is None:
        return None
    if not number.is_integer():
        raise MalformedValue(f"Not a whole number: {value!r}")
    return int(number)


def _parse_boolean(value: Any) -> Optional[bool]:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    raise MalformedValue(f"Not a boolean: {value!r}")
