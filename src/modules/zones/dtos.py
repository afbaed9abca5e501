"""Delivery zone records."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from shared.domain.records import FieldReader, GeoPoint, parse_geo_point
from shared.domain.values import MalformedValue

if TYPE_CHECKING:
    from modules.core.store.interfaces import Document


class ZoneRecord(BaseModel):
    """A delivery zone.

    ``area`` is the optional polygon drawn on the zone map; ``location``
    is its centre point.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: Optional[str] = None
    zip_code: Optional[str] = None
    minimum_order_amount: Optional[Decimal] = None
    is_open: Optional[bool] = None
    location: Optional[GeoPoint] = None
    area: Tuple[GeoPoint, ...] = ()
    malformed_fields: Tuple[str, ...] = ()

    @classmethod
    def from_document(cls, document: Document) -> ZoneRecord:
        reader = FieldReader(document)
        area = _read_area(reader)
        return cls(
            id=document.id,
            name=reader.text("name"),
            zip_code=reader.text("ZIPCode"),
            minimum_order_amount=reader.amount("MinimumOrderAmount"),
            is_open=reader.boolean("isOpen"),
            location=reader.geo_point("GeoPoint"),
            area=area,
            malformed_fields=tuple(reader.malformed),
        )


def _read_area(reader: FieldReader) -> Tuple[GeoPoint, ...]:
    raw = reader.raw("area")
    if raw is None:
        return ()
    if not isinstance(raw, list):
        reader.mark_malformed("area", "Not a list of points")
        return ()
    try:
        points = tuple(parse_geo_point(point) for point in raw)
    except MalformedValue as exc:
        reader.mark_malformed("area", str(exc))
        return ()
    if None in points:
        reader.mark_malformed("area", "Empty point in area")
        return ()
    return points
