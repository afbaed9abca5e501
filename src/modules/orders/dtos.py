"""Order DTOs.

Framework-agnostic records using Pydantic v2, all immutable
(``frozen=True``).

- ``OrderRecord``: lenient parse of a raw ``Commande`` document.
- ``DeliveryDuration``: shipping-start to finish, in hours + minutes.
- ``OrderView``: fully hydrated order for the detail page.
- ``OrderSummary``: one row of the order list / recent orders table.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from modules.orders.constants import DEFAULT_LINE_QUANTITY, DeliveryStatus
from shared.domain.records import FieldReader, GeoPoint, parse_geo_point
from shared.domain.values import MalformedValue, parse_amount

if TYPE_CHECKING:
    from modules.core.store.interfaces import Document

ZERO = Decimal("0.00")


# ---------------------------------------------------------------------------
# Raw record
# ---------------------------------------------------------------------------


class LineItemRecord(BaseModel):
    """One entry of an order's ``Products`` array.

    ``product_ref`` is kept raw; the ReferenceResolver interprets it.
    ``unit_price`` is the price snapshot stored with the order.
    """

    model_config = ConfigDict(frozen=True)

    product_ref: Any = None
    quantity: int
    unit_price: Decimal


class AddressRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: Optional[str] = None
    title: Optional[str] = None
    location: Optional[GeoPoint] = None


class OrderRecord(BaseModel):
    """Snapshot of a ``Commande`` document.

    ``total_amount`` is authoritative: it is never recomputed from the line
    items, which have been seen to disagree with it in production data.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    customer_ref: Any = None
    delivery_person_ref: Any = None
    items: Tuple[LineItemRecord, ...] = ()
    address: AddressRecord = AddressRecord()
    placed_at: Optional[datetime] = None
    shipping_started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    total_amount: Decimal = ZERO
    malformed_fields: Tuple[str, ...] = ()

    @classmethod
    def from_document(cls, document: Document) -> OrderRecord:
        reader = FieldReader(document)
        items = _read_line_items(reader)
        address = _read_address(reader)
        return cls(
            id=document.id,
            customer_ref=reader.raw("user"),
            delivery_person_ref=reader.raw("DelivaryMan"),
            items=items,
            address=address,
            placed_at=reader.timestamp("DatePAssCommande"),
            shipping_started_at=reader.timestamp("DateShippingStart"),
            finished_at=reader.timestamp("DateFinish"),
            total_amount=reader.amount("TotalAmount") or ZERO,
            malformed_fields=tuple(reader.malformed),
        )


def _read_line_items(reader: FieldReader) -> Tuple[LineItemRecord, ...]:
    raw_items = reader.raw("Products")
    if raw_items is None:
        return ()
    if not isinstance(raw_items, list):
        reader.mark_malformed("Products", "Products is not a list")
        return ()

    items: List[LineItemRecord] = []
    for index, entry in enumerate(raw_items):
        field = f"Products[{index}]"
        if not isinstance(entry, dict):
            reader.mark_malformed(field, "line item is not a map")
            continue
        items.append(
            LineItemRecord(
                product_ref=entry.get("Product"),
                quantity=_line_quantity(reader, field, entry.get("Quantity")),
                unit_price=_line_price(reader, field, entry.get("Price")),
            )
        )
    return tuple(items)


def _line_quantity(reader: FieldReader, field: str, raw: Any) -> int:
    if raw is None:
        return DEFAULT_LINE_QUANTITY
    whole = isinstance(raw, int) or (isinstance(raw, float) and raw.is_integer())
    if isinstance(raw, bool) or not whole or raw < 0:
        reader.mark_malformed(f"{field}.Quantity", f"not a whole number: {raw!r}")
        return DEFAULT_LINE_QUANTITY
    return int(raw)


def _line_price(reader: FieldReader, field: str, raw: Any) -> Decimal:
    try:
        return parse_amount(raw) or ZERO
    except MalformedValue as exc:
        reader.mark_malformed(f"{field}.Price", str(exc))
        return ZERO


def _read_address(reader: FieldReader) -> AddressRecord:
    raw = reader.raw("addresse")
    if raw is None:
        return AddressRecord()
    if not isinstance(raw, dict):
        reader.mark_malformed("addresse", "address is not a map")
        return AddressRecord()
    try:
        location = parse_geo_point(raw.get("location"))
    except MalformedValue as exc:
        reader.mark_malformed("addresse.location", str(exc))
        location = None
    text, title = raw.get("address"), raw.get("title")
    return AddressRecord(
        text=text if isinstance(text, str) else None,
        title=title if isinstance(title, str) else None,
        location=location,
    )


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class DeliveryDuration(BaseModel):
    """Whole hours plus remaining whole minutes (truncated, never rounded)."""

    model_config = ConfigDict(frozen=True)

    hours: int
    minutes: int

    @property
    def total_minutes(self) -> int:
        return self.hours * 60 + self.minutes

    def __str__(self) -> str:
        return f"{self.hours}h {self.minutes}m"


class LineItemView(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_ref: Optional[str]
    product_name: str
    quantity: int
    unit_price: Decimal
    line_subtotal: Decimal


class DeliveryPersonView(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[str]
    name: str
    photo_url: str
    phone_number: Optional[str] = None


class AddressView(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    title: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class OrderView(BaseModel):
    """Immutable, fully hydrated order for the detail page."""

    model_config = ConfigDict(frozen=True)

    id: str
    customer_id: Optional[str]
    customer_name: str
    delivery_person: Optional[DeliveryPersonView]
    address: AddressView
    items: List[LineItemView]
    total_item_count: int
    total_amount: Decimal
    items_total: Decimal
    amount_discrepancy: Decimal
    placed_at: Optional[datetime]
    shipping_started_at: Optional[datetime]
    finished_at: Optional[datetime]
    status: DeliveryStatus
    delivery_duration: Optional[DeliveryDuration]

    @property
    def has_amount_discrepancy(self) -> bool:
        return self.amount_discrepancy != ZERO


class OrderSummary(BaseModel):
    """Immutable row for order lists and the dashboard's recent orders."""

    model_config = ConfigDict(frozen=True)

    id: str
    customer_name: str
    address: str
    placed_at: Optional[datetime]
    status: DeliveryStatus
    total_amount: Decimal
    total_item_count: int
