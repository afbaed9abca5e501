"""Records for documents of the ``users`` collection.

Customers and delivery personnel share the collection and are told apart
by ``role`` (``Client`` / ``Delivery_Man``).  Records are immutable
snapshots built leniently from raw documents.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from modules.core.constants import CLIENT_ROLE, DELIVERY_PERSON_ROLE
from modules.users.constants import Availability
from shared.domain.records import FieldReader, GeoPoint

if TYPE_CHECKING:
    from modules.core.store.interfaces import Document

UNNAMED_USER = "Unnamed User"


class PersonRecord(BaseModel):
    """A customer or delivery person.

    ``shipping_score`` is only meaningful for delivery personnel: it counts
    the deliveries in progress (zero means available) and doubles as the
    leaderboard metric.  ``addresses`` holds the text of each saved address.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    role: Optional[str] = None
    first_name: Optional[str] = None
    second_name: Optional[str] = None
    display_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    photo_url: Optional[str] = None
    shipping_score: Optional[float] = None
    location: Optional[GeoPoint] = None
    addresses: Tuple[str, ...] = ()
    malformed_fields: Tuple[str, ...] = ()

    @property
    def is_client(self) -> bool:
        return self.role == CLIENT_ROLE

    @property
    def is_delivery_person(self) -> bool:
        return self.role == DELIVERY_PERSON_ROLE

    @property
    def availability(self) -> Availability:
        """Available with a zero score, Busy otherwise (including no score)."""
        if self.shipping_score == 0:
            return Availability.AVAILABLE
        return Availability.BUSY

    @property
    def full_name(self) -> str:
        """First + second name, then display name, then a placeholder."""
        parts = [p.strip() for p in (self.first_name, self.second_name) if p]
        name = " ".join(p for p in parts if p)
        return name or (self.display_name or "").strip() or UNNAMED_USER

    @classmethod
    def from_document(cls, document: Document) -> PersonRecord:
        reader = FieldReader(document)
        return cls(
            id=document.id,
            role=reader.text("role"),
            first_name=reader.text("firstName"),
            second_name=reader.text("secondName"),
            display_name=reader.text("display_name"),
            email=reader.text("email"),
            phone_number=reader.text("phone_number"),
            photo_url=reader.text("photo_url"),
            shipping_score=reader.number("ShippingScore"),
            location=reader.geo_point("location"),
            addresses=_read_addresses(reader),
            malformed_fields=tuple(reader.malformed),
        )


def _read_addresses(reader: FieldReader) -> Tuple[str, ...]:
    raw = reader.raw("address")
    if raw is None:
        return ()
    if not isinstance(raw, list):
        reader.mark_malformed("address", "Not a list of addresses")
        return ()
    addresses = []
    for index, entry in enumerate(raw):
        text = entry.get("address") if isinstance(entry, dict) else None
        if not isinstance(text, str):
            reader.mark_malformed(f"address[{index}]", "Address entry without text")
            continue
        if text.strip():
            addresses.append(text.strip())
    return tuple(addresses)


class CustomerSpending(BaseModel):
    """A customer with the sum of ``TotalAmount`` over their orders."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: Optional[str] = None
    phone_number: Optional[str] = None
    photo_url: Optional[str] = None
    total_spent: Decimal
    order_count: int = 0
