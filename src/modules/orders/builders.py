"""Order view assembly.

``OrderViewBuilder`` combines a raw ``OrderRecord`` with already-resolved
references (customer, delivery person, one product per line item) into the
read-only views served to the dashboard.  It performs no I/O: resolution is
the caller's job, which keeps the builder a pure function of its inputs.

Unresolvable references degrade to sentinel labels ("Unknown User",
"Unknown Product"...) instead of failing the whole view.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Sequence

from modules.core.references import Resolution
from modules.orders.constants import (
    NO_ADDRESS,
    PLACEHOLDER_PHOTO,
    UNKNOWN_ADDRESS_TITLE,
    UNKNOWN_CUSTOMER,
    UNKNOWN_DELIVERY_PERSON,
    UNKNOWN_PRODUCT,
    UNNAMED_PRODUCT,
)
from modules.orders.dtos import (
    ZERO,
    AddressView,
    DeliveryPersonView,
    LineItemView,
    OrderRecord,
    OrderSummary,
    OrderView,
)
from modules.orders.exceptions import LineItemMismatch
from modules.orders.status import delivery_duration, derive_status
from modules.users.dtos import PersonRecord


class OrderViewBuilder:
    """Builds ``OrderView`` / ``OrderSummary`` objects from resolved inputs."""

    def build(
        self,
        order: OrderRecord,
        customer: Resolution,
        delivery_person: Optional[Resolution],
        products: Sequence[Resolution],
        now: datetime,
    ) -> OrderView:
        """Assemble the detail view of *order*.

        ``products`` must hold exactly one resolution per line item, in the
        same order.  ``delivery_person`` is ``None`` when the order carries
        no delivery reference (not yet assigned).

        Raises:
            LineItemMismatch: ``products`` and the line items differ in length.
        """
        if len(products) != len(order.items):
            raise LineItemMismatch(
                f"Order {order.id}: {len(order.items)} line items, "
                f"{len(products)} product resolutions."
            )

        items: List[LineItemView] = []
        for item, product in zip(order.items, products):
            items.append(
                LineItemView(
                    product_ref=product.reference.path if product.reference else None,
                    product_name=self._product_name(product),
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    line_subtotal=item.unit_price * item.quantity,
                )
            )

        items_total = sum((i.line_subtotal for i in items), ZERO)
        return OrderView(
            id=order.id,
            customer_id=customer.reference.id if customer.reference else None,
            customer_name=self.customer_name(customer),
            delivery_person=self._delivery_person(delivery_person),
            address=self._address(order),
            items=items,
            total_item_count=self.total_item_count(order),
            total_amount=order.total_amount,
            items_total=items_total,
            amount_discrepancy=order.total_amount - items_total,
            placed_at=order.placed_at,
            shipping_started_at=order.shipping_started_at,
            finished_at=order.finished_at,
            status=derive_status(
                now, order.placed_at, order.shipping_started_at, order.finished_at
            ),
            delivery_duration=delivery_duration(
                order.shipping_started_at, order.finished_at
            ),
        )

    def build_summary(
        self, order: OrderRecord, customer: Resolution, now: datetime
    ) -> OrderSummary:
        return OrderSummary(
            id=order.id,
            customer_name=self.customer_name(customer),
            address=order.address.text or NO_ADDRESS,
            placed_at=order.placed_at,
            status=derive_status(
                now, order.placed_at, order.shipping_started_at, order.finished_at
            ),
            total_amount=order.total_amount,
            total_item_count=self.total_item_count(order),
        )

    # ------------------------------------------------------------------
    # Field helpers
    # ------------------------------------------------------------------

    @staticmethod
    def total_item_count(order: OrderRecord) -> int:
        return sum(item.quantity for item in order.items)

    @staticmethod
    def customer_name(customer: Resolution) -> str:
        if not customer.is_resolved:
            return UNKNOWN_CUSTOMER
        return PersonRecord.from_document(customer.document).full_name

    @staticmethod
    def _product_name(product: Resolution) -> str:
        if not product.is_resolved:
            return UNKNOWN_PRODUCT
        name = product.field("name")
        return name if isinstance(name, str) and name.strip() else UNNAMED_PRODUCT

    @staticmethod
    def _delivery_person(
        resolution: Optional[Resolution],
    ) -> Optional[DeliveryPersonView]:
        if resolution is None:
            return None
        if not resolution.is_resolved:
            return DeliveryPersonView(
                id=resolution.reference.id if resolution.reference else None,
                name=UNKNOWN_DELIVERY_PERSON,
                photo_url=PLACEHOLDER_PHOTO,
            )
        person = PersonRecord.from_document(resolution.document)
        return DeliveryPersonView(
            id=person.id,
            name=person.full_name,
            photo_url=person.photo_url or PLACEHOLDER_PHOTO,
            phone_number=person.phone_number,
        )

    @staticmethod
    def _address(order: OrderRecord) -> AddressView:
        location = order.address.location
        return AddressView(
            text=order.address.text or NO_ADDRESS,
            title=order.address.title or UNKNOWN_ADDRESS_TITLE,
            latitude=location.latitude if location else None,
            longitude=location.longitude if location else None,
        )

