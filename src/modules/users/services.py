"""User service (Use Cases).

Backs the customer and delivery-person lists.

Rules enforced:
- A customer's total spent is the sum of ``TotalAmount`` over the orders
  whose ``user`` reference points at them, accumulated in integer cents.
  Orders with a malformed reference or one into another collection count
  for nobody.
- A delivery person is Available with a ``ShippingScore`` of zero and Busy
  otherwise.
"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

import structlog

from modules.core.constants import (
    CLIENT_ROLE,
    DELIVERY_PERSON_ROLE,
    USERS_COLLECTION,
)
from modules.core.references import MalformedReference, Reference
from modules.orders.services import OrderQueryService
from modules.users.constants import Availability
from modules.users.dtos import CustomerSpending, PersonRecord
from shared.domain.values import from_minor_units, to_minor_units

if TYPE_CHECKING:
    from modules.core.store.interfaces import IDocumentStore

logger = structlog.get_logger(__name__)


def filter_delivery_people(
    people: Iterable[PersonRecord],
    query: Optional[str] = None,
    availability: Optional[Availability] = None,
) -> List[PersonRecord]:
    """Case-insensitive search on first name, second name or any address."""
    needle = (query or "").strip().lower()
    result = []
    for person in people:
        if needle:
            haystack = [person.first_name or "", person.second_name or ""]
            haystack.extend(person.addresses)
            if not any(needle in text.lower() for text in haystack):
                continue
        if availability is not None and person.availability != availability:
            continue
        result.append(person)
    return result


class UserService:
    """Application service for the user lists.

    Receives the document store via constructor injection (DIP).
    """

    def __init__(
        self, store: IDocumentStore, orders: Optional[OrderQueryService] = None
    ) -> None:
        self._store = store
        self._orders = orders or OrderQueryService(store)

    def customers_with_spending(self) -> List[CustomerSpending]:
        """Every customer with their order count and total spent.

        Sorted by total spent, highest first, then by id.
        """
        documents = self._store.list_documents(
            USERS_COLLECTION, {"role": CLIENT_ROLE}
        )
        customers = [PersonRecord.from_document(doc) for doc in documents]

        cents: Dict[str, int] = defaultdict(int)
        counts: Dict[str, int] = defaultdict(int)
        for record in self._orders.load_records():
            try:
                ref = Reference.parse(record.customer_ref)
            except MalformedReference:
                logger.info("customer.order_unattributed", order_id=record.id)
                continue
            if ref.collection != USERS_COLLECTION:
                logger.info("customer.order_unattributed", order_id=record.id)
                continue
            cents[ref.id] += to_minor_units(record.total_amount)
            counts[ref.id] += 1

        result = [
            CustomerSpending(
                id=customer.id,
                name=customer.full_name,
                email=customer.email,
                phone_number=customer.phone_number,
                photo_url=customer.photo_url,
                total_spent=from_minor_units(cents.get(customer.id, 0)),
                order_count=counts.get(customer.id, 0),
            )
            for customer in customers
        ]
        result.sort(key=lambda c: c.id)
        result.sort(key=lambda c: c.total_spent, reverse=True)
        logger.info("customer.spending_computed", customers=len(result))
        return result

    def delivery_people(
        self,
        query: Optional[str] = None,
        availability: Optional[Availability] = None,
    ) -> List[PersonRecord]:
        documents = self._store.list_documents(
            USERS_COLLECTION, {"role": DELIVERY_PERSON_ROLE}
        )
        people = [PersonRecord.from_document(doc) for doc in documents]
        return filter_delivery_people(people, query, availability)
