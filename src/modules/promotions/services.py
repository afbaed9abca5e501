"""Promotion service (Use Cases).

Prepares promotions for persistence and answers the list queries of the
promotion pages.  ``prepare_*`` methods validate and return what should be
written; the caller saves it through the document store.

Rules enforced:
- ``dateStart`` must be strictly before ``dateEnd``.
- A code is unique among stored promotions (case-insensitive) and never
  changes once created.
- A promotion is active while ``now <= dateEnd``; the start date is not
  enforced.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

import structlog
from django.utils import timezone

from modules.core.constants import PROMOTIONS_COLLECTION
from modules.promotions.codes import Chooser, generate_code
from modules.promotions.dtos import (
    CreatePromotionDTO,
    NewPromotion,
    PromotionRecord,
    UpdatePromotionDTO,
)
from modules.promotions.exceptions import InvalidValidityWindow, PromotionNotFound

if TYPE_CHECKING:
    from modules.core.store.interfaces import IDocumentStore

logger = structlog.get_logger(__name__)

SORT_ORDERS = ("asc", "desc")


def validate_window(date_start: Optional[datetime], date_end: Optional[datetime]) -> None:
    """Raise ``InvalidValidityWindow`` unless ``date_start < date_end``."""
    if date_start is None or date_end is None:
        raise InvalidValidityWindow("Both start and end dates are required.")
    if date_start >= date_end:
        raise InvalidValidityWindow("Start date must be before the end date.")


def active_promotions(
    promotions: Iterable[PromotionRecord], now: datetime
) -> List[PromotionRecord]:
    """Promotions still running at *now*, soonest to expire first."""
    active = [p for p in promotions if p.is_active(now)]
    return sorted(active, key=lambda p: (p.date_end, p.id))


def search_promotions(
    promotions: Iterable[PromotionRecord],
    query: Optional[str] = None,
    order: str = "desc",
) -> List[PromotionRecord]:
    """Case-insensitive title search, sorted by creation date.

    Promotions without a creation date come last in either order.

    Raises:
        ValueError: *order* is not ``asc`` or ``desc``.
    """
    if order not in SORT_ORDERS:
        raise ValueError(f"order must be 'asc' or 'desc', got {order!r}")

    needle = (query or "").strip().lower()
    matches = [p for p in promotions if needle in (p.title or "").lower()]

    dated = [p for p in matches if p.creation_date is not None]
    undated = sorted(
        (p for p in matches if p.creation_date is None), key=lambda p: p.id
    )
    dated.sort(key=lambda p: (p.creation_date, p.id), reverse=order == "desc")
    return dated + undated


class PromotionService:
    """Application service for promotions.

    Receives the document store via constructor injection (DIP).
    """

    def __init__(self, store: IDocumentStore, chooser: Optional[Chooser] = None) -> None:
        self._store = store
        self._chooser = chooser

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_promotions(self) -> List[PromotionRecord]:
        documents = self._store.list_documents(PROMOTIONS_COLLECTION)
        return [PromotionRecord.from_document(doc) for doc in documents]

    def get_promotion(self, promotion_id: str) -> PromotionRecord:
        """Raises ``PromotionNotFound`` when absent."""
        document = self._store.get_document(PROMOTIONS_COLLECTION, promotion_id)
        if document is None:
            raise PromotionNotFound(f"Promotion {promotion_id} not found.")
        return PromotionRecord.from_document(document)

    def active(self, now: Optional[datetime] = None) -> List[PromotionRecord]:
        return active_promotions(self.list_promotions(), now or timezone.now())

    def search(self, query: Optional[str] = None, order: str = "desc") -> List[PromotionRecord]:
        return search_promotions(self.list_promotions(), query, order)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def prepare_promotion(
        self,
        dto: CreatePromotionDTO,
        now: Optional[datetime] = None,
        actor_id: Optional[str] = None,
    ) -> NewPromotion:
        """Validate *dto* and attach a fresh unique code.

        Raises:
            InvalidValidityWindow: the start date is not before the end date.
            CodeGenerationExhausted: no free code could be generated.
        """
        validate_window(dto.date_start, dto.date_end)

        existing = [p.code for p in self.list_promotions() if p.code]
        code = generate_code(dto.description, existing, chooser=self._chooser)

        promotion = NewPromotion(
            code=code,
            title=dto.title,
            description=dto.description,
            date_start=dto.date_start,
            date_end=dto.date_end,
            percentage=dto.percentage,
            max_number=dto.max_number,
            image=dto.image,
            creation_date=now or timezone.now(),
            created_by=actor_id,
        )
        logger.info("promotion.prepared", code=code, created_by=actor_id)
        return promotion

    def prepare_update(self, promotion_id: str, dto: UpdatePromotionDTO) -> Dict[str, Any]:
        """Merge the edited fields into the stored document.

        Returns the full document data to write back.  The stored ``code``
        is never part of the changes.

        Raises:
            PromotionNotFound: no promotion with *promotion_id*.
            InvalidValidityWindow: the merged window is not valid.
        """
        document = self._store.get_document(PROMOTIONS_COLLECTION, promotion_id)
        if document is None:
            raise PromotionNotFound(f"Promotion {promotion_id} not found.")

        current = PromotionRecord.from_document(document)
        validate_window(
            dto.date_start or current.date_start,
            dto.date_end or current.date_end,
        )

        changes = dto.changes()
        data = {**document.data, **changes}
        logger.info(
            "promotion.update_prepared",
            promotion_id=promotion_id,
            fields=sorted(changes),
        )
        return data
