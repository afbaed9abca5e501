"""Zone listing."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Optional

from modules.core.constants import ZONES_COLLECTION
from modules.zones.dtos import ZoneRecord

if TYPE_CHECKING:
    from modules.core.store.interfaces import IDocumentStore


def filter_zones(
    zones: Iterable[ZoneRecord],
    query: Optional[str] = None,
    is_open: Optional[bool] = None,
) -> List[ZoneRecord]:
    """Case-insensitive search on ZIP code or name, then open/closed filter.

    A zone whose ``isOpen`` flag is unknown matches neither filter value.
    """
    needle = (query or "").strip().lower()
    result = []
    for zone in zones:
        if needle and not (
            needle in (zone.zip_code or "").lower()
            or needle in (zone.name or "").lower()
        ):
            continue
        if is_open is not None and zone.is_open is not is_open:
            continue
        result.append(zone)
    return result


class ZoneService:
    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    def list_zones(
        self, query: Optional[str] = None, is_open: Optional[bool] = None
    ) -> List[ZoneRecord]:
        documents = self._store.list_documents(ZONES_COLLECTION)
        zones = [ZoneRecord.from_document(doc) for doc in documents]
        return filter_zones(zones, query, is_open)
