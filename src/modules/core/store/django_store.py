"""Django ORM implementation of the document store.

Satisfies ``IDocumentStore`` on top of the ``StoredDocument`` table.
Equality filters are translated into JSON key lookups on ``data``.
Backend errors are re-raised as ``DocumentStoreError`` so callers never
depend on Django exception types.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

import structlog
import uuid6
from django.db import DatabaseError, transaction

from modules.core.models import StoredDocument
from modules.core.store.interfaces import Document, DocumentStoreError, IDocumentStore

logger = structlog.get_logger(__name__)


class DjangoDocumentStore(IDocumentStore):
    """Concrete document store backed by Django ORM."""

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_document(self, collection: str, id: str) -> Optional[Document]:
        try:
            row = StoredDocument.objects.filter(
                collection=collection, document_id=id
            ).first()
        except DatabaseError as exc:
            logger.error("store.get_failed", collection=collection, document_id=id)
            raise DocumentStoreError(f"Could not read {collection}/{id}.") from exc
        return self._to_document(row) if row else None

    def list_documents(
        self, collection: str, filters: Optional[Dict[str, Any]] = None
    ) -> List[Document]:
        queryset = StoredDocument.objects.filter(collection=collection)
        for key, value in (filters or {}).items():
            queryset = queryset.filter(**{f"data__{key}": value})
        try:
            rows = list(queryset.order_by("created_at", "document_id"))
        except DatabaseError as exc:
            logger.error("store.list_failed", collection=collection)
            raise DocumentStoreError(f"Could not list {collection}.") from exc
        return [self._to_document(row) for row in rows]

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    @transaction.atomic
    def save_document(
        self, collection: str, data: Mapping[str, Any], id: Optional[str] = None
    ) -> str:
        document_id = id or uuid6.uuid7().hex
        try:
            StoredDocument.objects.update_or_create(
                collection=collection,
                document_id=document_id,
                defaults={"data": dict(data)},
            )
        except DatabaseError as exc:
            logger.error(
                "store.save_failed", collection=collection, document_id=document_id
            )
            raise DocumentStoreError(
                f"Could not save {collection}/{document_id}."
            ) from exc
        logger.info("store.saved", collection=collection, document_id=document_id)
        return document_id

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    @staticmethod
    def _to_document(row: StoredDocument) -> Document:
        return Document(collection=row.collection, id=row.document_id, data=row.data)
