"""Base abstract model and the document table backing the store.

Provides:
- ``BaseModel``: UUIDv7 primary key + created_at / updated_at timestamps.
- ``StoredDocument``: one schemaless record of a named collection.

Design decisions:
- Records keep the field names written by the mobile apps (``TotalAmount``,
  ``DatePAssCommande``...) inside ``data``; nothing is normalised on write.
- ``document_id`` is the public identifier used in references
  (``collection/document_id``).  It is unique per collection, not globally.
"""

from __future__ import annotations

import uuid6
from django.core.serializers.json import DjangoJSONEncoder
from django.db import models

# ---------------------------------------------------------------------------
# BaseModel
# ---------------------------------------------------------------------------


class BaseModel(models.Model):
    """Abstract base with UUIDv7 PK and timestamp bookkeeping."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid6.uuid7,
        editable=False,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs) -> None:
        """Ensure ``updated_at`` is refreshed even when ``update_fields`` is passed."""
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "updated_at" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["updated_at"]
        super().save(*args, **kwargs)


# ---------------------------------------------------------------------------
# Document store table
# ---------------------------------------------------------------------------


class StoredDocument(BaseModel):
    """A raw record of a collection (``Commande``, ``users``, ``Promotion``...)."""

    collection = models.CharField(max_length=100)
    document_id = models.CharField(max_length=255)
    data = models.JSONField(default=dict, encoder=DjangoJSONEncoder)

    class Meta:
        db_table = "stored_documents"
        ordering = ["collection", "created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["collection", "document_id"],
                name="stored_documents_collection_doc_uniq",
            ),
        ]
        indexes = [
            models.Index(fields=["collection"], name="stored_documents_coll_idx"),
        ]

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.collection}/{self.document_id}"
