"""Document store package."""

from modules.core.store.django_store import DjangoDocumentStore
from modules.core.store.interfaces import Document, DocumentStoreError, IDocumentStore

__all__ = ["Document", "DocumentStoreError", "DjangoDocumentStore", "IDocumentStore"]
