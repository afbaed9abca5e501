"""Document store contract (Dependency Inversion Principle).

The engine never talks to a database directly.  Services receive an
``IDocumentStore`` through their constructor and only read from it; the
single write path (``save_document``) is used by API views that persist a
record the engine validated.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


class DocumentStoreError(Exception):
    """The store backend failed (connection lost, timeout, bad query...)."""


@dataclass(frozen=True)
class Document:
    """Immutable snapshot of one stored record."""

    collection: str
    id: str
    data: Mapping[str, Any] = field(default_factory=dict)

    @property
    def path(self) -> str:
        return f"{self.collection}/{self.id}"

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)


class IDocumentStore(ABC):
    """Contract for the schemaless store holding every collection."""

    @abstractmethod
    def get_document(self, collection: str, id: str) -> Optional[Document]:
        """Fetch a single record; ``None`` when it does not exist."""

    @abstractmethod
    def list_documents(
        self, collection: str, filters: Optional[Dict[str, Any]] = None
    ) -> List[Document]:
        """Fetch every record of *collection* matching the equality *filters*."""

    @abstractmethod
    def save_document(
        self, collection: str, data: Mapping[str, Any], id: Optional[str] = None
    ) -> str:
        """Create or replace a record and return its identifier."""
