"""Reference resolution over the document store.

A reference points from one record to another as ``collection/id``.  Raw
records carry them in several shapes (a path string, a ``{"path": ...}``
map exported from the mobile backend, an explicit
``{"collection": ..., "id": ...}`` map), and sometimes not at all.

``ReferenceResolver`` turns any of those into a ``Resolution``: either the
referenced ``Document`` or an unresolved marker carrying the reason.  It
never raises for a missing, malformed or dangling reference, and a batch of
N references always yields N resolutions, so list pages can render
"Unknown ..." for the broken ones instead of failing.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

import structlog

from modules.core.store.interfaces import Document, DocumentStoreError, IDocumentStore

logger = structlog.get_logger(__name__)


class MalformedReference(ValueError):
    """A reference value cannot be parsed into ``collection`` + ``id``."""


class UnresolvedReason(str, enum.Enum):
    MISSING = "missing"
    MALFORMED = "malformed"
    NOT_FOUND = "not_found"
    UNAVAILABLE = "unavailable"


# ---------------------------------------------------------------------------
# Reference
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Reference:
    collection: str
    id: str

    @property
    def path(self) -> str:
        return f"{self.collection}/{self.id}"

    def __str__(self) -> str:
        return self.path

    @classmethod
    def parse(cls, raw: Any) -> Reference:
        """Parse a raw reference value.

        Raises:
            MalformedReference: *raw* is not a recognised reference shape.
        """
        if isinstance(raw, Reference):
            return raw
        if isinstance(raw, dict):
            if "path" in raw:
                return cls._from_path(raw["path"])
            collection, id_ = raw.get("collection"), raw.get("id")
            if isinstance(collection, str) and isinstance(id_, str):
                return cls._checked(collection, id_, raw)
            raise MalformedReference(f"Reference map without path: {raw!r}")
        if isinstance(raw, str):
            return cls._from_path(raw)
        raise MalformedReference(f"Unsupported reference type: {type(raw).__name__}")

    @classmethod
    def of(cls, document: Document) -> Reference:
        """Derive the reference that points at *document*."""
        return cls(collection=document.collection, id=document.id)

    @classmethod
    def _from_path(cls, path: Any) -> Reference:
        if not isinstance(path, str):
            raise MalformedReference(f"Reference path is not a string: {path!r}")
        segments = path.strip().strip("/").split("/")
        # Only top-level collections are stored: exactly "collection/id".
        if len(segments) != 2:
            raise MalformedReference(f"Reference path must be collection/id: {path!r}")
        return cls._checked(segments[0], segments[1], path)

    @classmethod
    def _checked(cls, collection: str, id_: str, raw: Any) -> Reference:
        collection, id_ = collection.strip(), id_.strip()
        if not collection or not id_ or "/" in collection or "/" in id_:
            raise MalformedReference(f"Empty or nested reference segment: {raw!r}")
        return cls(collection=collection, id=id_)


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one reference.

    Exactly one of ``document`` / ``reason`` is set.  ``reference`` is
    ``None`` only when the raw value was missing or malformed.
    """

    reference: Optional[Reference]
    document: Optional[Document] = None
    reason: Optional[UnresolvedReason] = None

    @property
    def is_resolved(self) -> bool:
        return self.document is not None

    def field(self, key: str, default: Any = None) -> Any:
        """Read a field of the resolved document, ``default`` when unresolved."""
        if self.document is None:
            return default
        return self.document.get(key, default)

    @classmethod
    def unresolved(
        cls, reason: UnresolvedReason, reference: Optional[Reference] = None
    ) -> Resolution:
        return cls(reference=reference, reason=reason)


class ReferenceResolver:
    """Resolves references against an ``IDocumentStore`` (read-only)."""

    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    def resolve(self, raw: Any) -> Resolution:
        """Resolve a single raw reference; never raises for bad references."""
        return self._resolve(raw, cache=None)

    def resolve_many(self, raws: Iterable[Any]) -> List[Resolution]:
        """Resolve a batch, one result per input, in input order.

        Identical references are fetched once per batch.
        """
        cache: Dict[Reference, Resolution] = {}
        return [self._resolve(raw, cache=cache) for raw in raws]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resolve(
        self, raw: Any, cache: Optional[Dict[Reference, Resolution]]
    ) -> Resolution:
        if raw is None:
            return Resolution.unresolved(UnresolvedReason.MISSING)

        try:
            reference = Reference.parse(raw)
        except MalformedReference as exc:
            logger.warning("reference.malformed", raw=repr(raw), error=str(exc))
            return Resolution.unresolved(UnresolvedReason.MALFORMED)

        if cache is not None and reference in cache:
            return cache[reference]

        resolution = self._fetch(reference)
        if cache is not None:
            cache[reference] = resolution
        return resolution

    def _fetch(self, reference: Reference) -> Resolution:
        try:
            document = self._store.get_document(reference.collection, reference.id)
        except DocumentStoreError as exc:
            logger.warning(
                "reference.unavailable", reference=reference.path, error=str(exc)
            )
            return Resolution.unresolved(UnresolvedReason.UNAVAILABLE, reference)

        if document is None:
            logger.info("reference.not_found", reference=reference.path)
            return Resolution.unresolved(UnresolvedReason.NOT_FOUND, reference)
        return Resolution(reference=reference, document=document)
