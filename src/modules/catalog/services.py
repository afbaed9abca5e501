"""Catalog service.

Builds the category -> type options used by the product forms.  A
category stores its types as a list of references into the ``type``
collection; older records hold bare type ids instead of paths.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional

import structlog

from modules.catalog.dtos import (
    UNNAMED_CATEGORY,
    UNNAMED_TYPE,
    CategoryOption,
    TypeOption,
)
from modules.core.constants import CATEGORIES_COLLECTION, TYPES_COLLECTION
from modules.core.references import (
    MalformedReference,
    Reference,
    ReferenceResolver,
    Resolution,
)
from shared.domain.records import FieldReader

if TYPE_CHECKING:
    from modules.core.store.interfaces import Document, IDocumentStore

logger = structlog.get_logger(__name__)


def type_reference(raw: Any) -> Any:
    """Read a bare id as a reference into the ``type`` collection."""
    if isinstance(raw, str) and raw.strip() and "/" not in raw.strip("/"):
        return {"collection": TYPES_COLLECTION, "id": raw.strip("/")}
    return raw


def filter_categories(
    categories: List[CategoryOption], query: Optional[str]
) -> List[CategoryOption]:
    """Case-insensitive match on the category name or any of its type names."""
    needle = (query or "").strip().lower()
    if not needle:
        return categories
    return [
        c
        for c in categories
        if needle in c.name.lower() or any(needle in t.name.lower() for t in c.types)
    ]


def _type_name(resolution: Resolution) -> str:
    name = resolution.field("name")
    return name.strip() if isinstance(name, str) and name.strip() else UNNAMED_TYPE


class CatalogService:
    def __init__(
        self, store: IDocumentStore, resolver: Optional[ReferenceResolver] = None
    ) -> None:
        self._store = store
        self._resolver = resolver or ReferenceResolver(store)

    def category_options(self, query: Optional[str] = None) -> List[CategoryOption]:
        """Every category with its resolved types.

        Type references that cannot be resolved are dropped.  All type
        references of all categories are resolved in one batch.
        """
        documents = self._store.list_documents(CATEGORIES_COLLECTION)
        type_lists = [self._type_refs(doc) for doc in documents]

        flat = [ref for refs in type_lists for ref in refs]
        resolutions = iter(self._resolver.resolve_many(flat))

        options = []
        for document, refs in zip(documents, type_lists):
            types = []
            for _ in refs:
                resolution = next(resolutions)
                if not resolution.is_resolved:
                    continue
                types.append(
                    TypeOption(id=resolution.document.id, name=_type_name(resolution))
                )
            reader = FieldReader(document)
            options.append(
                CategoryOption(
                    id=document.id,
                    name=reader.text("name") or UNNAMED_CATEGORY,
                    image=reader.text("image"),
                    types=tuple(types),
                )
            )

        logger.info("catalog.options_built", categories=len(options))
        return filter_categories(options, query)

    def type_belongs_to_category(self, category_id: str, type_ref: Any) -> bool:
        """Whether *type_ref* is one of the types listed by the category.

        ``False`` for an unknown category or an unparseable type reference.
        """
        document = self._store.get_document(CATEGORIES_COLLECTION, category_id)
        if document is None:
            return False
        try:
            wanted = Reference.parse(type_reference(type_ref))
        except MalformedReference:
            return False

        for raw in self._type_refs(document):
            try:
                if Reference.parse(raw) == wanted:
                    return True
            except MalformedReference:
                continue
        return False

    @staticmethod
    def _type_refs(document: Document) -> List[Any]:
        raw = document.get("types")
        if raw is None:
            return []
        if not isinstance(raw, list):
            FieldReader(document).mark_malformed("types", "Not a list of references")
            return []
        return [type_reference(item) for item in raw]
