"""Catalog option DTOs (Pydantic v2, immutable)."""

from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

UNNAMED_CATEGORY = "Unnamed Category"
UNNAMED_TYPE = "Unnamed Type"


class TypeOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class CategoryOption(BaseModel):
    """A category with its resolved product types."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    image: Optional[str] = None
    types: Tuple[TypeOption, ...] = ()
