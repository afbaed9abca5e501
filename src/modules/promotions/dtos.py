"""Promotion DTOs.

- ``PromotionRecord``: lenient parse of a stored ``Promotion`` document.
- ``CreatePromotionDTO`` / ``UpdatePromotionDTO``: validated input from the
  promotion forms.
- ``NewPromotion``: a fully prepared promotion, ready to be persisted.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shared.domain.records import FieldReader
from shared.domain.values import parse_timestamp

if TYPE_CHECKING:
    from modules.core.store.interfaces import Document


def _coerce_timestamp(value: Any) -> Any:
    # Same shapes as stored timestamps; naive input is taken as UTC
    return parse_timestamp(value)


# ---------------------------------------------------------------------------
# Stored record
# ---------------------------------------------------------------------------


class PromotionRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    code: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    date_start: Optional[datetime] = None
    date_end: Optional[datetime] = None
    percentage: Optional[float] = None
    max_number: Optional[int] = None
    image: Optional[str] = None
    creation_date: Optional[datetime] = None
    created_by: Optional[str] = None
    malformed_fields: Tuple[str, ...] = ()

    def is_active(self, now: datetime) -> bool:
        """Active until ``date_end`` inclusive; the start date is not checked."""
        return self.date_end is not None and now <= self.date_end

    @classmethod
    def from_document(cls, document: Document) -> PromotionRecord:
        reader = FieldReader(document)
        return cls(
            id=document.id,
            code=reader.text("code"),
            title=reader.text("title"),
            description=reader.text("description"),
            date_start=reader.timestamp("dateStart"),
            date_end=reader.timestamp("dateEnd"),
            percentage=reader.number("percentage"),
            max_number=reader.integer("maxNumber"),
            image=reader.text("image"),
            creation_date=reader.timestamp("creationDate"),
            created_by=reader.text("createdBy"),
            malformed_fields=tuple(reader.malformed),
        )


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreatePromotionDTO(BaseModel):
    """Immutable DTO for promotion creation requests.

    The validity window itself (``date_start < date_end``) is checked by
    ``PromotionService`` so that it surfaces as ``InvalidValidityWindow``.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    date_start: datetime
    date_end: datetime
    percentage: float = Field(gt=0, le=100)
    max_number: int = Field(ge=1)
    image: Optional[str] = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("date_start", "date_end", mode="before")
    @classmethod
    def coerce_timestamp(cls, v: Any) -> Any:
        return _coerce_timestamp(v)


class UpdatePromotionDTO(BaseModel):
    """Immutable DTO for promotion edits.

    All fields are optional; only supplied fields are changed.  The code is
    not editable.
    """

    model_config = ConfigDict(frozen=True)

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    date_start: Optional[datetime] = None
    date_end: Optional[datetime] = None
    percentage: Optional[float] = Field(default=None, gt=0, le=100)
    max_number: Optional[int] = Field(default=None, ge=1)
    image: Optional[str] = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("date_start", "date_end", mode="before")
    @classmethod
    def coerce_timestamp(cls, v: Any) -> Any:
        return _coerce_timestamp(v)

    def changes(self) -> Dict[str, Any]:
        """Supplied fields, keyed by their stored document names."""
        supplied = self.model_dump(exclude_none=True)
        return {DOCUMENT_FIELDS[name]: value for name, value in supplied.items()}


# ---------------------------------------------------------------------------
# Prepared output
# ---------------------------------------------------------------------------


class NewPromotion(BaseModel):
    """A validated promotion with its generated code, not yet saved."""

    model_config = ConfigDict(frozen=True)

    code: str
    title: str
    description: str
    date_start: datetime
    date_end: datetime
    percentage: float
    max_number: int
    image: Optional[str] = None
    creation_date: datetime
    created_by: Optional[str] = None

    def to_document(self) -> Dict[str, Any]:
        return {
            DOCUMENT_FIELDS[name]: value
            for name, value in self.model_dump().items()
        }


DOCUMENT_FIELDS = {
    "code": "code",
    "title": "title",
    "description": "description",
    "date_start": "dateStart",
    "date_end": "dateEnd",
    "percentage": "percentage",
    "max_number": "maxNumber",
    "image": "image",
    "creation_date": "creationDate",
    "created_by": "createdBy",
}
