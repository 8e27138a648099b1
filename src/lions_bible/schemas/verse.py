"""Verse-related Pydantic schemas."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from lions_bible.services.listings import ReferenceView, VersePage


class VerseLocation(BaseModel):
    """Book, chapter and verse of a neighbouring verse."""

    id: int
    book: str
    slug: str = Field(description="Book name as used in verse URLs")
    chapter: int
    verse: int

    model_config = ConfigDict(from_attributes=True)


class VerseResponse(BaseModel):
    """Schema for a verse and its texts."""

    id: int
    book: str
    slug: str
    chapter: int
    verse: int
    original_text: str | None = None
    transliteration: str | None = None
    verbatim_english: str | None = None
    kjv: str | None = None

    model_config = ConfigDict(from_attributes=True)


class VersePageResponse(BaseModel):
    """A verse with links to the previous and next verse in the same book."""

    verse: VerseResponse
    previous: VerseLocation | None = Field(None, description="Previous verse in the book")
    next: VerseLocation | None = Field(None, description="Next verse in the book")

    @classmethod
    def from_view(cls, page: VersePage) -> VersePageResponse:
        return cls(
            verse=VerseResponse.model_validate(page.verse),
            previous=VerseLocation.model_validate(page.previous) if page.previous else None,
            next=VerseLocation.model_validate(page.next) if page.next else None,
        )


class InboundReferenceResponse(BaseModel):
    """A visible reference from another verse's interpretation."""

    id: int
    source: VerseLocation
    interpretation_id: int | None
    user_id: str
    reference_text: str
    created_at: datetime

    @classmethod
    def from_view(cls, view: ReferenceView) -> InboundReferenceResponse:
        reference = view.reference
        return cls(
            id=reference.id,
            source=VerseLocation.model_validate(view.source),
            interpretation_id=reference.interpretation_id,
            user_id=reference.user_id,
            reference_text=reference.reference_text,
            created_at=reference.created_at,
        )
