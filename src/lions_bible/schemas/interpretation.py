"""Interpretation and reply Pydantic schemas."""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from lions_bible.models import VerseReference
from lions_bible.services.listings import InterpretationView, ReplyView
from lions_bible.services.moderation import InterpretationSubmitted, ReplySubmitted

from .common import CountsResponse
from .user import AuthorSummary


class InterpretationCreate(BaseModel):
    """Schema for submitting an interpretation."""

    text: str = Field(..., max_length=10000, description="Interpretation text; may embed references")


class ReplyCreate(BaseModel):
    """Schema for submitting a reply."""

    text: str = Field(..., max_length=5000, description="Plain-text reply")


class ReferenceResponse(BaseModel):
    """A reference extracted from a submitted interpretation."""

    id: int
    source_verse_id: int
    target_verse_id: int
    reference_text: str

    model_config = ConfigDict(from_attributes=True)


class InterpretationResponse(BaseModel):
    """Schema for interpretation information returned by the API."""

    id: int
    verse_id: int
    text: str
    created_at: datetime
    author: AuthorSummary
    counts: CountsResponse

    @classmethod
    def from_view(cls, view: InterpretationView) -> InterpretationResponse:
        item = view.interpretation
        return cls(
            id=item.id,
            verse_id=item.verse_id,
            text=item.text,
            created_at=item.created_at,
            author=AuthorSummary.for_user(item.user_id, view.author),
            counts=CountsResponse.from_snapshot(view.counts),
        )


class InterpretationSubmittedResponse(InterpretationResponse):
    """Created interpretation together with the references found in it."""

    references: list[ReferenceResponse] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: InterpretationSubmitted) -> InterpretationSubmittedResponse:
        item = result.interpretation
        return cls(
            id=item.id,
            verse_id=item.verse_id,
            text=item.text,
            created_at=item.created_at,
            author=AuthorSummary(user_id=item.user_id),
            counts=CountsResponse.from_snapshot(result.counts),
            references=[_reference(ref) for ref in result.references],
        )


def _reference(reference: VerseReference) -> ReferenceResponse:
    return ReferenceResponse.model_validate(reference)


class ReplyResponse(BaseModel):
    """Schema for reply information returned by the API."""

    id: int
    interpretation_id: int
    verse_id: int
    text: str
    created_at: datetime
    author: AuthorSummary
    counts: CountsResponse

    @classmethod
    def from_view(cls, view: ReplyView) -> ReplyResponse:
        reply = view.reply
        return cls(
            id=reply.id,
            interpretation_id=reply.interpretation_id,
            verse_id=reply.verse_id,
            text=reply.text,
            created_at=reply.created_at,
            author=AuthorSummary.for_user(reply.user_id, view.author),
            counts=CountsResponse.from_snapshot(view.counts),
        )


class ReplySubmittedResponse(ReplyResponse):
    """Created reply plus the parent's refreshed counts."""

    parent_counts: CountsResponse

    @classmethod
    def from_result(cls, result: ReplySubmitted) -> ReplySubmittedResponse:
        reply = result.reply
        return cls(
            id=reply.id,
            interpretation_id=reply.interpretation_id,
            verse_id=reply.verse_id,
            text=reply.text,
            created_at=reply.created_at,
            author=AuthorSummary(user_id=reply.user_id),
            counts=CountsResponse.from_snapshot(result.counts),
            parent_counts=CountsResponse.from_snapshot(result.parent_counts),
        )


class DeletedResponse(BaseModel):
    """Acknowledgement of an owner deletion."""

    id: int
    status: Literal["deleted"] = "deleted"
    parent_counts: CountsResponse | None = Field(
        None,
        description="Parent interpretation counts after a reply is deleted",
    )
