"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from lions_bible.services.counters import CountsSnapshot


class ErrorResponse(BaseModel):
    """Body returned for every domain error."""

    detail: str = Field(..., description="User-facing message")
    code: str = Field(..., description="Stable machine-readable error code")


class CountsResponse(BaseModel):
    """Aggregate counts for one interpretation or reply."""

    upvote_count: int = 0
    report_count: int = 0
    reply_count: int | None = Field(None, description="Visible replies; interpretations only")

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_snapshot(cls, snapshot: CountsSnapshot) -> CountsResponse:
        return cls(
            upvote_count=snapshot.upvote_count,
            report_count=snapshot.report_count,
            reply_count=snapshot.reply_count,
        )
