"""Vote and report Pydantic schemas."""
from __future__ import annotations

from pydantic import BaseModel, Field

from lions_bible.services.moderation import FlagRecorded, VoteRecorded
from lions_bible.services.policy import Visibility

from .common import CountsResponse


class VoteResponse(BaseModel):
    """Result of an upvote."""

    vote_id: int
    counts: CountsResponse

    @classmethod
    def from_result(cls, result: VoteRecorded) -> VoteResponse:
        return cls(vote_id=result.vote_id, counts=CountsResponse.from_snapshot(result.counts))


class MyVoteResponse(BaseModel):
    """Whether the caller has upvoted a subject."""

    has_voted: bool


class FlagCreate(BaseModel):
    """Schema for reporting content.

    ``reason`` is validated by the moderation core so a missing or unknown
    reason produces the same error body as every other rejected report.
    """

    reason: str | None = Field(None, description="One of: spam, blasphemy, offensive")
    explanation: str | None = Field(None, max_length=1000, description="Optional, 20 words max")


class FlagResponse(BaseModel):
    """Result of a report, including whether it hid the subject."""

    flag_id: int
    counts: CountsResponse
    visibility: Visibility

    @classmethod
    def from_result(cls, result: FlagRecorded) -> FlagResponse:
        return cls(
            flag_id=result.flag_id,
            counts=CountsResponse.from_snapshot(result.counts),
            visibility=result.visibility,
        )
