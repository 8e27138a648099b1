"""Saved verse, prayer point and account Pydantic schemas."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from lions_bible.services.accounts import AccountDeleted
from lions_bible.services.devotions import PrayerView

from .user import AuthorSummary


class SavedStateResponse(BaseModel):
    """Whether the caller has saved a verse."""

    verse_id: int
    saved: bool


class PrayerPointCreate(BaseModel):
    """Schema for adding a prayer point to a verse."""

    text: str = Field(..., max_length=2000, description="Plain-text prayer")


class PrayerPointResponse(BaseModel):
    """A prayer point shown on the verse page."""

    id: int
    verse_id: int
    text: str
    created_at: datetime
    author: AuthorSummary

    @classmethod
    def from_view(cls, view: PrayerView) -> PrayerPointResponse:
        prayer = view.prayer
        return cls(
            id=prayer.id,
            verse_id=prayer.verse_id,
            text=prayer.prayer_text,
            created_at=prayer.created_at,
            author=AuthorSummary.for_user(prayer.user_id, view.author),
        )


class AccountDeletedResponse(BaseModel):
    """What was removed when an account was deleted."""

    user_id: str
    status: str = "deleted"
    profile_removed: bool
    saved_verses: int = Field(description="Saved verses removed")
    prayer_points: int = Field(description="Prayer points removed")

    @classmethod
    def from_result(cls, result: AccountDeleted) -> AccountDeletedResponse:
        return cls(
            user_id=result.user_id,
            profile_removed=result.profile_removed,
            saved_verses=result.saved_verses,
            prayer_points=result.prayer_points,
        )
