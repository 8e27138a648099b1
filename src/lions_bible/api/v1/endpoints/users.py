"""Profile and account endpoints for the Lions Bible API."""

from __future__ import annotations

from fastapi import APIRouter

from lions_bible.api.v1.dependencies import (
    AccountServiceDep,
    ActorDep,
    DevotionServiceDep,
    ListingServiceDep,
)
from lions_bible.schemas import AccountDeletedResponse, ProfileResponse, VerseLocation

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me/saved-verses", response_model=list[VerseLocation])
def list_saved_verses(actor: ActorDep, devotions: DevotionServiceDep) -> list[VerseLocation]:
    """List the caller's saved verses, most recently saved first."""
    return [VerseLocation.model_validate(verse) for verse in devotions.saved_verses(actor)]


@router.delete("/me", response_model=AccountDeletedResponse)
def delete_account(actor: ActorDep, accounts: AccountServiceDep) -> AccountDeletedResponse:
    """Delete the caller's profile, saved verses and prayer points.

    Interpretations and replies remain, shown without a profile.
    """
    return AccountDeletedResponse.from_result(accounts.delete_account(actor))


@router.get("/{username}", response_model=ProfileResponse)
def get_profile(username: str, listings: ListingServiceDep) -> ProfileResponse:
    """Return a profile by username; ``@name`` and ``name`` are equivalent."""
    return ProfileResponse.from_view(listings.profile(username))
