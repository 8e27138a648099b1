"""Verse page endpoints for the Lions Bible API."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Query, status

from lions_bible.api.v1.dependencies import (
    ActorDep,
    DevotionServiceDep,
    ListingServiceDep,
    ModerationServiceDep,
)
from lions_bible.schemas import (
    InboundReferenceResponse,
    InterpretationCreate,
    InterpretationResponse,
    InterpretationSubmittedResponse,
    PrayerPointCreate,
    PrayerPointResponse,
    SavedStateResponse,
    VersePageResponse,
)

router = APIRouter(prefix="/verses", tags=["verses"])


@router.get("/{verse_id:int}/interpretations", response_model=list[InterpretationResponse])
def list_interpretations(
    verse_id: int,
    listings: ListingServiceDep,
    sort: Literal["recent", "top"] = Query("recent"),
) -> list[InterpretationResponse]:
    """List visible interpretations of a verse, newest or most upvoted first."""
    views = listings.interpretations_for_verse(verse_id, sort=sort)
    return [InterpretationResponse.from_view(view) for view in views]


@router.post(
    "/{verse_id:int}/interpretations",
    response_model=InterpretationSubmittedResponse,
    status_code=status.HTTP_201_CREATED,
)
def submit_interpretation(
    verse_id: int,
    payload: InterpretationCreate,
    actor: ActorDep,
    moderation: ModerationServiceDep,
) -> InterpretationSubmittedResponse:
    """Share the caller's interpretation of a verse.

    References written as ``[Book Chapter:Verse] (explanation)`` are recorded
    for every verse that exists.
    """
    result = moderation.submit_interpretation(actor, verse_id, payload.text)
    return InterpretationSubmittedResponse.from_result(result)


@router.get(
    "/{verse_id:int}/references/inbound",
    response_model=list[InboundReferenceResponse],
)
def list_inbound_references(
    verse_id: int,
    listings: ListingServiceDep,
) -> list[InboundReferenceResponse]:
    """List visible references from other verses to this one."""
    return [InboundReferenceResponse.from_view(view) for view in listings.inbound_references(verse_id)]


@router.get("/{verse_id:int}/saved", response_model=SavedStateResponse)
def get_saved_state(
    verse_id: int,
    actor: ActorDep,
    devotions: DevotionServiceDep,
) -> SavedStateResponse:
    """Report whether the caller has saved this verse."""
    return SavedStateResponse(verse_id=verse_id, saved=devotions.is_saved(actor, verse_id))


@router.put("/{verse_id:int}/saved", response_model=SavedStateResponse)
def save_verse(
    verse_id: int,
    actor: ActorDep,
    devotions: DevotionServiceDep,
) -> SavedStateResponse:
    """Save the verse for the caller."""
    return SavedStateResponse(verse_id=verse_id, saved=devotions.save_verse(actor, verse_id))


@router.delete("/{verse_id:int}/saved", response_model=SavedStateResponse)
def unsave_verse(
    verse_id: int,
    actor: ActorDep,
    devotions: DevotionServiceDep,
) -> SavedStateResponse:
    """Remove the verse from the caller's saved verses."""
    return SavedStateResponse(verse_id=verse_id, saved=devotions.unsave_verse(actor, verse_id))


@router.get("/{verse_id:int}/prayers", response_model=list[PrayerPointResponse])
def list_prayer_points(
    verse_id: int,
    devotions: DevotionServiceDep,
) -> list[PrayerPointResponse]:
    """List a verse's prayer points, oldest first."""
    return [PrayerPointResponse.from_view(view) for view in devotions.prayer_points(verse_id)]


@router.post(
    "/{verse_id:int}/prayers",
    response_model=PrayerPointResponse,
    status_code=status.HTTP_201_CREATED,
)
def submit_prayer_point(
    verse_id: int,
    payload: PrayerPointCreate,
    actor: ActorDep,
    devotions: DevotionServiceDep,
) -> PrayerPointResponse:
    """Add the caller's prayer point to a verse."""
    return PrayerPointResponse.from_view(devotions.submit_prayer(actor, verse_id, payload.text))


@router.get("/{book}/{chapter:int}/{verse:int}", response_model=VersePageResponse)
def get_verse(
    book: str,
    chapter: int,
    verse: int,
    listings: ListingServiceDep,
) -> VersePageResponse:
    """Return a verse with links to its neighbours in the same book."""
    return VersePageResponse.from_view(listings.verse_page(book, chapter, verse))
