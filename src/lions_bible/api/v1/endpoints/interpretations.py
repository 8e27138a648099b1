"""Interpretation and reply-thread endpoints for the Lions Bible API."""

from __future__ import annotations

from fastapi import APIRouter, status

from lions_bible.api.v1.dependencies import ActorDep, ListingServiceDep, ModerationServiceDep
from lions_bible.schemas import (
    DeletedResponse,
    ReplyCreate,
    ReplyResponse,
    ReplySubmittedResponse,
)

router = APIRouter(prefix="/interpretations", tags=["interpretations"])


@router.get("/{interpretation_id}/replies", response_model=list[ReplyResponse])
def list_replies(interpretation_id: int, listings: ListingServiceDep) -> list[ReplyResponse]:
    """List visible replies, oldest first."""
    return [ReplyResponse.from_view(view) for view in listings.replies_for(interpretation_id)]


@router.post(
    "/{interpretation_id}/replies",
    response_model=ReplySubmittedResponse,
    status_code=status.HTTP_201_CREATED,
)
def submit_reply(
    interpretation_id: int,
    payload: ReplyCreate,
    actor: ActorDep,
    moderation: ModerationServiceDep,
) -> ReplySubmittedResponse:
    """Reply to a visible interpretation."""
    result = moderation.submit_reply(actor, interpretation_id, payload.text)
    return ReplySubmittedResponse.from_result(result)


@router.delete("/{interpretation_id}", response_model=DeletedResponse)
def delete_interpretation(
    interpretation_id: int,
    actor: ActorDep,
    moderation: ModerationServiceDep,
) -> DeletedResponse:
    """Hide the caller's own interpretation."""
    moderation.delete_interpretation(actor, interpretation_id)
    return DeletedResponse(id=interpretation_id)
