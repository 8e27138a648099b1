"""Reply endpoints for the Lions Bible API."""

from __future__ import annotations

from fastapi import APIRouter

from lions_bible.api.v1.dependencies import ActorDep, ModerationServiceDep
from lions_bible.schemas import CountsResponse, DeletedResponse

router = APIRouter(prefix="/replies", tags=["replies"])


@router.delete("/{reply_id}", response_model=DeletedResponse)
def delete_reply(
    reply_id: int,
    actor: ActorDep,
    moderation: ModerationServiceDep,
) -> DeletedResponse:
    """Hide the caller's own reply and return the parent's refreshed counts."""
    parent_counts = moderation.delete_reply(actor, reply_id)
    return DeletedResponse(id=reply_id, parent_counts=CountsResponse.from_snapshot(parent_counts))
