"""Vote-related endpoints for the Lions Bible API."""

from __future__ import annotations

from fastapi import APIRouter, status

from lions_bible.api.v1.dependencies import ActorDep, ModerationServiceDep
from lions_bible.models import SubjectKind
from lions_bible.schemas import MyVoteResponse, VoteResponse

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post(
    "/{kind}/{subject_id}",
    response_model=VoteResponse,
    status_code=status.HTTP_201_CREATED,
)
def cast_vote(
    kind: SubjectKind,
    subject_id: int,
    actor: ActorDep,
    moderation: ModerationServiceDep,
) -> VoteResponse:
    """Upvote an interpretation or reply. Each user may upvote once."""
    return VoteResponse.from_result(moderation.cast_vote(actor, kind, subject_id))


@router.get("/{kind}/{subject_id}/mine", response_model=MyVoteResponse)
def get_my_vote(
    kind: SubjectKind,
    subject_id: int,
    actor: ActorDep,
    moderation: ModerationServiceDep,
) -> MyVoteResponse:
    """Report whether the caller has upvoted the subject."""
    return MyVoteResponse(has_voted=moderation.has_voted(actor, kind, subject_id))
