"""Report endpoints for the Lions Bible API."""

from __future__ import annotations

from fastapi import APIRouter, status

from lions_bible.api.v1.dependencies import ActorDep, ModerationServiceDep
from lions_bible.models import SubjectKind
from lions_bible.schemas import FlagCreate, FlagResponse

router = APIRouter(prefix="/flags", tags=["flags", "moderation"])


@router.post(
    "/{kind}/{subject_id}",
    response_model=FlagResponse,
    status_code=status.HTTP_201_CREATED,
)
def cast_flag(
    kind: SubjectKind,
    subject_id: int,
    payload: FlagCreate,
    actor: ActorDep,
    moderation: ModerationServiceDep,
) -> FlagResponse:
    """Report an interpretation or reply.

    Content is hidden from every listing once its report count reaches the
    configured threshold for its kind.
    """
    result = moderation.cast_flag(
        actor,
        kind,
        subject_id,
        payload.reason,
        payload.explanation,
    )
    return FlagResponse.from_result(result)
