"""Profile Pydantic schemas."""
from __future__ import annotations

from pydantic import BaseModel

from lions_bible.services.listings import ProfileView

from .interpretation import InterpretationResponse


class ProfileResponse(BaseModel):
    """Public profile with the user's visible interpretations."""

    user_id: str
    username: str | None
    avatar: str | None
    interpretations: list[InterpretationResponse]

    @classmethod
    def from_view(cls, view: ProfileView) -> ProfileResponse:
        return cls(
            user_id=view.profile.user_id,
            username=view.profile.username,
            avatar=view.profile.avatar,
            interpretations=[InterpretationResponse.from_view(item) for item in view.interpretations],
        )
