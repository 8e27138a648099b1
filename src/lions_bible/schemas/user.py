"""User-related Pydantic schemas."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from lions_bible.models import UserProfile


class AuthorSummary(BaseModel):
    """Public identity shown next to content."""

    user_id: str
    username: str | None = Field(None, description="Public handle, without the leading @")
    avatar: str | None = Field(None, description="Avatar URL")

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def for_user(cls, user_id: str, profile: UserProfile | None) -> AuthorSummary:
        if profile is None:
            return cls(user_id=user_id)
        return cls.model_validate(profile)
