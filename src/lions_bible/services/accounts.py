"""Account removal.

The identity provider owns credentials; this removes what the application
keeps about a user. Interpretations, replies, votes and reports stay so that
counts remain derivable, but lose their public author profile.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from lions_bible.repositories.store import Store
from lions_bible.services.actor import Actor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccountDeleted:
    user_id: str
    profile_removed: bool
    saved_verses: int
    prayer_points: int


class AccountService:
    def __init__(self, session: Session) -> None:
        self.store = Store(session)

    def delete_account(self, actor: Actor) -> AccountDeleted:
        """Delete the actor's profile, bookmarks and prayer points."""
        user_id = actor.require_user_id("Please log in to delete your account.")
        with self.store.transaction():
            saved = self.store.delete("saved_verses", {"user_id": user_id})
            prayers = self.store.delete("prayer_points", {"user_id": user_id})
            profiles = self.store.delete("user_profiles", {"user_id": user_id})
        logger.info(
            "Account %s deleted: %d saved verse(s), %d prayer point(s)",
            user_id,
            saved,
            prayers,
        )
        return AccountDeleted(
            user_id=user_id,
            profile_removed=profiles > 0,
            saved_verses=saved,
            prayer_points=prayers,
        )
