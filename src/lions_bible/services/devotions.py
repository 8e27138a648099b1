"""Saved verses and prayer points.

Neither feeds the vote or flag ledgers, so these actions need no subject lock.
A saved verse is unique per (verse, user); saving and unsaving are idempotent.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from lions_bible.core.errors import SubjectNotFound
from lions_bible.db.time import utcnow
from lions_bible.models import PrayerPoint, UserProfile, Verse
from lions_bible.repositories.store import Store, UniqueConstraintViolation
from lions_bible.services.actor import Actor
from lions_bible.services.gate import ContentGate, SubmissionKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PrayerView:
    prayer: PrayerPoint
    author: UserProfile | None = None


class DevotionService:
    """Per-user study data attached to verses."""

    def __init__(self, session: Session, *, gate: ContentGate | None = None) -> None:
        self.store = Store(session)
        self.gate = gate or ContentGate()

    def _verse(self, verse_id: int) -> Verse:
        verse = self.store.get("verses", verse_id)
        if verse is None:
            raise SubjectNotFound("Verse not found.")
        return verse

    # -- saved verses ----------------------------------------------------

    def is_saved(self, actor: Actor, verse_id: int) -> bool:
        user_id = actor.require_user_id("Please log in to see saved verses.")
        self._verse(verse_id)
        return self.store.count("saved_verses", {"verse_id": verse_id, "user_id": user_id}) > 0

    def save_verse(self, actor: Actor, verse_id: int) -> bool:
        """Save a verse for the actor; saving twice keeps one bookmark."""
        user_id = actor.require_user_id("Please log in to save verses.")
        self._verse(verse_id)
        key = {"verse_id": verse_id, "user_id": user_id}
        try:
            with self.store.transaction():
                if self.store.select_one("saved_verses", key) is None:
                    self.store.insert("saved_verses", {**key, "created_at": utcnow()})
        except UniqueConstraintViolation:
            logger.debug("Verse %s already saved by %s", verse_id, user_id)
        return True

    def unsave_verse(self, actor: Actor, verse_id: int) -> bool:
        """Remove the actor's bookmark, if any."""
        user_id = actor.require_user_id("Please log in to save verses.")
        self._verse(verse_id)
        with self.store.transaction():
            self.store.delete("saved_verses", {"verse_id": verse_id, "user_id": user_id})
        return False

    def saved_verses(self, actor: Actor) -> list[Verse]:
        """Return the actor's saved verses, most recently saved first."""
        user_id = actor.require_user_id("Please log in to see saved verses.")
        saved = self.store.select_many(
            "saved_verses",
            {"user_id": user_id},
            order=("-created_at", "-id"),
        )
        if not saved:
            return []
        verses = {
            verse.id: verse
            for verse in self.store.select_many("verses", {"id": [row.verse_id for row in saved]})
        }
        return [verses[row.verse_id] for row in saved if row.verse_id in verses]

    # -- prayer points ---------------------------------------------------

    def prayer_points(self, verse_id: int) -> list[PrayerView]:
        """Return a verse's prayer points, oldest first."""
        self._verse(verse_id)
        prayers = self.store.select_many(
            "prayer_points",
            {"verse_id": verse_id},
            order=("created_at", "id"),
        )
        user_ids = sorted({prayer.user_id for prayer in prayers})
        profiles = {
            profile.user_id: profile
            for profile in (
                self.store.select_many("user_profiles", {"user_id": user_ids}) if user_ids else []
            )
        }
        return [PrayerView(prayer=prayer, author=profiles.get(prayer.user_id)) for prayer in prayers]

    def submit_prayer(self, actor: Actor, verse_id: int, raw_text: str) -> PrayerView:
        """Add a prayer point to a verse.

        Raises:
            Unauthenticated, SubjectNotFound, ContainsMarkup, ValidationFailed,
            StorageUnavailable
        """
        user_id = actor.require_user_id("Please log in to add prayer points.")
        cleaned = self.gate.validate(raw_text, SubmissionKind.PRAYER)
        self._verse(verse_id)
        with self.store.transaction():
            prayer_id = self.store.insert(
                "prayer_points",
                {
                    "verse_id": verse_id,
                    "user_id": user_id,
                    "prayer_text": cleaned.text,
                    "created_at": utcnow(),
                },
            )
            prayer = self.store.get("prayer_points", prayer_id)
        logger.info("Prayer point %s added to verse %s", prayer_id, verse_id)
        return PrayerView(prayer=prayer, author=self.store.get("user_profiles", user_id))
