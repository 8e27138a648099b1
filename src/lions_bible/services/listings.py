"""Read views over visible content.

Hidden subjects and hidden references never appear in anything returned from
here. Counts come from the stored counters rather than the ledgers.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Literal

from sqlalchemy.orm import Session

from lions_bible.core.errors import SubjectNotFound
from lions_bible.models import Interpretation, Reply, UserProfile, Verse, VerseReference
from lions_bible.models.subject import SubjectKind, tables_for
from lions_bible.models.verse import book_slug
from lions_bible.repositories.store import Store
from lions_bible.services.counters import AggregateCounters, CountsSnapshot

__all__ = [
    "InterpretationView",
    "ListingService",
    "ProfileView",
    "ReferenceView",
    "ReplyView",
    "VersePage",
]

logger = logging.getLogger(__name__)

InterpretationSort = Literal["recent", "top"]

# Slugs that name a book differently from its stored name.
BOOK_SLUG_ALIASES = {"song-of-solomon": "Song of Songs"}


@dataclass(frozen=True)
class VersePage:
    verse: Verse
    previous: Verse | None = None
    next: Verse | None = None


@dataclass(frozen=True)
class InterpretationView:
    interpretation: Interpretation
    counts: CountsSnapshot
    author: UserProfile | None = None


@dataclass(frozen=True)
class ReplyView:
    reply: Reply
    counts: CountsSnapshot
    author: UserProfile | None = None


@dataclass(frozen=True)
class ReferenceView:
    reference: VerseReference
    source: Verse


@dataclass(frozen=True)
class ProfileView:
    profile: UserProfile
    interpretations: list[InterpretationView] = field(default_factory=list)


class ListingService:
    """Queries backing the verse page, reply threads and profiles."""

    def __init__(self, session: Session) -> None:
        self.store = Store(session)
        self.counters = AggregateCounters(self.store)

    def _authors(self, user_ids: Iterable[str]) -> dict[str, UserProfile]:
        ids = sorted(set(user_ids))
        if not ids:
            return {}
        profiles = self.store.select_many("user_profiles", {"user_id": ids})
        return {profile.user_id: profile for profile in profiles}

    def _counts(self, kind: SubjectKind, subject_ids: list[int]) -> dict[int, CountsSnapshot]:
        tables = tables_for(kind)
        rows = self.store.select_many(tables.counts, {tables.subject_field: subject_ids}) if subject_ids else []
        found = {
            getattr(row, tables.subject_field): self.counters.to_snapshot(
                kind, getattr(row, tables.subject_field), row
            )
            for row in rows
        }
        # Subjects created before their counts row exists read as zero.
        return {
            subject_id: found.get(subject_id) or self.counters.to_snapshot(kind, subject_id, None)
            for subject_id in subject_ids
        }

    # -- verses ----------------------------------------------------------

    def resolve_book(self, book: str) -> str | None:
        """Return the stored book name for a name or URL slug such as ``1-john``."""
        if self.store.select_one("verses", {"book": book}) is not None:
            return book
        slug = book_slug(book)
        alias = BOOK_SLUG_ALIASES.get(slug)
        for name in self.store.distinct("verses", "book"):
            if name == alias or book_slug(name) == slug:
                return name
        return None

    def verse_page(self, book: str, chapter: int, verse: int) -> VersePage:
        """Return a verse with its neighbours in the same book.

        ``book`` may be the stored name or its slug.
        """
        name = self.resolve_book(book)
        current = None
        if name is not None:
            current = self.store.select_one(
                "verses",
                {"book": name, "chapter": chapter, "verse": verse},
            )
        if current is None:
            logger.debug("No verse at %s %s:%s", book, chapter, verse)
            raise SubjectNotFound(f"{book} {chapter}:{verse} was not found.")
        book = name

        previous = None
        if verse > 1:
            previous = self.store.select_one(
                "verses",
                {"book": book, "chapter": chapter, "verse": verse - 1},
            )
        if previous is None and chapter > 1:
            previous = self.store.select_one(
                "verses",
                {"book": book, "chapter": chapter - 1},
                order=("-verse",),
            )

        following = self.store.select_one(
            "verses",
            {"book": book, "chapter": chapter, "verse": verse + 1},
        )
        if following is None:
            following = self.store.select_one(
                "verses",
                {"book": book, "chapter": chapter + 1, "verse": 1},
            )
        return VersePage(verse=current, previous=previous, next=following)

    def get_verse(self, verse_id: int) -> Verse:
        verse = self.store.get("verses", verse_id)
        if verse is None:
            raise SubjectNotFound("Verse not found.")
        return verse

    # -- interpretations -------------------------------------------------

    def interpretations_for_verse(
        self,
        verse_id: int,
        sort: InterpretationSort = "recent",
    ) -> list[InterpretationView]:
        """Return the verse's visible interpretations, newest or most upvoted first."""
        self.get_verse(verse_id)
        interpretations = self.store.select_many(
            "interpretations",
            {"verse_id": verse_id, "is_hidden": False},
            order=("-created_at", "-id"),
        )
        views = self._interpretation_views(interpretations)
        if sort == "top":
            # Stable sort keeps newest first among equal upvote counts.
            views.sort(key=lambda view: view.counts.upvote_count, reverse=True)
        return views

    def _interpretation_views(self, interpretations: list[Interpretation]) -> list[InterpretationView]:
        counts = self._counts(SubjectKind.INTERPRETATION, [item.id for item in interpretations])
        authors = self._authors(item.user_id for item in interpretations)
        return [
            InterpretationView(
                interpretation=item,
                counts=counts[item.id],
                author=authors.get(item.user_id),
            )
            for item in interpretations
        ]

    # -- replies ---------------------------------------------------------

    def replies_for(self, interpretation_id: int) -> list[ReplyView]:
        """Return the visible replies of a visible interpretation, oldest first."""
        parent = self.store.select_one(
            "interpretations",
            {"id": interpretation_id, "is_hidden": False},
        )
        if parent is None:
            raise SubjectNotFound("Interpretation not found.")

        replies = self.store.select_many(
            "replies",
            {"interpretation_id": interpretation_id, "is_hidden": False},
            order=("created_at", "id"),
        )
        counts = self._counts(SubjectKind.REPLY, [reply.id for reply in replies])
        authors = self._authors(reply.user_id for reply in replies)
        return [
            ReplyView(reply=reply, counts=counts[reply.id], author=authors.get(reply.user_id))
            for reply in replies
        ]

    # -- references ------------------------------------------------------

    def inbound_references(self, verse_id: int) -> list[ReferenceView]:
        """Return visible references pointing at ``verse_id``, newest first."""
        self.get_verse(verse_id)
        references = self.store.select_many(
            "verse_references",
            {"target_verse_id": verse_id, "is_hidden": False},
            order=("-created_at", "-id"),
        )
        source_ids = sorted({reference.source_verse_id for reference in references})
        sources = {
            verse.id: verse
            for verse in (self.store.select_many("verses", {"id": source_ids}) if source_ids else [])
        }
        return [
            ReferenceView(reference=reference, source=sources[reference.source_verse_id])
            for reference in references
        ]

    # -- profiles --------------------------------------------------------

    def profile(self, username: str) -> ProfileView:
        """Return a profile by username; a leading ``@`` is ignored."""
        username = username.strip().removeprefix("@")
        profile = self.store.select_one("user_profiles", {"username": username}) if username else None
        if profile is None:
            raise SubjectNotFound("User not found.")

        interpretations = self.store.select_many(
            "interpretations",
            {"user_id": profile.user_id, "is_hidden": False},
            order=("-created_at", "-id"),
        )
        return ProfileView(
            profile=profile,
            interpretations=self._interpretation_views(interpretations),
        )
