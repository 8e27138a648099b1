"""Extraction of cross-verse references from interpretation text.

Authors embed references as ``[Book Chapter:Verse] (why it matters)`` or
``[Book Chapter:Start-End] (why it matters)``. Each verse of a range that
exists becomes one ``VerseReference``; anything that does not resolve is
dropped without telling the author.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from lions_bible.db.time import utcnow
from lions_bible.models import Verse, VerseReference
from lions_bible.repositories.store import Store

logger = logging.getLogger(__name__)

REFERENCE_PATTERN = re.compile(r"\[([^\]]+)\]\s*\(([^)]+)\)")
LOCATION_PATTERN = re.compile(
    r"^\s*(?P<book>.+?)\s+(?P<chapter>\d+)\s*:\s*(?P<start>\d+)(?:\s*-\s*(?P<end>\d+))?\s*$"
)
# Longest chapter (Psalm 119) has 176 verses, so longer spans never resolve more.
MAX_REFERENCE_SPAN = 176


@dataclass(frozen=True)
class ReferenceCandidate:
    book: str
    chapter: int
    start: int
    end: int
    text: str

    @property
    def verse_numbers(self) -> list[int]:
        if self.end < self.start:
            return []
        last = min(self.end, self.start + MAX_REFERENCE_SPAN - 1)
        return list(range(self.start, last + 1))


def parse_references(text: str) -> list[ReferenceCandidate]:
    """Return every well-formed reference in ``text`` in order of appearance."""
    candidates = []
    for match in REFERENCE_PATTERN.finditer(text):
        location = LOCATION_PATTERN.match(match.group(1))
        explanation = match.group(2).strip()
        if location is None or not explanation:
            continue
        start = int(location.group("start"))
        end = int(location.group("end")) if location.group("end") else start
        candidates.append(
            ReferenceCandidate(
                book=location.group("book").strip(),
                chapter=int(location.group("chapter")),
                start=start,
                end=end,
                text=explanation,
            )
        )
    return candidates


class ReferenceExtractor:
    """Resolves parsed references against the verse table and records them."""

    def __init__(self, store: Store) -> None:
        self.store = store

    def resolve(self, candidate: ReferenceCandidate) -> list[Verse]:
        numbers = candidate.verse_numbers
        if not numbers:
            return []
        return self.store.select_many(
            "verses",
            {"book": candidate.book, "chapter": candidate.chapter, "verse": numbers},
            order=("verse",),
        )

    def extract(
        self,
        *,
        text: str,
        source_verse_id: int,
        user_id: str,
        interpretation_id: int | None = None,
    ) -> list[VerseReference]:
        """Record a reference for every resolvable verse mentioned in ``text``."""
        created: list[VerseReference] = []
        for candidate in parse_references(text):
            verses = self.resolve(candidate)
            if len(verses) < len(candidate.verse_numbers):
                logger.debug(
                    "Dropped %d unresolved verse(s) for %s %d:%d-%d",
                    len(candidate.verse_numbers) - len(verses),
                    candidate.book,
                    candidate.chapter,
                    candidate.start,
                    candidate.end,
                )
            for verse in verses:
                reference_id = self.store.insert(
                    "verse_references",
                    {
                        "source_verse_id": source_verse_id,
                        "target_verse_id": verse.id,
                        "interpretation_id": interpretation_id,
                        "user_id": user_id,
                        "reference_text": candidate.text,
                        "is_hidden": False,
                        "created_at": utcnow(),
                    },
                )
                created.append(self.store.get("verse_references", reference_id))
        return created
