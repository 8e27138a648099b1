"""Subject kinds and the tables that back each kind."""

from __future__ import annotations

import enum
from dataclasses import dataclass

HIDDEN_BY_OWNER = "owner"
HIDDEN_BY_MODERATION = "moderation"


class SubjectKind(str, enum.Enum):
    """Moderatable content types."""

    INTERPRETATION = "interpretation"
    REPLY = "reply"


@dataclass(frozen=True)
class SubjectTables:
    """Collection names and key columns used for one subject kind."""

    kind: SubjectKind
    subjects: str
    votes: str
    flags: str
    counts: str
    # Column naming the subject inside the vote, flag and counts collections.
    subject_field: str


INTERPRETATION_TABLES = SubjectTables(
    kind=SubjectKind.INTERPRETATION,
    subjects="interpretations",
    votes="interpretation_upvotes",
    flags="interpretation_flags",
    counts="interpretation_counts",
    subject_field="interpretation_id",
)

REPLY_TABLES = SubjectTables(
    kind=SubjectKind.REPLY,
    subjects="replies",
    votes="reply_upvotes",
    flags="reply_flags",
    counts="reply_counts",
    subject_field="reply_id",
)


def tables_for(kind: SubjectKind | str) -> SubjectTables:
    """Return the table layout for ``kind``."""
    if SubjectKind(kind) is SubjectKind.INTERPRETATION:
        return INTERPRETATION_TABLES
    return REPLY_TABLES
