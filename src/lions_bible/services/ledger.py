"""Append-only vote and flag ledgers.

Each ledger enforces at most one record per (subject, user). The existence
check runs under the caller's subject lock; the database unique constraint
catches whatever slips past it from other processes.
"""
from __future__ import annotations

import logging

from lions_bible.core.errors import AlreadyFlagged, AlreadyVoted
from lions_bible.db.time import utcnow
from lions_bible.models.flag import FlagReason
from lions_bible.models.subject import SubjectKind, tables_for
from lions_bible.repositories.store import Store, UniqueConstraintViolation

logger = logging.getLogger(__name__)


class VoteLedger:
    """Upvotes on interpretations and replies."""

    def __init__(self, store: Store) -> None:
        self.store = store

    def has_voted(self, kind: SubjectKind, subject_id: int, voter_id: str) -> bool:
        tables = tables_for(kind)
        existing = self.store.select_one(
            tables.votes,
            {tables.subject_field: subject_id, "user_id": voter_id},
        )
        return existing is not None

    def count(self, kind: SubjectKind, subject_id: int) -> int:
        tables = tables_for(kind)
        return self.store.count(tables.votes, {tables.subject_field: subject_id})

    def append(self, kind: SubjectKind, subject_id: int, voter_id: str) -> int:
        """Record a vote and return its id.

        Raises:
            AlreadyVoted: The voter already upvoted this subject.
        """
        tables = tables_for(kind)
        already = f"You have already upvoted this {SubjectKind(kind).value}."
        if self.has_voted(kind, subject_id, voter_id):
            raise AlreadyVoted(already)
        try:
            vote_id = self.store.insert(
                tables.votes,
                {
                    tables.subject_field: subject_id,
                    "user_id": voter_id,
                    "created_at": utcnow(),
                },
            )
        except UniqueConstraintViolation as exc:
            logger.warning("Concurrent duplicate vote on %s %s", SubjectKind(kind).value, subject_id)
            raise AlreadyVoted(already) from exc
        logger.info("Vote %s recorded on %s %s", vote_id, SubjectKind(kind).value, subject_id)
        return vote_id


class FlagLedger:
    """Reports against interpretations and replies."""

    def __init__(self, store: Store) -> None:
        self.store = store

    def has_flagged(self, kind: SubjectKind, subject_id: int, reporter_id: str) -> bool:
        tables = tables_for(kind)
        existing = self.store.select_one(
            tables.flags,
            {tables.subject_field: subject_id, "flagged_by": reporter_id},
        )
        return existing is not None

    def count(self, kind: SubjectKind, subject_id: int) -> int:
        tables = tables_for(kind)
        return self.store.count(tables.flags, {tables.subject_field: subject_id})

    def append(
        self,
        kind: SubjectKind,
        subject_id: int,
        reporter_id: str,
        reason: FlagReason,
        explanation: str | None,
    ) -> int:
        """Record a flag and return its id.

        Raises:
            AlreadyFlagged: The reporter already flagged this subject.
        """
        tables = tables_for(kind)
        already = f"You have already reported this {SubjectKind(kind).value}."
        if self.has_flagged(kind, subject_id, reporter_id):
            raise AlreadyFlagged(already)
        try:
            flag_id = self.store.insert(
                tables.flags,
                {
                    tables.subject_field: subject_id,
                    "flagged_by": reporter_id,
                    "reason": FlagReason(reason).value,
                    "explanation": explanation,
                    "created_at": utcnow(),
                },
            )
        except UniqueConstraintViolation as exc:
            logger.warning("Concurrent duplicate flag on %s %s", SubjectKind(kind).value, subject_id)
            raise AlreadyFlagged(already) from exc
        logger.info(
            "Flag %s (%s) recorded on %s %s",
            flag_id,
            FlagReason(reason).value,
            SubjectKind(kind).value,
            subject_id,
        )
        return flag_id
