"""Aggregate counters derived from the ledgers.

Counts are always re-derived from the authoritative rows rather than bumped
by one, so a recompute is idempotent. It cannot lose a concurrent update as
long as it runs inside the action's transaction after the subject row has
been locked.
"""
from __future__ import annotations

from dataclasses import dataclass

from lions_bible.db.time import utcnow
from lions_bible.models.subject import SubjectKind, tables_for
from lions_bible.repositories.store import Store


@dataclass(frozen=True)
class CountsSnapshot:
    """Counts for one subject as of the last recompute."""

    kind: SubjectKind
    subject_id: int
    upvote_count: int = 0
    report_count: int = 0
    # Only interpretations track replies.
    reply_count: int | None = None


class AggregateCounters:
    def __init__(self, store: Store) -> None:
        self.store = store

    def recompute(self, kind: SubjectKind, subject_id: int) -> CountsSnapshot:
        """Re-derive and persist the counts for one subject."""
        kind = SubjectKind(kind)
        tables = tables_for(kind)
        record: dict[str, object] = {
            tables.subject_field: subject_id,
            "upvote_count": self.store.count(tables.votes, {tables.subject_field: subject_id}),
            "report_count": self.store.count(tables.flags, {tables.subject_field: subject_id}),
            "updated_at": utcnow(),
        }
        if kind is SubjectKind.INTERPRETATION:
            record["reply_count"] = self.store.count(
                "replies",
                {"interpretation_id": subject_id, "is_hidden": False},
            )
        row = self.store.upsert(tables.counts, record, conflict_key=tables.subject_field)
        return self.to_snapshot(kind, subject_id, row)

    def initialize(self, kind: SubjectKind, subject_id: int) -> CountsSnapshot:
        """Create a zeroed counts row for a freshly created subject."""
        kind = SubjectKind(kind)
        tables = tables_for(kind)
        record: dict[str, object] = {
            tables.subject_field: subject_id,
            "upvote_count": 0,
            "report_count": 0,
            "updated_at": utcnow(),
        }
        if kind is SubjectKind.INTERPRETATION:
            record["reply_count"] = 0
        row = self.store.upsert(tables.counts, record, conflict_key=tables.subject_field)
        return self.to_snapshot(kind, subject_id, row)

    def snapshot(self, kind: SubjectKind, subject_id: int) -> CountsSnapshot:
        """Return the stored counts, zeroes if none were recorded yet."""
        kind = SubjectKind(kind)
        tables = tables_for(kind)
        row = self.store.get(tables.counts, subject_id)
        return self.to_snapshot(kind, subject_id, row)

    @staticmethod
    def to_snapshot(kind: SubjectKind, subject_id: int, row: object | None) -> CountsSnapshot:
        if row is None:
            return CountsSnapshot(
                kind=kind,
                subject_id=subject_id,
                reply_count=0 if kind is SubjectKind.INTERPRETATION else None,
            )
        return CountsSnapshot(
            kind=kind,
            subject_id=subject_id,
            upvote_count=row.upvote_count,  # type: ignore[attr-defined]
            report_count=row.report_count,  # type: ignore[attr-defined]
            reply_count=getattr(row, "reply_count", None),
        )
