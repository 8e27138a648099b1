"""Moderation services for Lions Bible.

``ModerationService`` is the only place that changes ledgers, counters or
subject visibility. Every operation takes an explicit ``Actor``, holds the
subject's lock, and runs as a single transaction: it either applies fully or
leaves nothing behind.
"""
from __future__ import annotations

import logging
from contextlib import nullcontext
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from lions_bible.core.errors import (
    DuplicateInterpretation,
    NotAuthorized,
    SubjectNotFound,
    ValidationFailed,
)
from lions_bible.db.time import utcnow
from lions_bible.models import FlagReason, Interpretation, Reply, VerseReference
from lions_bible.models.subject import (
    HIDDEN_BY_MODERATION,
    HIDDEN_BY_OWNER,
    SubjectKind,
    tables_for,
)
from lions_bible.repositories.store import Store, UniqueConstraintViolation
from lions_bible.services.actor import Actor
from lions_bible.services.counters import AggregateCounters, CountsSnapshot
from lions_bible.services.gate import ContentGate, SubmissionKind
from lions_bible.services.ledger import FlagLedger, VoteLedger
from lions_bible.services.locks import SubjectLocks, get_subject_locks
from lions_bible.services.policy import ModerationPolicy, Visibility
from lions_bible.services.references import ReferenceExtractor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VoteRecorded:
    vote_id: int
    counts: CountsSnapshot


@dataclass(frozen=True)
class FlagRecorded:
    flag_id: int
    counts: CountsSnapshot
    visibility: Visibility


@dataclass(frozen=True)
class InterpretationSubmitted:
    interpretation: Interpretation
    counts: CountsSnapshot
    references: list[VerseReference] = field(default_factory=list)


@dataclass(frozen=True)
class ReplySubmitted:
    reply: Reply
    counts: CountsSnapshot
    parent_counts: CountsSnapshot


@dataclass
class ReconcileReport:
    changed: int = 0
    hidden: int = 0


def _lock_key(kind: SubjectKind, subject_id: int) -> tuple[str, int]:
    return (SubjectKind(kind).value, subject_id)


def _parse_reason(reason: FlagReason | str | None) -> FlagReason:
    if not reason:
        raise ValidationFailed("Please select a report reason.")
    try:
        return FlagReason(reason)
    except ValueError:
        raise ValidationFailed(
            "Report reason must be one of: spam, blasphemy, offensive."
        ) from None


class ModerationService:
    """Service handling votes, flags, submissions and visibility changes."""

    def __init__(
        self,
        session: Session,
        *,
        locks: SubjectLocks | None = None,
        policy: ModerationPolicy | None = None,
        gate: ContentGate | None = None,
    ) -> None:
        self.store = Store(session)
        self.locks = locks or get_subject_locks()
        self.policy = policy or ModerationPolicy()
        self.gate = gate or ContentGate()
        self.votes = VoteLedger(self.store)
        self.flags = FlagLedger(self.store)
        self.counters = AggregateCounters(self.store)
        self.references = ReferenceExtractor(self.store)

    # -- lookups ---------------------------------------------------------

    def _visible_subject(self, kind: SubjectKind, subject_id: int) -> Interpretation | Reply:
        tables = tables_for(kind)
        subject = self.store.select_one(tables.subjects, {"id": subject_id, "is_hidden": False})
        if subject is None:
            raise SubjectNotFound(f"{SubjectKind(kind).value.capitalize()} not found.")
        return subject

    def _lock_subject(self, kind: SubjectKind, subject_id: int) -> Interpretation | Reply:
        """Re-read a visible subject inside the transaction, holding its row lock.

        A reply also locks its parent interpretation, parent first, since the
        parent's reply_count changes when the reply is hidden.
        """
        tables = tables_for(kind)
        if kind is SubjectKind.REPLY:
            reply = self.store.get("replies", subject_id)
            if reply is not None:
                self.store.lock_one("interpretations", {"id": reply.interpretation_id})
        subject = self.store.lock_one(tables.subjects, {"id": subject_id, "is_hidden": False})
        if subject is None:
            raise SubjectNotFound(f"{SubjectKind(kind).value.capitalize()} not found.")
        return subject

    def _lock_keys(self, kind: SubjectKind, subject: Interpretation | Reply) -> list[tuple[str, int]]:
        keys = [_lock_key(kind, subject.id)]
        if isinstance(subject, Reply):
            # Hiding a reply rewrites its parent's reply_count.
            keys.append(_lock_key(SubjectKind.INTERPRETATION, subject.interpretation_id))
        return keys

    # -- votes -----------------------------------------------------------

    def has_voted(self, actor: Actor, kind: SubjectKind, subject_id: int) -> bool:
        user_id = actor.require_user_id("Please log in to see your votes.")
        return self.votes.has_voted(kind, subject_id, user_id)

    def cast_vote(self, actor: Actor, kind: SubjectKind, subject_id: int) -> VoteRecorded:
        """Upvote a subject once.

        Raises:
            Unauthenticated, SubjectNotFound, AlreadyVoted, StorageUnavailable
        """
        kind = SubjectKind(kind)
        voter_id = actor.require_user_id("Please log in to upvote.")
        subject = self._visible_subject(kind, subject_id)

        with self.locks.hold(*self._lock_keys(kind, subject)), self.store.transaction():
            self._lock_subject(kind, subject_id)
            vote_id = self.votes.append(kind, subject_id, voter_id)
            counts = self.counters.recompute(kind, subject_id)
        return VoteRecorded(vote_id=vote_id, counts=counts)

    # -- flags -----------------------------------------------------------

    def cast_flag(
        self,
        actor: Actor,
        kind: SubjectKind,
        subject_id: int,
        reason: FlagReason | str | None,
        explanation: str | None = None,
    ) -> FlagRecorded:
        """Report a subject once and apply the moderation policy.

        Raises:
            Unauthenticated, SubjectNotFound, ValidationFailed, ContainsMarkup,
            TooLong, AlreadyFlagged, StorageUnavailable
        """
        kind = SubjectKind(kind)
        reporter_id = actor.require_user_id("Please log in to report content.")
        parsed_reason = _parse_reason(reason)
        cleaned_explanation = None
        if explanation and explanation.strip():
            cleaned = self.gate.validate(explanation, SubmissionKind.REPORT_EXPLANATION)
            cleaned_explanation = cleaned.text or None
        subject = self._visible_subject(kind, subject_id)

        with self.locks.hold(*self._lock_keys(kind, subject)), self.store.transaction():
            subject = self._lock_subject(kind, subject_id)
            flag_id = self.flags.append(
                kind,
                subject_id,
                reporter_id,
                parsed_reason,
                cleaned_explanation,
            )
            counts = self.counters.recompute(kind, subject_id)
            visibility = self.policy.decide(kind, counts.report_count)
            if visibility is Visibility.HIDDEN:
                self._hide(kind, subject, HIDDEN_BY_MODERATION)
                logger.info(
                    "%s %s hidden by moderation after %d reports",
                    kind.value,
                    subject_id,
                    counts.report_count,
                )
        return FlagRecorded(flag_id=flag_id, counts=counts, visibility=visibility)

    # -- submissions -----------------------------------------------------

    def submit_interpretation(
        self,
        actor: Actor,
        verse_id: int,
        raw_text: str,
    ) -> InterpretationSubmitted:
        """Create the actor's interpretation of a verse.

        Raises:
            Unauthenticated, SubjectNotFound, DuplicateInterpretation,
            ContainsMarkup, TooShort, StorageUnavailable
        """
        user_id = actor.require_user_id("Please log in to add an interpretation.")
        if self.store.get("verses", verse_id) is None:
            raise SubjectNotFound("Verse not found.")

        with self.locks.hold(("author", verse_id, user_id)), self.store.transaction():
            existing = self.store.select_one(
                "interpretations",
                {"verse_id": verse_id, "user_id": user_id, "is_hidden": False},
            )
            if existing is not None:
                raise DuplicateInterpretation()

            cleaned = self.gate.validate(raw_text, SubmissionKind.INTERPRETATION)
            try:
                interpretation_id = self.store.insert(
                    "interpretations",
                    {
                        "verse_id": verse_id,
                        "user_id": user_id,
                        "text": cleaned.text,
                        "is_hidden": False,
                        "created_at": utcnow(),
                    },
                )
            except UniqueConstraintViolation as exc:
                raise DuplicateInterpretation() from exc

            counts = self.counters.initialize(SubjectKind.INTERPRETATION, interpretation_id)
            references = self.references.extract(
                text=cleaned.text,
                source_verse_id=verse_id,
                user_id=user_id,
                interpretation_id=interpretation_id,
            )
            interpretation = self.store.get("interpretations", interpretation_id)
        logger.info(
            "Interpretation %s submitted for verse %s with %d reference(s)",
            interpretation_id,
            verse_id,
            len(references),
        )
        return InterpretationSubmitted(
            interpretation=interpretation,
            counts=counts,
            references=references,
        )

    def submit_reply(self, actor: Actor, interpretation_id: int, raw_text: str) -> ReplySubmitted:
        """Reply to a visible interpretation.

        Raises:
            Unauthenticated, SubjectNotFound, ContainsMarkup, ValidationFailed,
            StorageUnavailable
        """
        user_id = actor.require_user_id("Please log in to reply.")
        cleaned = self.gate.validate(raw_text, SubmissionKind.REPLY)
        self._visible_subject(SubjectKind.INTERPRETATION, interpretation_id)

        parent_key = _lock_key(SubjectKind.INTERPRETATION, interpretation_id)
        with self.locks.hold(parent_key), self.store.transaction():
            parent = self._lock_subject(SubjectKind.INTERPRETATION, interpretation_id)
            reply_id = self.store.insert(
                "replies",
                {
                    "interpretation_id": interpretation_id,
                    "verse_id": parent.verse_id,
                    "user_id": user_id,
                    "text": cleaned.text,
                    "is_hidden": False,
                    "created_at": utcnow(),
                },
            )
            counts = self.counters.initialize(SubjectKind.REPLY, reply_id)
            parent_counts = self.counters.recompute(SubjectKind.INTERPRETATION, interpretation_id)
            reply = self.store.get("replies", reply_id)
        logger.info("Reply %s added to interpretation %s", reply_id, interpretation_id)
        return ReplySubmitted(reply=reply, counts=counts, parent_counts=parent_counts)

    # -- owner deletion --------------------------------------------------

    def delete_interpretation(self, actor: Actor, interpretation_id: int) -> None:
        """Soft-hide the actor's own interpretation."""
        self._delete_own(actor, SubjectKind.INTERPRETATION, interpretation_id)

    def delete_reply(self, actor: Actor, reply_id: int) -> CountsSnapshot:
        """Soft-hide the actor's own reply and return the parent's counts."""
        reply = self._delete_own(actor, SubjectKind.REPLY, reply_id)
        return self.counters.snapshot(SubjectKind.INTERPRETATION, reply.interpretation_id)

    def _delete_own(
        self,
        actor: Actor,
        kind: SubjectKind,
        subject_id: int,
    ) -> Interpretation | Reply:
        user_id = actor.require_user_id("Please log in to delete.")
        subject = self._visible_subject(kind, subject_id)
        if subject.user_id != user_id:
            raise NotAuthorized(f"You are not authorized to delete this {kind.value}.")

        with self.locks.hold(*self._lock_keys(kind, subject)), self.store.transaction():
            subject = self._lock_subject(kind, subject_id)
            self._hide(kind, subject, HIDDEN_BY_OWNER)
        logger.info("%s %s deleted by its owner", kind.value, subject_id)
        return subject

    # -- repair ----------------------------------------------------------

    def reconcile_all(self, *, dry_run: bool = False) -> ReconcileReport:
        """Re-derive every subject's counts and apply the policy to the result.

        Interpretations are reconciled before replies, so hiding a reply here
        updates a parent whose counts are already current. With ``dry_run``
        the work is rolled back instead of committed.
        """
        report = ReconcileReport()
        try:
            for kind in SubjectKind:
                tables = tables_for(kind)
                subject_ids = [
                    subject.id
                    for subject in self.store.select_many(tables.subjects, {}, order=("id",))
                ]
                for subject_id in subject_ids:
                    self._reconcile_one(kind, subject_id, report, dry_run=dry_run)
        finally:
            if dry_run:
                self.store.session.rollback()
        return report

    def _reconcile_one(
        self,
        kind: SubjectKind,
        subject_id: int,
        report: ReconcileReport,
        *,
        dry_run: bool,
    ) -> None:
        tables = tables_for(kind)
        subject = self.store.get(tables.subjects, subject_id)
        unit = nullcontext() if dry_run else self.store.transaction()
        with self.locks.hold(*self._lock_keys(kind, subject)), unit:
            if kind is SubjectKind.REPLY:
                self.store.lock_one("interpretations", {"id": subject.interpretation_id})
            subject = self.store.lock_one(tables.subjects, {"id": subject_id})
            before = self.counters.snapshot(kind, subject_id)
            after = self.counters.recompute(kind, subject_id)
            if before != after:
                report.changed += 1
                logger.info("Reconciled %s %s: %s -> %s", kind.value, subject_id, before, after)
            if (
                not subject.is_hidden
                and self.policy.decide(kind, after.report_count) is Visibility.HIDDEN
            ):
                self._hide(kind, subject, HIDDEN_BY_MODERATION)
                report.hidden += 1
                logger.info(
                    "%s %s hidden by moderation after %d reports",
                    kind.value,
                    subject_id,
                    after.report_count,
                )

    # -- visibility ------------------------------------------------------

    def _hide(self, kind: SubjectKind, subject: Interpretation | Reply, reason: str) -> None:
        """Persist the hidden state and update whatever depends on it."""
        tables = tables_for(kind)
        self.store.update(
            tables.subjects,
            {"id": subject.id},
            {"is_hidden": True, "hidden_reason": reason},
        )
        if kind is SubjectKind.INTERPRETATION:
            self.store.update(
                "verse_references",
                {"interpretation_id": subject.id},
                {"is_hidden": True},
            )
        else:
            self.counters.recompute(SubjectKind.INTERPRETATION, subject.interpretation_id)
