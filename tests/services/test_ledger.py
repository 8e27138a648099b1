"""Tests for the vote and flag ledgers."""

import pytest

from lions_bible.core.errors import AlreadyFlagged, AlreadyVoted
from lions_bible.models import FlagReason, SubjectKind
from lions_bible.repositories.store import Store, UniqueConstraintViolation
from lions_bible.services.ledger import FlagLedger, VoteLedger


@pytest.fixture()
def store(db_session) -> Store:
    return Store(db_session)


class TestVoteLedger:
    def test_append_and_has_voted(self, store, interpretation) -> None:
        ledger = VoteLedger(store)
        assert not ledger.has_voted(SubjectKind.INTERPRETATION, interpretation.id, "voter")
        ledger.append(SubjectKind.INTERPRETATION, interpretation.id, "voter")
        assert ledger.has_voted(SubjectKind.INTERPRETATION, interpretation.id, "voter")
        assert ledger.count(SubjectKind.INTERPRETATION, interpretation.id) == 1

    def test_second_vote_is_rejected(self, store, reply) -> None:
        ledger = VoteLedger(store)
        ledger.append(SubjectKind.REPLY, reply.id, "voter")
        with pytest.raises(AlreadyVoted) as exc_info:
            ledger.append(SubjectKind.REPLY, reply.id, "voter")
        assert exc_info.value.message == "You have already upvoted this reply."
        assert ledger.count(SubjectKind.REPLY, reply.id) == 1

    def test_constraint_race_maps_to_already_voted(self, store, interpretation, monkeypatch) -> None:
        ledger = VoteLedger(store)

        def collide(collection, record):
            raise UniqueConstraintViolation(collection, "UNIQUE constraint failed")

        monkeypatch.setattr(ledger, "has_voted", lambda *args: False)
        monkeypatch.setattr(store, "insert", collide)
        with pytest.raises(AlreadyVoted):
            ledger.append(SubjectKind.INTERPRETATION, interpretation.id, "voter")


class TestFlagLedger:
    def test_append_records_reason_and_explanation(self, store, interpretation) -> None:
        ledger = FlagLedger(store)
        flag_id = ledger.append(
            SubjectKind.INTERPRETATION,
            interpretation.id,
            "reporter",
            FlagReason.SPAM,
            "repeated advert",
        )
        flag = store.get("interpretation_flags", flag_id)
        assert flag.reason == "spam"
        assert flag.explanation == "repeated advert"
        assert flag.flagged_by == "reporter"

    def test_second_flag_is_rejected(self, store, reply) -> None:
        ledger = FlagLedger(store)
        ledger.append(SubjectKind.REPLY, reply.id, "reporter", FlagReason.OFFENSIVE, None)
        with pytest.raises(AlreadyFlagged):
            ledger.append(SubjectKind.REPLY, reply.id, "reporter", FlagReason.SPAM, None)
        assert ledger.count(SubjectKind.REPLY, reply.id) == 1
