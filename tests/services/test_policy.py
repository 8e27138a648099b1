"""Tests for the moderation policy."""

import pytest

from lions_bible.models import SubjectKind
from lions_bible.services.policy import ModerationPolicy, Visibility, decide


@pytest.mark.parametrize(
    ("kind", "report_count", "expected"),
    [
        (SubjectKind.INTERPRETATION, 0, Visibility.VISIBLE),
        (SubjectKind.INTERPRETATION, 9, Visibility.VISIBLE),
        (SubjectKind.INTERPRETATION, 10, Visibility.HIDDEN),
        (SubjectKind.INTERPRETATION, 11, Visibility.HIDDEN),
        (SubjectKind.REPLY, 4, Visibility.VISIBLE),
        (SubjectKind.REPLY, 5, Visibility.HIDDEN),
    ],
)
def test_default_thresholds(kind, report_count, expected) -> None:
    """Interpretations hide at 10 reports and replies at 5."""
    assert decide(kind, report_count) is expected


def test_thresholds_are_independent_per_kind() -> None:
    policy = ModerationPolicy(interpretation_threshold=3, reply_threshold=2)
    assert policy.decide("interpretation", 2) is Visibility.VISIBLE
    assert policy.decide("reply", 2) is Visibility.HIDDEN
    assert policy.threshold(SubjectKind.INTERPRETATION) == 3


def test_unknown_kind_is_rejected() -> None:
    with pytest.raises(ValueError):
        ModerationPolicy().decide("post", 100)


def test_explicit_zero_threshold_is_kept() -> None:
    policy = ModerationPolicy(interpretation_threshold=0)
    assert policy.threshold(SubjectKind.INTERPRETATION) == 0
    assert policy.decide("interpretation", 0) is Visibility.HIDDEN
    assert policy.threshold(SubjectKind.REPLY) == 5
