"""Moderation policy: report counts to visibility."""

from __future__ import annotations

import enum

from lions_bible.core.settings import settings
from lions_bible.models.subject import SubjectKind


class Visibility(str, enum.Enum):
    VISIBLE = "visible"
    HIDDEN = "hidden"


class ModerationPolicy:
    """Threshold rule applied independently per subject kind.

    A subject is hidden once its report count reaches the threshold for its
    kind. Hiding is terminal; nothing in the application un-hides content.
    """

    def __init__(
        self,
        interpretation_threshold: int | None = None,
        reply_threshold: int | None = None,
    ) -> None:
        if interpretation_threshold is None:
            interpretation_threshold = settings.interpretation_hide_threshold
        if reply_threshold is None:
            reply_threshold = settings.reply_hide_threshold
        self._thresholds = {
            SubjectKind.INTERPRETATION: interpretation_threshold,
            SubjectKind.REPLY: reply_threshold,
        }

    def threshold(self, kind: SubjectKind | str) -> int:
        return self._thresholds[SubjectKind(kind)]

    def decide(self, kind: SubjectKind | str, report_count: int) -> Visibility:
        """Return the visibility a subject of ``kind`` should have."""
        if report_count >= self.threshold(kind):
            return Visibility.HIDDEN
        return Visibility.VISIBLE


def decide(kind: SubjectKind | str, report_count: int) -> Visibility:
    """Apply the configured default policy."""
    return ModerationPolicy().decide(kind, report_count)
