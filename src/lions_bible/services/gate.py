"""Content submission gate.

Every piece of user text passes through here before it may touch a ledger:
markup is stripped to plain text, code-like input is rejected, and the
word-count rules for the submission kind are applied.
"""
from __future__ import annotations

import enum
import html
import re
from dataclasses import dataclass

import bleach

from lions_bible.core.errors import ContainsMarkup, TooLong, TooShort, ValidationFailed
from lions_bible.core.settings import settings

_FORBIDDEN_KEYWORDS = re.compile(
    r"\b(function|eval|alert|script|select|insert|delete|drop|union|exec|declare|create|alter)\b",
    re.IGNORECASE,
)
_FORBIDDEN_PUNCTUATION = re.compile(r"[<>{};`'\"\\/]")
# Tags smuggled in as entities reappear once the text is unescaped.
_TAG_LIKE = re.compile(r"<\s*/?\s*[a-zA-Z!]")


class SubmissionKind(str, enum.Enum):
    INTERPRETATION = "interpretation"
    REPLY = "reply"
    REPORT_EXPLANATION = "report_explanation"
    PRAYER = "prayer"


# Kinds whose text is short prose and gets the strict punctuation check.
_STRICT_KINDS = frozenset(
    {SubmissionKind.REPLY, SubmissionKind.REPORT_EXPLANATION, SubmissionKind.PRAYER}
)


@dataclass(frozen=True)
class CleanText:
    """Sanitized text that passed the gate."""

    text: str
    word_count: int


def sanitize(raw_text: str) -> str:
    """Strip every tag, attribute and comment, returning plain text."""
    cleaned = bleach.clean(
        raw_text,
        tags=set(),
        attributes={},
        protocols=set(),
        strip=True,
        strip_comments=True,
    )
    return html.unescape(cleaned).strip()


def count_words(text: str) -> int:
    return len(text.split())


def contains_forbidden(text: str, *, strict: bool) -> bool:
    """Return True if ``text`` looks like code or markup."""
    if _TAG_LIKE.search(text) or _FORBIDDEN_KEYWORDS.search(text):
        return True
    return strict and bool(_FORBIDDEN_PUNCTUATION.search(text))


class ContentGate:
    """Validates raw submissions for a given kind."""

    def __init__(
        self,
        min_interpretation_words: int | None = None,
        max_explanation_words: int | None = None,
    ) -> None:
        if min_interpretation_words is None:
            min_interpretation_words = settings.interpretation_min_words
        if max_explanation_words is None:
            max_explanation_words = settings.flag_explanation_max_words
        self.min_interpretation_words = min_interpretation_words
        self.max_explanation_words = max_explanation_words

    def validate(self, raw_text: str | None, kind: SubmissionKind | str) -> CleanText:
        """Return the cleaned text or raise the matching domain error.

        Raises:
            ContainsMarkup: The cleaned text matches the forbidden patterns.
            TooShort: An interpretation has fewer words than the minimum.
            TooLong: A report explanation has more words than the maximum.
            ValidationFailed: A reply or prayer point is empty.
        """
        kind = SubmissionKind(kind)
        raw_text = raw_text or ""
        text = sanitize(raw_text)

        # Script bodies are checked before stripping as well as after.
        if _FORBIDDEN_KEYWORDS.search(raw_text) or contains_forbidden(
            text, strict=kind in _STRICT_KINDS
        ):
            raise ContainsMarkup(_markup_message(kind))

        words = count_words(text)
        if kind is SubmissionKind.INTERPRETATION and words < self.min_interpretation_words:
            raise TooShort(
                f"Interpretation must be at least {self.min_interpretation_words} words."
            )
        if kind is SubmissionKind.REPORT_EXPLANATION and words > self.max_explanation_words:
            raise TooLong(
                f"Report explanation must be {self.max_explanation_words} words or less."
            )
        if kind is SubmissionKind.REPLY and words == 0:
            raise ValidationFailed("Reply cannot be empty.")
        if kind is SubmissionKind.PRAYER and words == 0:
            raise ValidationFailed("Prayer point cannot be empty.")
        return CleanText(text=text, word_count=words)


def _markup_message(kind: SubmissionKind) -> str:
    label = {
        SubmissionKind.INTERPRETATION: "Interpretation",
        SubmissionKind.REPLY: "Reply",
        SubmissionKind.REPORT_EXPLANATION: "Report explanation",
        SubmissionKind.PRAYER: "Prayer point",
    }[kind]
    return f"{label} contains invalid characters or code."
