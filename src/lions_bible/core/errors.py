"""Domain errors raised by the moderation core.

Every failure of a user action is one of these. They are recovered at the
action boundary (see ``lions_bible.api.errors``) and never abort the process.
"""

from __future__ import annotations


class LionsBibleError(Exception):
    """Base class for all domain errors."""

    code = "error"
    default_message = "The request could not be completed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(LionsBibleError):
    code = "unauthenticated"
    default_message = "Please log in to continue."


class NotAuthorized(LionsBibleError):
    code = "not_authorized"
    default_message = "You are not authorized to perform this action."


class SubjectNotFound(LionsBibleError):
    code = "not_found"
    default_message = "The requested content was not found."


class AlreadyVoted(LionsBibleError):
    code = "already_voted"
    default_message = "You have already upvoted this."


class AlreadyFlagged(LionsBibleError):
    code = "already_flagged"
    default_message = "You have already reported this."


class DuplicateInterpretation(LionsBibleError):
    code = "duplicate_interpretation"
    default_message = (
        "You've already shared an interpretation for this verse. You can now add replies."
    )


class ContainsMarkup(LionsBibleError):
    code = "contains_markup"
    default_message = "Text contains invalid characters or code."


class TooShort(LionsBibleError):
    code = "too_short"
    default_message = "Text is too short."


class TooLong(LionsBibleError):
    code = "too_long"
    default_message = "Text is too long."


class ValidationFailed(LionsBibleError):
    code = "validation_failed"
    default_message = "The submission is invalid."


class StorageUnavailable(LionsBibleError):
    """The backing store failed; the user may retry the action."""

    code = "storage_unavailable"
    default_message = "The service is temporarily unavailable. Please try again."


__all__ = [
    "AlreadyFlagged",
    "AlreadyVoted",
    "ContainsMarkup",
    "DuplicateInterpretation",
    "LionsBibleError",
    "NotAuthorized",
    "StorageUnavailable",
    "SubjectNotFound",
    "TooLong",
    "TooShort",
    "Unauthenticated",
    "ValidationFailed",
]
