# src/lions_bible/services/__init__.py
"""Business logic services for the Lions Bible application."""

from .accounts import AccountDeleted, AccountService
from .actor import ANONYMOUS, Actor
from .counters import AggregateCounters, CountsSnapshot
from .devotions import DevotionService, PrayerView
from .gate import CleanText, ContentGate, SubmissionKind
from .ledger import FlagLedger, VoteLedger
from .listings import ListingService
from .moderation import ModerationService
from .policy import ModerationPolicy, Visibility

__all__ = [
    "AccountDeleted", "AccountService",
    "ANONYMOUS", "Actor",
    "AggregateCounters", "CountsSnapshot",
    "DevotionService", "PrayerView",
    "CleanText", "ContentGate", "SubmissionKind",
    "FlagLedger", "VoteLedger",
    "ListingService",
    "ModerationService",
    "ModerationPolicy", "Visibility",
]
