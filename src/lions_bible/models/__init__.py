# src/lions_bible/models/__init__.py
"""SQLAlchemy models for the Lions Bible application."""

from .counts import InterpretationCounts, ReplyCounts
from .devotion import PrayerPoint, SavedVerse
from .flag import FlagReason, InterpretationFlag, ReplyFlag
from .interpretation import Interpretation, Reply
from .reference import VerseReference
from .subject import SubjectKind
from .user import UserProfile
from .verse import Verse
from .vote import InterpretationUpvote, ReplyUpvote

__all__ = [
    "FlagReason", "InterpretationFlag", "ReplyFlag",
    "Interpretation", "Reply",
    "InterpretationCounts", "ReplyCounts",
    "InterpretationUpvote", "ReplyUpvote",
    "PrayerPoint", "SavedVerse",
    "SubjectKind",
    "UserProfile",
    "Verse",
    "VerseReference",
]
