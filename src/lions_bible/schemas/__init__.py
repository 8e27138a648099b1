# src/lions_bible/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import CountsResponse, ErrorResponse
from .devotion import (
    AccountDeletedResponse,
    PrayerPointCreate,
    PrayerPointResponse,
    SavedStateResponse,
)
from .interpretation import (
    DeletedResponse,
    InterpretationCreate,
    InterpretationResponse,
    InterpretationSubmittedResponse,
    ReplyCreate,
    ReplyResponse,
    ReplySubmittedResponse,
)
from .moderation import FlagCreate, FlagResponse, MyVoteResponse, VoteResponse
from .profile import ProfileResponse
from .user import AuthorSummary
from .verse import InboundReferenceResponse, VerseLocation, VersePageResponse, VerseResponse

__all__ = [
    "CountsResponse", "ErrorResponse",
    "AccountDeletedResponse", "PrayerPointCreate", "PrayerPointResponse", "SavedStateResponse",
    "DeletedResponse",
    "InterpretationCreate", "InterpretationResponse", "InterpretationSubmittedResponse",
    "ReplyCreate", "ReplyResponse", "ReplySubmittedResponse",
    "FlagCreate", "FlagResponse", "MyVoteResponse", "VoteResponse",
    "ProfileResponse",
    "AuthorSummary",
    "InboundReferenceResponse", "VerseLocation", "VersePageResponse", "VerseResponse",
]
