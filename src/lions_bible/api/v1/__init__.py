# src/lions_bible/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    flags_router,
    interpretations_router,
    replies_router,
    system_router,
    users_router,
    verses_router,
    votes_router,
)

__all__ = [
    "flags_router",
    "interpretations_router",
    "replies_router",
    "system_router",
    "users_router",
    "verses_router",
    "votes_router",
]
