# src/lions_bible/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .flags import router as flags_router
from .interpretations import router as interpretations_router
from .replies import router as replies_router
from .system import router as system_router
from .users import router as users_router
from .verses import router as verses_router
from .votes import router as votes_router

__all__ = [
    "flags_router",
    "interpretations_router",
    "replies_router",
    "system_router",
    "users_router",
    "verses_router",
    "votes_router",
]
