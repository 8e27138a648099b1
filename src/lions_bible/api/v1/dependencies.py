"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from lions_bible.core.security import decode_access_token
from lions_bible.db.session import get_db
from lions_bible.services.accounts import AccountService
from lions_bible.services.actor import ANONYMOUS, Actor
from lions_bible.services.devotions import DevotionService
from lions_bible.services.listings import ListingService
from lions_bible.services.moderation import ModerationService

# Anonymous visitors may read, so a missing header is not an error here.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_actor(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> Actor:
    """Resolve the caller from the bearer token.

    Args:
        credentials: HTTP Bearer token credentials, if any were sent

    Returns:
        The authenticated actor, or ``ANONYMOUS`` without a token

    Raises:
        Unauthenticated: If a token was sent but cannot be verified
    """
    if credentials is None:
        return ANONYMOUS
    return Actor(user_id=decode_access_token(credentials.credentials))


def get_moderation_service(db: SessionDep) -> ModerationService:
    """Return a moderation service bound to the request's session."""
    return ModerationService(db)


def get_listing_service(db: SessionDep) -> ListingService:
    """Return a listing service bound to the request's session."""
    return ListingService(db)


def get_devotion_service(db: SessionDep) -> DevotionService:
    """Return a saved-verse and prayer-point service for the request."""
    return DevotionService(db)


def get_account_service(db: SessionDep) -> AccountService:
    return AccountService(db)


# Type alias for current actor dependency
ActorDep = Annotated[Actor, Depends(get_actor)]
ModerationServiceDep = Annotated[ModerationService, Depends(get_moderation_service)]
ListingServiceDep = Annotated[ListingService, Depends(get_listing_service)]
DevotionServiceDep = Annotated[DevotionService, Depends(get_devotion_service)]
AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
