"""Bearer token helpers for the external identity provider.

Tokens are issued elsewhere; this service only verifies them with the shared
secret. ``create_access_token`` exists for tooling and tests.
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from lions_bible.core.errors import Unauthenticated
from lions_bible.core.settings import settings


def create_access_token(user_id: str, extra_claims: dict[str, str] | None = None) -> str:
    """Create a signed access token whose subject is ``user_id``."""
    to_encode: dict[str, object] = {"sub": user_id}
    if settings.jwt_audience:
        to_encode["aud"] = settings.jwt_audience
    if extra_claims:
        to_encode.update(extra_claims)
    to_encode["exp"] = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> str:
    """Return the user id carried by ``token``.

    Raises:
        Unauthenticated: If the token is malformed, expired, or has no subject.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options={"verify_aud": settings.jwt_audience is not None},
        )
    except JWTError as err:
        raise Unauthenticated("Could not validate credentials") from err

    subject = payload.get("sub")
    if not subject or not isinstance(subject, str):
        raise Unauthenticated("Could not validate credentials")
    return subject
