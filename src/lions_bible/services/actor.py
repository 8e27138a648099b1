"""Explicit identity passed into every core operation."""

from __future__ import annotations

from dataclasses import dataclass

from lions_bible.core.errors import Unauthenticated


@dataclass(frozen=True)
class Actor:
    """The user performing an action, or an anonymous visitor."""

    user_id: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)

    def require_user_id(self, message: str | None = None) -> str:
        """Return the user id or raise ``Unauthenticated``."""
        if not self.user_id:
            raise Unauthenticated(message)
        return self.user_id


ANONYMOUS = Actor()
