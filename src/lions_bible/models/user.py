"""SQLAlchemy model for public user profiles."""

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from lions_bible.db.session import Base


class UserProfile(Base):
    """Public profile keyed by the identity provider's user id."""

    __tablename__ = "user_profiles"

    user_id: Mapped[str] = mapped_column(Text, primary_key=True)
    username: Mapped[str | None] = mapped_column(Text, unique=True, nullable=True)
    avatar: Mapped[str | None] = mapped_column(Text, nullable=True)
