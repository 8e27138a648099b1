"""SQLAlchemy models for interpretations and their replies."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy import text as sql_text
from sqlalchemy.orm import Mapped, mapped_column

from lions_bible.db.session import Base
from lions_bible.db.time import utcnow


class Interpretation(Base):
    """A user's interpretation of a verse.

    Interpretations are never deleted; owners and the moderation policy only
    flip ``is_hidden``.
    """

    __tablename__ = "interpretations"
    __table_args__ = (
        Index("ix_interpretations_verse_id", "verse_id"),
        Index("ix_interpretations_user_id", "user_id"),
        # At most one visible interpretation per (verse, user).
        Index(
            "uq_interpretations_visible_author",
            "verse_id",
            "user_id",
            unique=True,
            sqlite_where=sql_text("NOT is_hidden"),
            postgresql_where=sql_text("NOT is_hidden"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    verse_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("verses.id"),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(Text, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)

    is_hidden: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    # "owner" or "moderation" once hidden.
    hidden_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )


class Reply(Base):
    """A reply attached to an interpretation."""

    __tablename__ = "replies"
    __table_args__ = (
        Index("ix_replies_interpretation_id", "interpretation_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    interpretation_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("interpretations.id"),
        nullable=False,
    )
    # Denormalized from the parent interpretation.
    verse_id: Mapped[int] = mapped_column(Integer, ForeignKey("verses.id"), nullable=False)
    user_id: Mapped[str] = mapped_column(Text, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)

    is_hidden: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    hidden_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
