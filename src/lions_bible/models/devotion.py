"""Per-user study data: saved verses and prayer points."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from lions_bible.db.session import Base
from lions_bible.db.time import utcnow


class SavedVerse(Base):
    """A verse bookmarked by a user."""

    __tablename__ = "saved_verses"
    __table_args__ = (
        UniqueConstraint("verse_id", "user_id", name="uq_saved_verses_user"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    verse_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("verses.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )


class PrayerPoint(Base):
    """A prayer written against a verse."""

    __tablename__ = "prayer_points"
    __table_args__ = (
        Index("ix_prayer_points_verse_id", "verse_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    verse_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("verses.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(Text, nullable=False)
    prayer_text: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
