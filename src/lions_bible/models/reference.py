"""Cross-verse references extracted from interpretation text."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from lions_bible.db.session import Base
from lions_bible.db.time import utcnow


class VerseReference(Base):
    """Link from the verse an interpretation is about to another verse."""

    __tablename__ = "verse_references"
    __table_args__ = (
        Index("ix_verse_references_target_verse_id", "target_verse_id"),
        Index("ix_verse_references_interpretation_id", "interpretation_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    source_verse_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("verses.id"),
        nullable=False,
    )
    target_verse_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("verses.id"),
        nullable=False,
    )
    # Interpretation whose text carried the reference; hidden along with it.
    interpretation_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("interpretations.id"),
        nullable=True,
    )
    user_id: Mapped[str] = mapped_column(Text, nullable=False)
    reference_text: Mapped[str] = mapped_column(Text, nullable=False)
    is_hidden: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
