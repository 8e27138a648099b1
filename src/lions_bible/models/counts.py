"""Denormalized per-subject counters.

These rows are caches derived from the ledgers and are rewritten on every
ledger-affecting action.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from lions_bible.db.session import Base
from lions_bible.db.time import utcnow


class InterpretationCounts(Base):
    __tablename__ = "interpretation_counts"

    interpretation_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("interpretations.id", ondelete="CASCADE"),
        primary_key=True,
    )
    reply_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    upvote_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    report_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )


class ReplyCounts(Base):
    __tablename__ = "reply_counts"

    reply_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("replies.id", ondelete="CASCADE"),
        primary_key=True,
    )
    upvote_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    report_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
