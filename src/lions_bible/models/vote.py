"""Models for the upvote ledgers."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from lions_bible.db.session import Base
from lions_bible.db.time import utcnow


class InterpretationUpvote(Base):
    """Append-only upvote on an interpretation."""

    __tablename__ = "interpretation_upvotes"
    __table_args__ = (
        # One vote per (interpretation, user) across processes.
        UniqueConstraint("interpretation_id", "user_id", name="uq_interpretation_upvotes_voter"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    interpretation_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("interpretations.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )


class ReplyUpvote(Base):
    """Append-only upvote on a reply."""

    __tablename__ = "reply_upvotes"
    __table_args__ = (
        UniqueConstraint("reply_id", "user_id", name="uq_reply_upvotes_voter"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reply_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("replies.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
