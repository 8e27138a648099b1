"""Models for the report (flag) ledgers."""

import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from lions_bible.db.session import Base
from lions_bible.db.time import utcnow


class FlagReason(str, enum.Enum):
    """Reasons a user may give when reporting content."""

    SPAM = "spam"
    BLASPHEMY = "blasphemy"
    OFFENSIVE = "offensive"


_REASON_CHECK = "reason IN ('spam', 'blasphemy', 'offensive')"


class InterpretationFlag(Base):
    """Append-only report against an interpretation."""

    __tablename__ = "interpretation_flags"
    __table_args__ = (
        CheckConstraint(_REASON_CHECK, name="ck_interpretation_flags_reason"),
        UniqueConstraint("interpretation_id", "flagged_by", name="uq_interpretation_flags_reporter"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    interpretation_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("interpretations.id", ondelete="CASCADE"),
        nullable=False,
    )
    flagged_by: Mapped[str] = mapped_column(Text, nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    explanation: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )


class ReplyFlag(Base):
    """Append-only report against a reply."""

    __tablename__ = "reply_flags"
    __table_args__ = (
        CheckConstraint(_REASON_CHECK, name="ck_reply_flags_reason"),
        UniqueConstraint("reply_id", "flagged_by", name="uq_reply_flags_reporter"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reply_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("replies.id", ondelete="CASCADE"),
        nullable=False,
    )
    flagged_by: Mapped[str] = mapped_column(Text, nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    explanation: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
