"""SQLAlchemy model for Bible verses."""

import re

from sqlalchemy import Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from lions_bible.db.session import Base


def book_slug(book: str) -> str:
    """Return the URL form of a book name, e.g. ``song-of-songs``."""
    return re.sub(r"\s+", "-", book.strip()).lower()


class Verse(Base):
    """A single verse with its source text and translations."""

    __tablename__ = "verses"
    __table_args__ = (
        UniqueConstraint("book", "chapter", "verse", name="uq_verses_location"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    book: Mapped[str] = mapped_column(Text, nullable=False)
    chapter: Mapped[int] = mapped_column(Integer, nullable=False)
    verse: Mapped[int] = mapped_column(Integer, nullable=False)

    original_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    transliteration: Mapped[str | None] = mapped_column(Text, nullable=True)
    verbatim_english: Mapped[str | None] = mapped_column(Text, nullable=True)
    kjv: Mapped[str | None] = mapped_column(Text, nullable=True)

    @property
    def label(self) -> str:
        """Return the human-readable location, e.g. ``Genesis 1:1``."""
        return f"{self.book} {self.chapter}:{self.verse}"

    @property
    def slug(self) -> str:
        return book_slug(self.book)
