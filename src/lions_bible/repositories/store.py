"""Generic structured-storage gateway over a SQLAlchemy session.

The moderation core talks to persistence only through this class. Records are
addressed by collection (table) name and filtered by column equality; a list,
tuple or set value becomes an ``IN`` clause and ``None`` an ``IS NULL`` test.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any

from sqlalchemy import delete as sa_delete
from sqlalchemy import func, inspect, select
from sqlalchemy import update as sa_update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session

from lions_bible.core.errors import LionsBibleError, StorageUnavailable
from lions_bible.db.session import Base
from lions_bible.models import (
    Interpretation,
    InterpretationCounts,
    InterpretationFlag,
    InterpretationUpvote,
    PrayerPoint,
    Reply,
    ReplyCounts,
    ReplyFlag,
    ReplyUpvote,
    SavedVerse,
    UserProfile,
    Verse,
    VerseReference,
)

__all__ = ["COLLECTIONS", "Store", "UniqueConstraintViolation"]

logger = logging.getLogger(__name__)

COLLECTIONS: dict[str, type[Base]] = {
    "verses": Verse,
    "user_profiles": UserProfile,
    "interpretations": Interpretation,
    "replies": Reply,
    "interpretation_upvotes": InterpretationUpvote,
    "reply_upvotes": ReplyUpvote,
    "interpretation_flags": InterpretationFlag,
    "reply_flags": ReplyFlag,
    "interpretation_counts": InterpretationCounts,
    "reply_counts": ReplyCounts,
    "verse_references": VerseReference,
    "saved_verses": SavedVerse,
    "prayer_points": PrayerPoint,
}

_NATIVE_UPSERT = {"postgresql": pg_insert, "sqlite": sqlite_insert}


class UniqueConstraintViolation(Exception):
    """Raised when an insert collides with a uniqueness constraint."""

    def __init__(self, collection: str, detail: str) -> None:
        self.collection = collection
        self.detail = detail
        super().__init__(f"Unique constraint violated on {collection}: {detail}")


class Store:
    """Collection-addressed access to the database for one unit of work."""

    def __init__(self, session: Session) -> None:
        self.session = session

    @staticmethod
    def model_for(collection: str) -> type[Base]:
        """Return the ORM class backing ``collection``."""
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise ValueError(f"Unknown collection {collection!r}") from None

    @staticmethod
    def _criteria(model: type[Base], filters: Mapping[str, Any]) -> list[Any]:
        criteria = []
        for field, value in filters.items():
            column = getattr(model, field)
            if value is None:
                criteria.append(column.is_(None))
            elif isinstance(value, list | tuple | set | frozenset):
                criteria.append(column.in_(list(value)))
            else:
                criteria.append(column == value)
        return criteria

    @staticmethod
    def _ordering(model: type[Base], order: Sequence[str]) -> list[Any]:
        # "-field" sorts descending.
        clauses = []
        for field in order:
            if field.startswith("-"):
                clauses.append(getattr(model, field[1:]).desc())
            else:
                clauses.append(getattr(model, field).asc())
        return clauses

    @contextmanager
    def transaction(self) -> Iterator[Store]:
        """Run a unit of work that is committed whole or rolled back whole.

        Database failures surface as ``StorageUnavailable``; uniqueness
        collisions as ``UniqueConstraintViolation``.
        """
        try:
            yield self
            self.session.commit()
        except (LionsBibleError, UniqueConstraintViolation):
            self.session.rollback()
            raise
        except IntegrityError as exc:
            self.session.rollback()
            logger.warning("Integrity error at commit: %s", exc.orig)
            raise UniqueConstraintViolation("commit", str(exc.orig)) from exc
        except DBAPIError as exc:
            self.session.rollback()
            logger.error("Storage failure, transaction rolled back: %s", exc)
            raise StorageUnavailable() from exc
        except Exception:
            self.session.rollback()
            raise

    def get(self, collection: str, key: Any) -> Any | None:
        """Return the record with primary key ``key``."""
        return self.session.get(self.model_for(collection), key)

    def insert(self, collection: str, record: Mapping[str, Any]) -> Any:
        """Insert ``record`` and return its primary key.

        Raises:
            UniqueConstraintViolation: If the row collides with a unique key.
                The session is rolled back, discarding the whole unit of work.
        """
        model = self.model_for(collection)
        row = model(**record)
        self.session.add(row)
        try:
            self.session.flush()
        except IntegrityError as exc:
            self.session.rollback()
            logger.warning("Insert into %s rejected: %s", collection, exc.orig)
            raise UniqueConstraintViolation(collection, str(exc.orig)) from exc
        identity = inspect(row).identity
        if identity is None:  # pragma: no cover - flush always assigns a key
            return None
        return identity[0] if len(identity) == 1 else identity

    def upsert(
        self,
        collection: str,
        record: Mapping[str, Any],
        conflict_key: str | Sequence[str],
    ) -> Any:
        """Insert ``record`` or overwrite the row sharing ``conflict_key``."""
        model = self.model_for(collection)
        keys = [conflict_key] if isinstance(conflict_key, str) else list(conflict_key)
        key_filter = {key: record[key] for key in keys}
        dialect = self.session.get_bind().dialect.name

        self.session.flush()
        native_insert = _NATIVE_UPSERT.get(dialect)
        if native_insert is not None:
            stmt = native_insert(model).values(**record)
            changes = {name: stmt.excluded[name] for name in record if name not in keys}
            if changes:
                stmt = stmt.on_conflict_do_update(index_elements=keys, set_=changes)
            else:
                stmt = stmt.on_conflict_do_nothing(index_elements=keys)
            self.session.execute(stmt)
        else:
            existing = self.select_one(collection, key_filter)
            if existing is None:
                self.session.add(model(**record))
            else:
                for name, value in record.items():
                    setattr(existing, name, value)
            self.session.flush()

        stmt = (
            select(model)
            .where(*self._criteria(model, key_filter))
            .execution_options(populate_existing=True)
        )
        return self.session.execute(stmt).scalars().one()

    def select_one(
        self,
        collection: str,
        filters: Mapping[str, Any],
        order: Sequence[str] = (),
    ) -> Any | None:
        """Return the first record matching ``filters`` or ``None``."""
        model = self.model_for(collection)
        stmt = (
            select(model)
            .where(*self._criteria(model, filters))
            .order_by(*self._ordering(model, order))
            .limit(1)
        )
        return self.session.execute(stmt).scalars().first()

    def select_many(
        self,
        collection: str,
        filters: Mapping[str, Any],
        order: Sequence[str] = (),
        limit: int | None = None,
    ) -> list[Any]:
        """Return every record matching ``filters`` in ``order``."""
        model = self.model_for(collection)
        stmt = (
            select(model)
            .where(*self._criteria(model, filters))
            .order_by(*self._ordering(model, order))
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.session.execute(stmt).scalars())

    def update(
        self,
        collection: str,
        filters: Mapping[str, Any],
        patch: Mapping[str, Any],
    ) -> int:
        """Apply ``patch`` to every matching record and return the row count."""
        model = self.model_for(collection)
        self.session.flush()
        stmt = (
            sa_update(model)
            .where(*self._criteria(model, filters))
            .values(**patch)
            .execution_options(synchronize_session="fetch")
        )
        result = self.session.execute(stmt)
        return int(result.rowcount or 0)

    def count(self, collection: str, filters: Mapping[str, Any]) -> int:
        """Return the number of records matching ``filters``."""
        model = self.model_for(collection)
        stmt = select(func.count()).select_from(model).where(*self._criteria(model, filters))
        return int(self.session.execute(stmt).scalar_one())

    def lock_one(self, collection: str, filters: Mapping[str, Any]) -> Any | None:
        """Return the first matching record, row-locked until the transaction ends.

        Renders ``SELECT ... FOR UPDATE`` on PostgreSQL. SQLite has no row
        locks and serializes writers on the database file instead.
        """
        model = self.model_for(collection)
        stmt = (
            select(model)
            .where(*self._criteria(model, filters))
            .limit(1)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self.session.execute(stmt).scalars().first()

    def delete(self, collection: str, filters: Mapping[str, Any]) -> int:
        """Delete every matching record and return the row count."""
        if not filters:
            raise ValueError("Refusing to delete without filters")
        model = self.model_for(collection)
        self.session.flush()
        stmt = (
            sa_delete(model)
            .where(*self._criteria(model, filters))
            .execution_options(synchronize_session="fetch")
        )
        result = self.session.execute(stmt)
        return int(result.rowcount or 0)

    def distinct(self, collection: str, field: str) -> list[Any]:
        """Return the distinct values of ``field`` in ascending order."""
        model = self.model_for(collection)
        column = getattr(model, field)
        stmt = select(column).distinct().order_by(column.asc())
        return list(self.session.execute(stmt).scalars())
