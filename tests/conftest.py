# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from lions_bible.core.security import create_access_token
from lions_bible.db.session import Base
from lions_bible.db.session import get_db as app_get_session
from lions_bible.main import app as fastapi_app
from lions_bible.models import UserProfile, Verse
from lions_bible.services.actor import Actor
from lions_bible.services.moderation import ModerationService

TEST_DB_URL = "sqlite://"

# Exactly twelve whitespace-separated words.
TWELVE_WORDS = "The light here shows how God brings order out of the deep"
ELEVEN_WORDS = "The light here shows how God brings order out of darkness"

AUTHOR_ID = "user-author"
READER_ID = "user-reader"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Actions commit, so each test starts from empty tables.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def service(db_session: Session) -> ModerationService:
    """Return a moderation service bound to the test session."""
    return ModerationService(db_session)


@pytest.fixture()
def verses(db_session: Session) -> dict[str, Verse]:
    """Persist Genesis 1:1-3 and 2:1."""
    rows = {
        "gen_1_1": Verse(book="Genesis", chapter=1, verse=1, kjv="In the beginning God created the heaven and the earth."),
        "gen_1_2": Verse(book="Genesis", chapter=1, verse=2, kjv="And the earth was without form, and void."),
        "gen_1_3": Verse(book="Genesis", chapter=1, verse=3, kjv="And God said, Let there be light: and there was light."),
        "gen_2_1": Verse(book="Genesis", chapter=2, verse=1, kjv="Thus the heavens and the earth were finished."),
    }
    db_session.add_all(rows.values())
    db_session.commit()
    return rows


@pytest.fixture()
def verse(verses: dict[str, Verse]) -> Verse:
    return verses["gen_1_2"]


@pytest.fixture()
def author() -> Actor:
    return Actor(user_id=AUTHOR_ID)


@pytest.fixture()
def reader() -> Actor:
    return Actor(user_id=READER_ID)


@pytest.fixture()
def profiles(db_session: Session) -> dict[str, UserProfile]:
    """Persist public profiles for the author and the reader."""
    rows = {
        AUTHOR_ID: UserProfile(user_id=AUTHOR_ID, username="lion", avatar="https://example.com/lion.png"),
        READER_ID: UserProfile(user_id=READER_ID, username="lamb", avatar=None),
    }
    db_session.add_all(rows.values())
    db_session.commit()
    return rows


def auth_headers(user_id: str) -> dict[str, str]:
    """Return authorization headers carrying a token for ``user_id``."""
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture()
def auth_token() -> dict[str, str]:
    """Return authorization headers for the author."""
    return auth_headers(AUTHOR_ID)


@pytest.fixture()
def other_auth_token() -> dict[str, str]:
    """Return authorization headers for the reader."""
    return auth_headers(READER_ID)


@pytest.fixture()
def headers_for() -> Callable[[str], dict[str, str]]:
    return auth_headers


@pytest.fixture()
def interpretation(service: ModerationService, author: Actor, verse: Verse):
    """Create a visible interpretation by the author on Genesis 1:2."""
    return service.submit_interpretation(author, verse.id, TWELVE_WORDS).interpretation


@pytest.fixture()
def reply(service: ModerationService, reader: Actor, interpretation):
    """Create a visible reply by the reader to ``interpretation``."""
    return service.submit_reply(reader, interpretation.id, "Amen, well said").reply
