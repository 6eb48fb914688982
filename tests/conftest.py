# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-daily-shloka")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from daily_shloka.core.security import create_access_token
from daily_shloka.core.settings import Settings
from daily_shloka.db.session import Base, enable_sqlite_foreign_keys
from daily_shloka.db.session import get_db as app_get_session
from daily_shloka.main import app as fastapi_app
from daily_shloka.models import Community, User, Verse
from daily_shloka.services import communities, users

TEST_DB_URL = "sqlite://"
_TEST_SETTINGS_INSTANCE = Settings()

# 2024-01-10 09:00 UTC, mid-morning in UTC and afternoon in Asia/Kolkata.
BASE_NOW = datetime(2024, 1, 10, 9, 0, tzinfo=UTC)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    session.begin_nested()

    @event.listens_for(session, "after_transaction_end")
    def restart_savepoint(sess: Session, trans) -> None:  # pragma: no cover - SQLAlchemy internals
        if trans.nested and not getattr(trans._parent, "nested", False):
            session.begin_nested()

    try:
        yield session
    finally:
        event.remove(session, "after_transaction_end", restart_savepoint)
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
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


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Provide a Settings instance aligned with runtime configuration."""
    return _TEST_SETTINGS_INSTANCE


@pytest.fixture()
def now() -> datetime:
    return BASE_NOW


@pytest.fixture()
def seed_verses(db_session: Session) -> Callable[[int], list[Verse]]:
    """Return a factory that seeds ``count`` verses across chapters of 10."""

    def _seed(count: int) -> list[Verse]:
        verses = []
        for index in range(count):
            verse = Verse(
                chapter_number=index // 10 + 1,
                verse_number=index % 10 + 1,
                sanskrit_text=f"sanskrit {index}",
                transliteration=f"transliteration {index}",
                translation=f"translation {index}",
                source_key="test",
            )
            db_session.add(verse)
            verses.append(verse)
        db_session.flush()
        return verses

    return _seed


@pytest.fixture()
def verses(seed_verses: Callable[[int], list[Verse]]) -> list[Verse]:
    """Twenty verses in canonical order: 1.1-1.10 then 2.1-2.10."""
    return seed_verses(20)


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that provisions users the way ``/users/sync`` does."""

    def _make(auth_id: str, display_name: str | None = None, timezone: str = "UTC") -> User:
        user, _ = users.get_or_create_user(
            db_session,
            auth_id=auth_id,
            display_name=display_name or auth_id.title(),
            timezone=timezone,
        )
        return user

    return _make


@pytest.fixture()
def reader(make_user: Callable[..., User]) -> User:
    """Create the primary test reader."""
    return make_user("reader", "Test Reader")


@pytest.fixture()
def other_reader(make_user: Callable[..., User]) -> User:
    """Create a second test reader."""
    return make_user("other", "Other Reader")


@pytest.fixture()
def auth_headers(reader: User) -> dict[str, str]:
    """Return authorization headers for the primary reader."""
    token = create_access_token(reader.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def other_auth_headers(other_reader: User) -> dict[str, str]:
    """Return authorization headers for the secondary reader."""
    token = create_access_token(other_reader.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def community(db_session: Session, reader: User) -> Community:
    """Create a public community owned by the primary reader."""
    return communities.create_community(db_session, reader.id, "Gita Circle", "public")
