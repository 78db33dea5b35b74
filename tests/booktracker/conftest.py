"""Shared fixtures: per-test SQLite databases, a controllable clock, fast bcrypt."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Iterator

import pytest

from booktracker.config_manager import Settings
from booktracker.database import Database, run_migrations
from booktracker.library import BookRepository, ReadingSessionTracker
from booktracker.user_management import (
    AuthService,
    BcryptPasswordHasher,
    CredentialStore,
    SessionManager,
)

FAST_BCRYPT_ROUNDS = 4
SESSION_TTL = timedelta(hours=1)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'booktracker.db'}"


@pytest.fixture
def database(database_url: str) -> Iterator[Database]:
    db = Database(database_url)
    run_migrations(db.engine)
    yield db
    db.dispose()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 3, 14, 9, 30, tzinfo=timezone.utc))


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=FAST_BCRYPT_ROUNDS)


@pytest.fixture
def credential_store(database: Database, hasher: BcryptPasswordHasher) -> CredentialStore:
    return CredentialStore(database, hasher)


@pytest.fixture
def session_manager(database: Database, clock: FakeClock) -> SessionManager:
    return SessionManager(database, ttl=SESSION_TTL, clock=clock)


@pytest.fixture
def auth_service(credential_store: CredentialStore, session_manager: SessionManager) -> AuthService:
    return AuthService(credential_store, session_manager)


@pytest.fixture
def book_repository(database: Database) -> BookRepository:
    return BookRepository(database)


@pytest.fixture
def tracker(database: Database) -> ReadingSessionTracker:
    return ReadingSessionTracker(database)


@pytest.fixture
def make_user(credential_store: CredentialStore) -> Callable[[str], int]:
    def _make(username: str, password: str = "password") -> int:
        return credential_store.create_user(username, password).id

    return _make


@pytest.fixture
def settings(database_url: str) -> Settings:
    return Settings(
        database_url=database_url,
        bcrypt_rounds=FAST_BCRYPT_ROUNDS,
        session_ttl_hours=1,
    )
