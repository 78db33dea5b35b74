"""Wire the storage handle and every repository from configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from . import logging_manager as log_mgr
from .access import AccessMediator
from .config_manager import Settings, get_settings
from .database import Database, run_migrations
from .library import BookRepository, ReadingSessionTracker
from .user_management import (
    AuthService,
    BcryptPasswordHasher,
    CredentialStore,
    PasswordHasher,
    SessionManager,
)
from .user_management.session_manager import Clock

logger = log_mgr.get_logger().getChild("bootstrap")


@dataclass(frozen=True)
class Services:
    settings: Settings
    database: Database
    credential_store: CredentialStore
    session_manager: SessionManager
    auth_service: AuthService
    books: BookRepository
    reading_sessions: ReadingSessionTracker
    access: AccessMediator

    def close(self) -> None:
        self.database.dispose()


def build_services(
    settings: Optional[Settings] = None,
    *,
    database: Optional[Database] = None,
    migrate: bool = True,
    hasher: Optional[PasswordHasher] = None,
    clock: Optional[Clock] = None,
) -> Services:
    """Open the database, run pending migrations and build the components."""

    settings = settings or get_settings()
    log_mgr.setup_logging(settings.log_level, settings.log_file)

    database = database or Database(settings.database_url, echo=settings.database_echo)
    if migrate:
        run_migrations(database.engine)

    credential_store = CredentialStore(
        database, hasher or BcryptPasswordHasher(rounds=settings.bcrypt_rounds)
    )
    session_manager = SessionManager(database, ttl=settings.session_ttl, clock=clock)
    auth_service = AuthService(credential_store, session_manager)
    books = BookRepository(database)
    reading_sessions = ReadingSessionTracker(database)

    logger.debug("Services initialised", extra={"event": "bootstrap.ready"})
    return Services(
        settings=settings,
        database=database,
        credential_store=credential_store,
        session_manager=session_manager,
        auth_service=auth_service,
        books=books,
        reading_sessions=reading_sessions,
        access=AccessMediator(auth_service, books, reading_sessions),
    )


__all__ = ["Services", "build_services"]
