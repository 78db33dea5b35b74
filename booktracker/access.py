"""Bind library operations to the user resolved from a session token."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional

from .database.base import utcnow
from .library import (
    BookFields,
    BookRecord,
    BookRepository,
    LibrarySummary,
    ReadingActivity,
    ReadingSessionEntry,
    ReadingSessionTracker,
    summarize_activity,
    summarize_books,
)
from .user_management import AuthService


@dataclass(frozen=True)
class UserLibrary:
    """Library view for one authenticated user.

    Every call forwards the bound ``user_id``; there is no way to pass a
    different owner through this object.
    """

    user_id: int
    books: BookRepository
    sessions: ReadingSessionTracker

    def list_books(self) -> List[BookRecord]:
        return self.books.list_books(self.user_id)

    def get_book(self, book_id: int) -> Optional[BookRecord]:
        return self.books.get_book(book_id, self.user_id)

    def add_book(self, fields: BookFields) -> int:
        return self.books.add_book(self.user_id, fields)

    def update_book(self, book_id: int, fields: BookFields) -> bool:
        return self.books.update_book(book_id, self.user_id, fields)

    def remove_book(self, book_id: int) -> bool:
        return self.books.remove_book(book_id, self.user_id)

    def start_session(
        self, book_id: int, start_pages_read: int = 0, start_time: Optional[datetime] = None
    ) -> int:
        return self.sessions.start(self.user_id, book_id, start_time or utcnow(), start_pages_read)

    def stop_session(
        self,
        session_id: int,
        end_pages_read: int,
        end_time: Optional[datetime] = None,
        *,
        book_id: Optional[int] = None,
    ) -> bool:
        return self.sessions.stop(
            session_id, self.user_id, end_time or utcnow(), end_pages_read, book_id=book_id
        )

    def list_sessions(self) -> List[ReadingSessionEntry]:
        return self.sessions.list_for_user(self.user_id)

    def summary(self) -> LibrarySummary:
        return summarize_books(self.list_books())

    def activity(self, today: Optional[date] = None) -> ReadingActivity:
        return summarize_activity(self.list_sessions(), today or utcnow().date())


class AccessMediator:
    """Resolve tokens once and hand out user-scoped library views."""

    def __init__(
        self,
        auth_service: AuthService,
        books: BookRepository,
        sessions: ReadingSessionTracker,
    ) -> None:
        self._auth_service = auth_service
        self._books = books
        self._sessions = sessions

    def for_user(self, user_id: int) -> UserLibrary:
        return UserLibrary(user_id=user_id, books=self._books, sessions=self._sessions)

    def for_token(self, session_token: Optional[str]) -> UserLibrary:
        """Raises :class:`~booktracker.errors.UnauthenticatedError` for bad tokens."""
        return self.for_user(self._auth_service.authenticate(session_token))

    @property
    def auth_service(self) -> AuthService:
        return self._auth_service


__all__ = ["AccessMediator", "UserLibrary"]
