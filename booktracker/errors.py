"""Error taxonomy shared by the credential, session and library layers."""

from __future__ import annotations


class BookTrackerError(Exception):
    """Base class for expected, caller-facing failures."""


class UsernameTakenError(BookTrackerError):
    """Raised when signing up with a username that already exists."""

    def __init__(self, username: str) -> None:
        super().__init__(f"Username '{username}' is already taken")
        self.username = username


class InvalidCredentialsError(BookTrackerError):
    """Raised for an unknown username or a wrong password.

    Both cases carry the same message so callers cannot enumerate accounts.
    """

    def __init__(self) -> None:
        super().__init__("Invalid username or password")


class UnauthenticatedError(BookTrackerError):
    """Raised when a session token is missing, unknown or expired."""

    def __init__(self, message: str = "Invalid or expired session token") -> None:
        super().__init__(message)


class BookNotFoundError(BookTrackerError):
    """Raised when a book id is absent or owned by a different user."""

    def __init__(self, book_id: int) -> None:
        super().__init__(f"Book {book_id} not found")
        self.book_id = book_id


__all__ = [
    "BookTrackerError",
    "UsernameTakenError",
    "InvalidCredentialsError",
    "UnauthenticatedError",
    "BookNotFoundError",
]
