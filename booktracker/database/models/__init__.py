"""SQLAlchemy models; importing this package registers them with Base.metadata."""

from .library import BookModel, ReadingSessionModel
from .user import SessionModel, UserModel

__all__ = [
    "UserModel",
    "SessionModel",
    "BookModel",
    "ReadingSessionModel",
]
