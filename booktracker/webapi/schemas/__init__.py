"""Pydantic schemas for the FastAPI web backend."""

from .auth import (
    LoginRequestPayload,
    LogoutResponse,
    SessionStatusResponse,
    SignupRequestPayload,
    UserPayload,
)
from .books import (
    BookCreatedResponse,
    BookDeleteResponse,
    BookEntry,
    BookPayload,
    BookUpdateResponse,
)
from .reading_sessions import (
    ReadingSessionPayload,
    SessionStartPayload,
    SessionStartResponse,
    SessionStopPayload,
    SessionStopResponse,
)
from .base import MAX_ROW_ID
from .stats import LibrarySummaryPayload, ReadingActivityPayload, StatsResponse

__all__ = [
    "BookCreatedResponse",
    "BookDeleteResponse",
    "BookEntry",
    "BookPayload",
    "BookUpdateResponse",
    "LibrarySummaryPayload",
    "LoginRequestPayload",
    "MAX_ROW_ID",
    "LogoutResponse",
    "ReadingActivityPayload",
    "ReadingSessionPayload",
    "SessionStartPayload",
    "SessionStartResponse",
    "SessionStatusResponse",
    "SessionStopPayload",
    "SessionStopResponse",
    "SignupRequestPayload",
    "StatsResponse",
    "UserPayload",
]
