"""Schemas for reading-session endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import MAX_ROW_ID, ApiModel


class SessionStartPayload(ApiModel):
    start_pages_read: int = Field(default=0, ge=0)


class SessionStartResponse(ApiModel):
    session_id: int


class SessionStopPayload(ApiModel):
    session_id: int = Field(ge=1, le=MAX_ROW_ID)
    end_pages_read: int = Field(ge=0)


class SessionStopResponse(ApiModel):
    stopped: bool


class ReadingSessionPayload(ApiModel):
    id: int
    book_id: int
    start_time: datetime
    end_time: Optional[datetime] = None
    pages_read: Optional[int] = None
    is_open: bool
