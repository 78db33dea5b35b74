"""Schemas for the dashboard statistics endpoint."""

from __future__ import annotations

from typing import Dict, Optional

from pydantic import Field

from .base import ApiModel


class LibrarySummaryPayload(ApiModel):
    total: int
    completed: int
    reading: int
    not_started: int
    average_rating: Optional[float] = None
    top_genre: Optional[str] = None


class ReadingActivityPayload(ApiModel):
    daily_pages: Dict[str, int] = Field(default_factory=dict)
    average_pages_per_day: float = 0.0
    streak_days: int = 0


class StatsResponse(ApiModel):
    summary: LibrarySummaryPayload
    activity: ReadingActivityPayload
