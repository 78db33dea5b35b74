"""Dashboard statistics route."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends

from ...access import UserLibrary
from ..dependencies import get_user_library
from ..schemas import LibrarySummaryPayload, ReadingActivityPayload, StatsResponse

router = APIRouter(prefix="/api", tags=["stats"])


@router.get("/stats", response_model=StatsResponse)
def get_stats(library: UserLibrary = Depends(get_user_library)) -> StatsResponse:
    activity = library.activity()
    return StatsResponse(
        summary=LibrarySummaryPayload(**asdict(library.summary())),
        activity=ReadingActivityPayload(
            daily_pages={day.isoformat(): pages for day, pages in activity.daily_pages.items()},
            average_pages_per_day=activity.average_pages_per_day,
            streak_days=activity.streak_days,
        ),
    )
