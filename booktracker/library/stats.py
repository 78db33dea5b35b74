"""Dashboard summaries derived from a user's books and reading sessions."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, Iterable, Optional

from .book_repository import BookRecord
from .reading_sessions import ReadingSessionEntry

STATUS_COMPLETED = "Completed"
STATUS_READING = "Reading"
STATUS_NOT_STARTED = "Not Started"


@dataclass(frozen=True)
class LibrarySummary:
    total: int
    completed: int
    reading: int
    not_started: int
    average_rating: Optional[float]
    top_genre: Optional[str]


@dataclass(frozen=True)
class ReadingActivity:
    daily_pages: Dict[date, int] = field(default_factory=dict)
    average_pages_per_day: float = 0.0
    streak_days: int = 0


def summarize_books(books: Iterable[BookRecord]) -> LibrarySummary:
    """Count books per status, average the positive ratings, pick the top genre."""

    books = list(books)
    statuses = Counter(book.status for book in books)
    ratings = [book.rating for book in books if book.rating > 0]
    genres = Counter(book.genre for book in books if book.genre)

    average_rating = round(sum(ratings) / len(ratings), 1) if ratings else None
    # Counter.most_common keeps first-seen order among ties.
    top_genre = genres.most_common(1)[0][0] if genres else None

    return LibrarySummary(
        total=len(books),
        completed=statuses[STATUS_COMPLETED],
        reading=statuses[STATUS_READING],
        not_started=statuses[STATUS_NOT_STARTED],
        average_rating=average_rating,
        top_genre=top_genre,
    )


def summarize_activity(entries: Iterable[ReadingSessionEntry], today: date) -> ReadingActivity:
    """Aggregate pages per start day, the daily average and the current streak.

    Open sessions contribute nothing. The streak counts consecutive days
    ending at ``today`` with a positive page total.
    """

    daily: Dict[date, int] = {}
    for entry in entries:
        pages = entry.pages_read
        if pages is None:
            continue
        day = entry.start_time.date()
        daily[day] = daily.get(day, 0) + pages

    ordered = dict(sorted(daily.items()))
    average = round(sum(ordered.values()) / len(ordered), 1) if ordered else 0.0

    streak = 0
    cursor = today
    while ordered.get(cursor, 0) > 0:
        streak += 1
        cursor -= timedelta(days=1)

    return ReadingActivity(
        daily_pages=ordered,
        average_pages_per_day=average,
        streak_days=streak,
    )


__all__ = [
    "LibrarySummary",
    "ReadingActivity",
    "STATUS_COMPLETED",
    "STATUS_NOT_STARTED",
    "STATUS_READING",
    "summarize_activity",
    "summarize_books",
]
