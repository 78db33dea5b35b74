from datetime import date, datetime, timezone

import pytest

from booktracker.library import (
    BookRecord,
    ReadingSessionEntry,
    summarize_activity,
    summarize_books,
)

pytestmark = pytest.mark.library


def _book(book_id, status, rating=3, genre=""):
    return BookRecord(
        id=book_id,
        title=f"Book {book_id}",
        author="",
        genre=genre,
        status=status,
        pages_read=0,
        total_pages=0,
        notes="",
        tags="",
        goal_end_date="",
        thumbnail="",
        rating=rating,
    )


def _entry(entry_id, day, start_pages, end_pages):
    start = datetime(2026, 3, day, 8, 0, tzinfo=timezone.utc)
    return ReadingSessionEntry(
        id=entry_id,
        book_id=1,
        start_time=start,
        end_time=start.replace(hour=9) if end_pages is not None else None,
        start_pages_read=start_pages,
        end_pages_read=end_pages,
    )


def test_summarize_books():
    books = [
        _book(1, "Completed", rating=5, genre="Fantasy"),
        _book(2, "Reading", rating=4, genre="History"),
        _book(3, "Reading", rating=0, genre="Fantasy"),
        _book(4, "Not Started", rating=2),
    ]

    summary = summarize_books(books)

    assert summary.total == 4
    assert summary.completed == 1
    assert summary.reading == 2
    assert summary.not_started == 1
    assert summary.average_rating == pytest.approx(3.7)
    assert summary.top_genre == "Fantasy"


def test_summarize_empty_library():
    summary = summarize_books([])

    assert summary.total == 0
    assert summary.average_rating is None
    assert summary.top_genre is None


def test_summarize_activity_groups_by_day_and_counts_streak():
    entries = [
        _entry(1, 11, 0, 10),
        _entry(2, 12, 10, 30),
        _entry(3, 13, 30, 40),
        _entry(4, 13, 40, 55),
        _entry(5, 14, 55, None),
    ]

    activity = summarize_activity(entries, today=date(2026, 3, 13))

    assert activity.daily_pages == {
        date(2026, 3, 11): 10,
        date(2026, 3, 12): 20,
        date(2026, 3, 13): 25,
    }
    assert activity.average_pages_per_day == pytest.approx(18.3)
    assert activity.streak_days == 3


def test_streak_breaks_without_reading_today():
    activity = summarize_activity([_entry(1, 12, 0, 10)], today=date(2026, 3, 13))

    assert activity.streak_days == 0
    assert activity.daily_pages == {date(2026, 3, 12): 10}


def test_no_sessions():
    activity = summarize_activity([], today=date(2026, 3, 13))

    assert activity.daily_pages == {}
    assert activity.average_pages_per_day == 0.0
    assert activity.streak_days == 0
