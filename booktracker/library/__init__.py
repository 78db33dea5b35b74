"""Per-user book collection and reading-session tracking."""

from .book_repository import BookFields, BookRecord, BookRepository
from .reading_sessions import ReadingSessionEntry, ReadingSessionTracker
from .stats import LibrarySummary, ReadingActivity, summarize_activity, summarize_books

__all__ = [
    "BookFields",
    "BookRecord",
    "BookRepository",
    "LibrarySummary",
    "ReadingActivity",
    "ReadingSessionEntry",
    "ReadingSessionTracker",
    "summarize_activity",
    "summarize_books",
]
