"""Timed reading sessions over a user's books."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, update

from .. import logging_manager as log_mgr
from ..database import Database
from ..database.base import as_utc
from ..database.models import BookModel, ReadingSessionModel
from ..errors import BookNotFoundError

logger = log_mgr.get_logger().getChild("reading_sessions")


@dataclass(frozen=True)
class ReadingSessionEntry:
    id: int
    book_id: int
    start_time: datetime
    end_time: Optional[datetime]
    start_pages_read: int
    end_pages_read: Optional[int]

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    @property
    def pages_read(self) -> Optional[int]:
        """Pages covered by the session, or ``None`` while it is still open."""
        if self.end_time is None or self.end_pages_read is None:
            return None
        return self.end_pages_read - self.start_pages_read


def _check_pages(value: int, name: str) -> None:
    if value < 0:
        raise ValueError(f"{name} must not be negative")


class ReadingSessionTracker:
    """Start and stop reading timers, scoped by the owning user id.

    ``start`` only accepts books owned by the caller and ``stop`` only closes
    sessions that the caller owns and that are still open.
    """

    def __init__(self, database: Database) -> None:
        self._database = database

    def start(
        self,
        user_id: int,
        book_id: int,
        start_time: datetime,
        start_pages_read: int = 0,
    ) -> int:
        """Open a session and return its id.

        Raises:
            BookNotFoundError: If ``book_id`` is absent or owned by another user.
        """
        _check_pages(start_pages_read, "start_pages_read")
        with self._database.session() as session:
            owned = session.execute(
                select(BookModel.id).where(BookModel.id == book_id, BookModel.user_id == user_id)
            ).scalar_one_or_none()
            if owned is None:
                raise BookNotFoundError(book_id)

            model = ReadingSessionModel(
                user_id=user_id,
                book_id=book_id,
                start_time=as_utc(start_time),
                start_pages_read=start_pages_read,
            )
            session.add(model)
            session.flush()
            session_id = model.id

        logger.info(
            "Started reading session %d",
            session_id,
            extra={"event": "library.session.started", "user_id": user_id, "book_id": book_id},
        )
        return session_id

    def stop(
        self,
        session_id: int,
        user_id: int,
        end_time: datetime,
        end_pages_read: int,
        *,
        book_id: Optional[int] = None,
    ) -> bool:
        """Close an open session; ``False`` when nothing owned and open matched.

        Passing ``book_id`` additionally requires the session to belong to that book.
        """
        _check_pages(end_pages_read, "end_pages_read")
        criteria = [
            ReadingSessionModel.id == session_id,
            ReadingSessionModel.user_id == user_id,
            ReadingSessionModel.end_time.is_(None),
        ]
        if book_id is not None:
            criteria.append(ReadingSessionModel.book_id == book_id)

        with self._database.session() as session:
            result = session.execute(
                update(ReadingSessionModel)
                .where(*criteria)
                .values(end_time=as_utc(end_time), end_pages_read=end_pages_read)
            )
            stopped = result.rowcount > 0

        if stopped:
            logger.info(
                "Stopped reading session %d",
                session_id,
                extra={"event": "library.session.stopped", "user_id": user_id},
            )
        return stopped

    def list_for_user(self, user_id: int) -> List[ReadingSessionEntry]:
        with self._database.session() as session:
            models = (
                session.execute(
                    select(ReadingSessionModel)
                    .where(ReadingSessionModel.user_id == user_id)
                    .order_by(ReadingSessionModel.id.asc())
                )
                .scalars()
                .all()
            )
            return [
                ReadingSessionEntry(
                    id=model.id,
                    book_id=model.book_id,
                    start_time=model.start_time,
                    end_time=model.end_time,
                    start_pages_read=model.start_pages_read,
                    end_pages_read=model.end_pages_read,
                )
                for model in models
            ]


__all__ = ["ReadingSessionEntry", "ReadingSessionTracker"]
