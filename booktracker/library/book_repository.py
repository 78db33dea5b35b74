"""Per-user persistence for book records."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields as dataclass_fields
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import delete, select, update

from .. import logging_manager as log_mgr
from ..database import Database
from ..database.models import BookModel

logger = log_mgr.get_logger().getChild("book_repository")

DEFAULT_RATING = 3


@dataclass(frozen=True)
class BookFields:
    """Mutable book attributes, written in full by add and update."""

    title: str = ""
    author: str = ""
    genre: str = ""
    status: str = ""
    pages_read: int = 0
    total_pages: int = 0
    notes: str = ""
    tags: str = ""
    goal_end_date: str = ""
    thumbnail: str = ""
    rating: int = DEFAULT_RATING

    def __post_init__(self) -> None:
        if self.pages_read < 0:
            raise ValueError("pages_read must not be negative")
        if self.total_pages < 0:
            raise ValueError("total_pages must not be negative")

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "BookFields":
        """Build fields from a loose mapping; ``None`` values fall back to defaults."""
        known = {field.name for field in dataclass_fields(cls)}
        values = {key: value for key, value in payload.items() if key in known and value is not None}
        return cls(**values)

    def to_columns(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BookRecord:
    id: int
    title: str
    author: str
    genre: str
    status: str
    pages_read: int
    total_pages: int
    notes: str
    tags: str
    goal_end_date: str
    thumbnail: str
    rating: int

    @property
    def fields(self) -> BookFields:
        values = asdict(self)
        values.pop("id")
        return BookFields(**values)

    @property
    def progress_percent(self) -> int:
        if self.total_pages <= 0:
            return 0
        return round(self.pages_read / self.total_pages * 100)


class BookRepository:
    """CRUD over books, always scoped by the owning user id.

    Update and remove on an id that is absent or owned by someone else match
    zero rows and report ``False``; the two cases are indistinguishable.
    """

    def __init__(self, database: Database) -> None:
        self._database = database

    def list_books(self, user_id: int) -> List[BookRecord]:
        with self._database.session() as session:
            models = (
                session.execute(
                    select(BookModel)
                    .where(BookModel.user_id == user_id)
                    .order_by(BookModel.id.asc())
                )
                .scalars()
                .all()
            )
            return [self._model_to_record(m) for m in models]

    def get_book(self, book_id: int, user_id: int) -> Optional[BookRecord]:
        with self._database.session() as session:
            model = session.execute(
                select(BookModel).where(BookModel.id == book_id, BookModel.user_id == user_id)
            ).scalar_one_or_none()
            return self._model_to_record(model) if model else None

    def add_book(self, user_id: int, fields: BookFields) -> int:
        with self._database.session() as session:
            model = BookModel(user_id=user_id, **fields.to_columns())
            session.add(model)
            session.flush()
            book_id = model.id
        logger.info(
            "Added book %d",
            book_id,
            extra={"event": "library.book.added", "user_id": user_id},
        )
        return book_id

    def update_book(self, book_id: int, user_id: int, fields: BookFields) -> bool:
        with self._database.session() as session:
            result = session.execute(
                update(BookModel)
                .where(BookModel.id == book_id, BookModel.user_id == user_id)
                .values(**fields.to_columns())
            )
            updated = result.rowcount > 0
        if not updated:
            logger.debug(
                "Book update matched no rows",
                extra={"event": "library.book.update_noop", "user_id": user_id},
            )
        return updated

    def remove_book(self, book_id: int, user_id: int) -> bool:
        with self._database.session() as session:
            result = session.execute(
                delete(BookModel).where(BookModel.id == book_id, BookModel.user_id == user_id)
            )
            return result.rowcount > 0

    @staticmethod
    def _model_to_record(model: BookModel) -> BookRecord:
        return BookRecord(
            id=model.id,
            title=model.title,
            author=model.author,
            genre=model.genre,
            status=model.status,
            pages_read=model.pages_read,
            total_pages=model.total_pages,
            notes=model.notes,
            tags=model.tags,
            goal_end_date=model.goal_end_date,
            thumbnail=model.thumbnail,
            rating=model.rating,
        )


__all__ = ["BookFields", "BookRecord", "BookRepository", "DEFAULT_RATING"]
