"""Routes for the per-user book collection."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ...access import UserLibrary
from ...library import BookFields, BookRecord
from ..dependencies import BookId, get_user_library
from ..schemas import (
    BookCreatedResponse,
    BookDeleteResponse,
    BookEntry,
    BookPayload,
    BookUpdateResponse,
)

router = APIRouter(prefix="/api/books", tags=["books"])


def _entry(record: BookRecord) -> BookEntry:
    return BookEntry(
        id=record.id,
        progress_percent=record.progress_percent,
        **record.fields.to_columns(),
    )


@router.get("", response_model=List[BookEntry])
def list_books(library: UserLibrary = Depends(get_user_library)) -> List[BookEntry]:
    return [_entry(record) for record in library.list_books()]


@router.post("", response_model=BookCreatedResponse, status_code=status.HTTP_201_CREATED)
def add_book(
    payload: BookPayload,
    library: UserLibrary = Depends(get_user_library),
) -> BookCreatedResponse:
    book_id = library.add_book(BookFields.from_mapping(payload.model_dump()))
    return BookCreatedResponse(id=book_id)


@router.put("/{book_id}", response_model=BookUpdateResponse)
def update_book(
    book_id: BookId,
    payload: BookPayload,
    library: UserLibrary = Depends(get_user_library),
) -> BookUpdateResponse:
    # Fields missing from the body keep their stored values.
    existing = library.get_book(book_id)
    if existing is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")

    merged = {**existing.fields.to_columns(), **payload.model_dump(exclude_unset=True)}
    if not library.update_book(book_id, BookFields.from_mapping(merged)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")
    return BookUpdateResponse(updated=True)


@router.delete("/{book_id}", response_model=BookDeleteResponse)
def delete_book(
    book_id: BookId,
    library: UserLibrary = Depends(get_user_library),
) -> BookDeleteResponse:
    deleted = library.remove_book(book_id)
    return BookDeleteResponse(deleted=deleted, book_id=book_id)
