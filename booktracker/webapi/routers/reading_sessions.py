"""Routes for starting, stopping and listing reading sessions."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ...access import UserLibrary
from ..dependencies import BookId, get_user_library
from ..schemas import (
    ReadingSessionPayload,
    SessionStartPayload,
    SessionStartResponse,
    SessionStopPayload,
    SessionStopResponse,
)

router = APIRouter(prefix="/api", tags=["reading-sessions"])


@router.post(
    "/books/{book_id}/session/start",
    response_model=SessionStartResponse,
    status_code=status.HTTP_201_CREATED,
)
def start_session(
    book_id: BookId,
    payload: SessionStartPayload,
    library: UserLibrary = Depends(get_user_library),
) -> SessionStartResponse:
    session_id = library.start_session(book_id, payload.start_pages_read)
    return SessionStartResponse(session_id=session_id)


@router.post("/books/{book_id}/session/stop", response_model=SessionStopResponse)
def stop_session(
    book_id: BookId,
    payload: SessionStopPayload,
    library: UserLibrary = Depends(get_user_library),
) -> SessionStopResponse:
    stopped = library.stop_session(payload.session_id, payload.end_pages_read, book_id=book_id)
    if not stopped:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Open reading session not found"
        )
    return SessionStopResponse(stopped=True)


@router.get("/sessions", response_model=List[ReadingSessionPayload])
def list_sessions(library: UserLibrary = Depends(get_user_library)) -> List[ReadingSessionPayload]:
    return [
        ReadingSessionPayload(
            id=entry.id,
            book_id=entry.book_id,
            start_time=entry.start_time,
            end_time=entry.end_time,
            pages_read=entry.pages_read,
            is_open=entry.is_open,
        )
        for entry in library.list_sessions()
    ]
