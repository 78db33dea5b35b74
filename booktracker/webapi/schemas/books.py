"""Schemas for the book collection endpoints."""

from __future__ import annotations

from pydantic import Field

from .base import ApiModel


class BookPayload(ApiModel):
    title: str = ""
    author: str = ""
    genre: str = ""
    status: str = ""
    pages_read: int = Field(default=0, ge=0)
    total_pages: int = Field(default=0, ge=0)
    notes: str = ""
    tags: str = ""
    goal_end_date: str = ""
    thumbnail: str = ""
    rating: int = 3


class BookEntry(BookPayload):
    id: int
    progress_percent: int = 0


class BookCreatedResponse(ApiModel):
    id: int


class BookUpdateResponse(ApiModel):
    updated: bool


class BookDeleteResponse(ApiModel):
    deleted: bool
    book_id: int
