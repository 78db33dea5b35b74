"""Schemas for authentication/session endpoints."""

from __future__ import annotations

from pydantic import Field

from .base import ApiModel


class SignupRequestPayload(ApiModel):
    """Incoming payload for the signup endpoint."""

    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)


class LoginRequestPayload(ApiModel):
    """Incoming payload for the login endpoint."""

    username: str
    password: str


class UserPayload(ApiModel):
    """Lightweight description of an authenticated user."""

    id: int
    username: str


class SessionStatusResponse(ApiModel):
    """Response payload returned after a successful login."""

    token: str
    user: UserPayload


class LogoutResponse(ApiModel):
    revoked: bool
