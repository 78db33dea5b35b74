"""Dependency wiring for the FastAPI application."""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import Depends, Header, Path, Request

from ..access import AccessMediator, UserLibrary
from ..bootstrap import Services
from ..user_management import AuthService
from .schemas import MAX_ROW_ID

BookId = Annotated[int, Path(ge=1, le=MAX_ROW_ID)]


def _extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() == "bearer" and token:
        return token.strip() or None
    return authorization.strip() or None


def get_services(request: Request) -> Services:
    """Return the services built by :func:`~booktracker.webapi.application.create_app`."""

    return request.app.state.services


def get_auth_service(services: Services = Depends(get_services)) -> AuthService:
    return services.auth_service


def get_access_mediator(services: Services = Depends(get_services)) -> AccessMediator:
    return services.access


def get_session_token(
    request: Request,
    authorization: str | None = Header(default=None, alias="Authorization"),
    services: Services = Depends(get_services),
) -> Optional[str]:
    """Read the session token from the Authorization header, then the cookie."""

    token = _extract_bearer_token(authorization)
    if token:
        return token
    cookie = request.cookies.get(services.settings.session_cookie_name)
    return (cookie or "").strip() or None


def get_user_library(
    token: Optional[str] = Depends(get_session_token),
    access: AccessMediator = Depends(get_access_mediator),
) -> UserLibrary:
    """Resolve the caller; an invalid token surfaces as HTTP 401."""

    return access.for_token(token)
