"""Authentication endpoints for the FastAPI backend."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from ..bootstrap import Services
from ..user_management import AuthService, UserRecord
from .dependencies import get_auth_service, get_services, get_session_token
from .schemas import (
    LoginRequestPayload,
    LogoutResponse,
    SessionStatusResponse,
    SignupRequestPayload,
    UserPayload,
)

router = APIRouter(prefix="/api", tags=["auth"])


def _user_payload(record: UserRecord) -> UserPayload:
    return UserPayload(id=record.id, username=record.username)


@router.post("/signup", response_model=UserPayload, status_code=status.HTTP_201_CREATED)
def signup(
    payload: SignupRequestPayload,
    auth_service: AuthService = Depends(get_auth_service),
) -> UserPayload:
    record = auth_service.signup(payload.username, payload.password)
    return _user_payload(record)


@router.post("/login", response_model=SessionStatusResponse)
def login(
    payload: LoginRequestPayload,
    response: Response,
    services: Services = Depends(get_services),
) -> SessionStatusResponse:
    auth_service = services.auth_service
    token = auth_service.login(payload.username, payload.password)
    record = auth_service.current_user(token)

    response.set_cookie(
        key=services.settings.session_cookie_name,
        value=token,
        max_age=int(services.session_manager.ttl.total_seconds()),
        httponly=True,
        samesite="lax",
    )
    return SessionStatusResponse(token=token, user=_user_payload(record))


@router.post("/logout", response_model=LogoutResponse)
def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    services: Services = Depends(get_services),
) -> LogoutResponse:
    revoked = services.auth_service.logout(token)
    response.delete_cookie(services.settings.session_cookie_name)
    return LogoutResponse(revoked=revoked)


@router.get("/me", response_model=UserPayload)
def me(
    token: Optional[str] = Depends(get_session_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserPayload:
    return _user_payload(auth_service.current_user(token))
