"""Application factory for the FastAPI backend."""

from __future__ import annotations

from contextlib import asynccontextmanager
import time
from typing import AsyncIterator, Awaitable, Callable, Optional
from uuid import uuid4

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import load_environment
from .. import logging_manager as log_mgr
from ..bootstrap import Services, build_services
from ..config_manager import Settings
from ..errors import (
    BookNotFoundError,
    BookTrackerError,
    InvalidCredentialsError,
    UnauthenticatedError,
    UsernameTakenError,
)
from .auth_routes import router as auth_router
from .routers.books import router as books_router
from .routers.reading_sessions import router as reading_sessions_router
from .routers.stats import router as stats_router

load_environment()

LOGGER = log_mgr.get_logger().getChild("webapi")

_ERROR_STATUS = (
    (UsernameTakenError, status.HTTP_409_CONFLICT),
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED),
    (UnauthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (BookNotFoundError, status.HTTP_404_NOT_FOUND),
)


def _status_for(exc: BookTrackerError) -> int:
    for error_type, status_code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def _error_response(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    # ``error`` mirrors ``detail`` for the browser client.
    return JSONResponse(
        status_code=status_code,
        content={"detail": message, "error": message},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Translate domain errors into HTTP responses."""

    @app.exception_handler(StarletteHTTPException)
    async def _handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(BookTrackerError)
    async def _handle_domain_error(request: Request, exc: BookTrackerError) -> JSONResponse:
        return _error_response(_status_for(exc), str(exc))

    @app.exception_handler(ValueError)
    async def _handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(SQLAlchemyError)
    async def _handle_storage_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        LOGGER.error(
            "Storage failure while handling %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
            extra={"event": "webapi.storage_error"},
        )
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app(
    settings: Optional[Settings] = None,
    *,
    services: Optional[Services] = None,
) -> FastAPI:
    """Build the FastAPI application.

    Migrations run here, once, before the app serves requests.
    """

    services = services or build_services(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            yield
        finally:
            services.close()

    app = FastAPI(title="booktracker", lifespan=lifespan)
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(services.settings.cors_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )
    register_exception_handlers(app)

    @app.middleware("http")
    async def _log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        started = time.perf_counter()
        with log_mgr.log_context(request_id=request_id):
            try:
                response = await call_next(request)
            except Exception:
                LOGGER.exception(
                    "Unhandled error for %s %s",
                    request.method,
                    request.url.path,
                    extra={
                        "event": "webapi.request.failed",
                        "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                    },
                )
                raise
            LOGGER.info(
                "%s %s",
                request.method,
                request.url.path,
                extra={
                    "event": "webapi.request",
                    "status": response.status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
        response.headers["X-Request-ID"] = request_id
        return response

    @app.get("/api/health", tags=["system"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(auth_router)
    app.include_router(books_router)
    app.include_router(reading_sessions_router)
    app.include_router(stats_router)

    LOGGER.info("booktracker API ready", extra={"event": "webapi.ready"})
    return app


__all__ = ["create_app", "register_exception_handlers"]
