"""Database-backed session token management."""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from sqlalchemy import delete, select

from .. import logging_manager as log_mgr
from ..database import Database
from ..database.base import as_utc, utcnow
from ..database.models import SessionModel
from ..errors import UnauthenticatedError

logger = log_mgr.get_logger().getChild("session_manager")

TOKEN_BYTES = 32
DEFAULT_SESSION_TTL = timedelta(hours=24)

Clock = Callable[[], datetime]
TokenFactory = Callable[[], str]


def normalise_token(token: Optional[str]) -> str:
    """Strip surrounding whitespace; ``""`` for a missing token."""
    return (token or "").strip()


def generate_token() -> str:
    """Return 256 bits of CSPRNG output as 64 hex characters."""
    return secrets.token_hex(TOKEN_BYTES)


@dataclass(frozen=True)
class SessionRecord:
    token: str
    user_id: int
    created_at: datetime
    expires_at: datetime


class SessionManager:
    """Issue, resolve and revoke opaque session tokens with absolute expiry.

    Expired rows stay in the table until :meth:`purge_expired` runs; lookups
    ignore them regardless.
    """

    def __init__(
        self,
        database: Database,
        *,
        ttl: timedelta = DEFAULT_SESSION_TTL,
        clock: Optional[Clock] = None,
        token_factory: Optional[TokenFactory] = None,
    ) -> None:
        if ttl <= timedelta(0):
            raise ValueError("Session ttl must be positive")
        self._database = database
        self._ttl = ttl
        self._clock = clock or utcnow
        self._token_factory = token_factory or generate_token

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def _now(self) -> datetime:
        return as_utc(self._clock())

    def issue_session(self, user_id: int, ttl: Optional[timedelta] = None) -> str:
        ttl = self._ttl if ttl is None else ttl
        if ttl <= timedelta(0):
            raise ValueError("Session ttl must be positive")

        now = self._now()
        token = self._token_factory()
        with self._database.session() as session:
            session.add(
                SessionModel(
                    token=token,
                    user_id=user_id,
                    created_at=now,
                    expires_at=now + ttl,
                )
            )
        logger.info(
            "Issued session",
            extra={"event": "auth.session.issued", "user_id": user_id},
        )
        return token

    def resolve_session(self, token: Optional[str]) -> int:
        """Return the user id owning ``token``.

        Raises:
            UnauthenticatedError: If the token is blank, unknown, or its
                expiry instant is not strictly after the current time.
        """
        token = normalise_token(token)
        if not token:
            raise UnauthenticatedError("Missing session token")

        now = self._now()
        with self._database.session() as session:
            user_id = session.execute(
                select(SessionModel.user_id).where(
                    SessionModel.token == token,
                    SessionModel.expires_at > now,
                )
            ).scalar_one_or_none()

        if user_id is None:
            raise UnauthenticatedError()
        return user_id

    def get_session(self, token: Optional[str]) -> Optional[SessionRecord]:
        """Return the stored session row, expired or not."""
        token = normalise_token(token)
        if not token:
            return None
        with self._database.session() as session:
            model = session.get(SessionModel, token)
            if model is None:
                return None
            return SessionRecord(
                token=model.token,
                user_id=model.user_id,
                created_at=model.created_at,
                expires_at=model.expires_at,
            )

    def revoke_session(self, token: Optional[str]) -> bool:
        """Delete ``token``; returns ``False`` when there was nothing to delete."""
        token = normalise_token(token)
        if not token:
            return False
        with self._database.session() as session:
            result = session.execute(delete(SessionModel).where(SessionModel.token == token))
            removed = result.rowcount > 0
        if removed:
            logger.info("Revoked session", extra={"event": "auth.session.revoked"})
        return removed

    def clear_sessions_for_user(self, user_id: int) -> int:
        with self._database.session() as session:
            result = session.execute(delete(SessionModel).where(SessionModel.user_id == user_id))
            return result.rowcount

    def purge_expired(self) -> int:
        """Delete every session whose expiry instant has passed."""
        now = self._now()
        with self._database.session() as session:
            result = session.execute(delete(SessionModel).where(SessionModel.expires_at <= now))
            purged = result.rowcount
        logger.info(
            "Purged %d expired sessions",
            purged,
            extra={"event": "auth.session.purged"},
        )
        return purged


__all__ = ["DEFAULT_SESSION_TTL", "SessionManager", "SessionRecord", "generate_token", "normalise_token"]
