"""Database-backed credential store."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from .. import logging_manager as log_mgr
from ..database import Database
from ..database.models import UserModel
from ..errors import InvalidCredentialsError, UsernameTakenError
from .password_hashing import BcryptPasswordHasher, PasswordHasher

logger = log_mgr.get_logger().getChild("credential_store")


@dataclass(frozen=True)
class UserRecord:
    """Public view of a user account; never carries the password verifier."""

    id: int
    username: str
    created_at: datetime


class CredentialStore:
    """Create accounts and check passwords against stored verifiers."""

    def __init__(self, database: Database, hasher: Optional[PasswordHasher] = None) -> None:
        self._database = database
        self._hasher = hasher or BcryptPasswordHasher()

    def create_user(self, username: str, password: str) -> UserRecord:
        """Create a new account.

        Raises:
            ValueError: If the username or password is blank.
            UsernameTakenError: If the username already exists.
        """
        username = username.strip() if username else ""
        if not username:
            raise ValueError("Username must not be empty")
        if not password:
            raise ValueError("Password must not be empty")

        password_hash = self._hasher.hash(password)
        try:
            with self._database.session() as session:
                existing = session.execute(
                    select(UserModel.id).where(UserModel.username == username)
                ).scalar_one_or_none()
                if existing is not None:
                    raise UsernameTakenError(username)

                model = UserModel(username=username, password_hash=password_hash)
                session.add(model)
                session.flush()
                record = self._model_to_record(model)
        except IntegrityError as exc:
            # Lost a race against a concurrent signup for the same name.
            if self.get_user(username) is not None:
                raise UsernameTakenError(username) from exc
            raise

        logger.info(
            "Created user %s",
            username,
            extra={"event": "auth.user.created", "user_id": record.id},
        )
        return record

    def verify_credentials(self, username: str, password: str) -> int:
        """Return the user id for valid credentials.

        Raises:
            InvalidCredentialsError: For an unknown username or a wrong password.
        """
        with self._database.session() as session:
            row = session.execute(
                select(UserModel.id, UserModel.password_hash).where(
                    UserModel.username == (username or "").strip()
                )
            ).one_or_none()

        if row is None:
            self._hasher.dummy_verify(password or "")
            logger.info("Rejected login", extra={"event": "auth.login.rejected"})
            raise InvalidCredentialsError()

        user_id, password_hash = row
        if not self._hasher.verify(password or "", password_hash):
            logger.info(
                "Rejected login",
                extra={"event": "auth.login.rejected", "user_id": user_id},
            )
            raise InvalidCredentialsError()
        return user_id

    def get_user(self, username: str) -> Optional[UserRecord]:
        with self._database.session() as session:
            model = session.execute(
                select(UserModel).where(UserModel.username == username)
            ).scalar_one_or_none()
            return self._model_to_record(model) if model else None

    def get_user_by_id(self, user_id: int) -> Optional[UserRecord]:
        with self._database.session() as session:
            model = session.get(UserModel, user_id)
            return self._model_to_record(model) if model else None

    @staticmethod
    def _model_to_record(model: UserModel) -> UserRecord:
        return UserRecord(id=model.id, username=model.username, created_at=model.created_at)


__all__ = ["CredentialStore", "UserRecord"]
