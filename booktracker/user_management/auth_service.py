"""Authentication utilities built on top of the credential store."""
from __future__ import annotations

from functools import wraps
from typing import Callable, Optional

from .credential_store import CredentialStore, UserRecord
from .session_manager import SessionManager
from ..errors import UnauthenticatedError


class AuthService:
    """Coordinate signup, login and token resolution."""

    def __init__(self, credential_store: CredentialStore, session_manager: SessionManager) -> None:
        self._credential_store = credential_store
        self._session_manager = session_manager

    # ------------------------------------------------------------------
    # Authentication helpers
    # ------------------------------------------------------------------
    def signup(self, username: str, password: str) -> UserRecord:
        return self._credential_store.create_user(username, password)

    def login(self, username: str, password: str) -> str:
        """Validate user credentials and create a session token."""
        user_id = self._credential_store.verify_credentials(username, password)
        return self._session_manager.issue_session(user_id)

    def logout(self, session_token: Optional[str]) -> bool:
        """Terminate a session token if present."""
        return self._session_manager.revoke_session(session_token)

    def authenticate(self, session_token: Optional[str]) -> int:
        """Resolve a session token into the owning user id."""
        return self._session_manager.resolve_session(session_token)

    def current_user(self, session_token: Optional[str]) -> UserRecord:
        user_id = self.authenticate(session_token)
        record = self._credential_store.get_user_by_id(user_id)
        if record is None:
            raise UnauthenticatedError()
        return record

    # ------------------------------------------------------------------
    # Authorisation helpers
    # ------------------------------------------------------------------
    def require_authenticated(self) -> Callable:
        """Decorator resolving the ``session_token`` keyword into ``user_id``."""

        def decorator(func: Callable) -> Callable:
            @wraps(func)
            def wrapper(*args, **kwargs):
                token = kwargs.pop("session_token", None)
                if token is None:
                    raise UnauthenticatedError("A session_token keyword argument is required")
                kwargs["user_id"] = self.authenticate(token)
                return func(*args, **kwargs)

            return wrapper

        return decorator

    @property
    def session_manager(self) -> SessionManager:
        return self._session_manager

    @property
    def credential_store(self) -> CredentialStore:
        return self._credential_store
