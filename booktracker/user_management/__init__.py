"""User management utilities for booktracker."""
from .auth_service import AuthService
from .credential_store import CredentialStore, UserRecord
from .password_hashing import BcryptPasswordHasher, PasswordHasher
from .session_manager import SessionManager, SessionRecord

__all__ = [
    "AuthService",
    "BcryptPasswordHasher",
    "CredentialStore",
    "PasswordHasher",
    "SessionManager",
    "SessionRecord",
    "UserRecord",
]
