"""SQLAlchemy database layer for booktracker.

Provides the storage handle, declarative base and migration runner shared by
the credential, session and library repositories.
"""

from .base import Base, UTCDateTime, utcnow
from .engine import Database
from .migrations import run_migrations

__all__ = ["Base", "Database", "UTCDateTime", "run_migrations", "utcnow"]
