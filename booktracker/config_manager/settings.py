"""Pydantic settings model and accessors for configuration values."""
from __future__ import annotations

from datetime import timedelta
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATABASE_URL = "sqlite:///booktracker.db"
DEFAULT_SESSION_TTL_HOURS = 24.0
DEFAULT_BCRYPT_ROUNDS = 12
DEFAULT_CORS_ORIGINS = (
    "http://localhost:8080",
    "http://127.0.0.1:8080",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


class Settings(BaseSettings):
    """Typed representation of the application configuration.

    Every field can be overridden through a ``BOOKTRACKER_``-prefixed
    environment variable or an entry in a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOOKTRACKER_",
        env_file=".env",
        extra="ignore",
    )

    database_url: str = DEFAULT_DATABASE_URL
    database_echo: bool = False
    session_ttl_hours: float = Field(default=DEFAULT_SESSION_TTL_HOURS, gt=0)
    session_cookie_name: str = "session_token"
    bcrypt_rounds: int = Field(default=DEFAULT_BCRYPT_ROUNDS, ge=4, le=31)
    log_level: str = "INFO"
    log_file: Optional[Path] = None
    cors_origins: list[str] = Field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        candidate = value.strip().upper()
        if candidate not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unsupported log level: {value!r}")
        return candidate

    @property
    def session_ttl(self) -> timedelta:
        return timedelta(hours=self.session_ttl_hours)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Drop the cached settings so the next access re-reads the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
