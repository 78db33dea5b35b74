from datetime import timedelta

import pytest
from pydantic import ValidationError

from booktracker.config_manager import Settings


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("BOOKTRACKER_DATABASE_URL", "sqlite:///override.db")
    monkeypatch.setenv("BOOKTRACKER_SESSION_TTL_HOURS", "0.5")
    monkeypatch.setenv("BOOKTRACKER_LOG_LEVEL", "debug")

    settings = Settings()

    assert settings.database_url == "sqlite:///override.db"
    assert settings.session_ttl == timedelta(minutes=30)
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "overrides",
    [{"session_ttl_hours": 0}, {"bcrypt_rounds": 3}, {"log_level": "chatty"}],
)
def test_invalid_values_are_rejected(overrides):
    with pytest.raises(ValidationError):
        Settings(**overrides)
