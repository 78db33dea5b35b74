"""Fixtures for exercising the FastAPI app against a temporary SQLite file."""

from __future__ import annotations

from typing import Callable, Dict, Iterator

import pytest
from fastapi.testclient import TestClient

from booktracker.config_manager import Settings
from booktracker.webapi import create_app


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login(client: TestClient) -> Callable[..., Dict[str, str]]:
    """Sign up (if needed) and log in; returns an Authorization header."""

    def _login(username: str, password: str = "password") -> Dict[str, str]:
        client.post("/api/signup", json={"username": username, "password": password})
        response = client.post("/api/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        # Requests in tests authenticate with the header only.
        client.cookies.clear()
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _login
