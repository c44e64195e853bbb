# tests/conftest.py
"""
Shared fixtures.

Every test gets its own SQLite database file; the application lifespan
creates the tables on startup (DATABASE_AUTO_CREATE).
"""

import os
from collections.abc import Callable, Iterator
from itertools import count
from typing import Any

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-bloghub-tests-only")
os.environ.setdefault("DATABASE_AUTO_CREATE", "true")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./bloghub-test.db")

import pytest
from fastapi.testclient import TestClient

from bloghub.api.main import app
from bloghub.config.settings import settings
from bloghub.scripts.promote_admin import main as promote_admin


_USER_COUNTER = count(1)


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def database_url(tmp_path, monkeypatch) -> str:
    url = f"sqlite+aiosqlite:///{tmp_path / 'bloghub.db'}"
    monkeypatch.setattr(settings, "DATABASE_URL", url)
    return url


@pytest.fixture()
def client(database_url: str) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def register(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Register a user and return the auth response body plus ready headers."""

    def _register(**overrides: Any) -> dict[str, Any]:
        n = next(_USER_COUNTER)
        payload = {
            "name": f"Writer {n}",
            "username": f"writer_{n}",
            "email": f"writer{n}@example.com",
            "password": "secret123",
        }
        payload.update(overrides)
        response = client.post("/auth/register", json=payload)
        assert response.status_code == 201, response.text
        body = response.json()
        body["headers"] = auth_headers(body["token"])
        body["password"] = payload["password"]
        return body

    return _register


@pytest.fixture()
def alice(register) -> dict[str, Any]:
    return register(name="Alice", username="alice", email="alice@example.com")


@pytest.fixture()
def bob(register) -> dict[str, Any]:
    return register(name="Bob", username="bob", email="bob@example.com")


@pytest.fixture()
def admin(register) -> dict[str, Any]:
    user = register(name="Admin", username="admin", email="admin@example.com")
    assert promote_admin(["admin@example.com"]) == 0
    return user


@pytest.fixture()
def create_post(client: TestClient) -> Callable[..., dict[str, Any]]:
    def _create_post(author: dict[str, Any], **overrides: Any) -> dict[str, Any]:
        payload = {
            "title": "Hidden Gems of Northeast India",
            "body": "Seven sisters, countless valleys.",
            "category": "Travel",
            "tags": ["india", "hills"],
        }
        payload.update(overrides)
        response = client.post("/posts", json=payload, headers=author["headers"])
        assert response.status_code == 201, response.text
        return response.json()["post"]

    return _create_post
