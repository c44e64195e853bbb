# tests/test_auth.py
from datetime import timedelta

from fastapi.testclient import TestClient

from bloghub.config.settings import settings
from bloghub.shared.utils.security import SecurityUtils
from tests.conftest import auth_headers


def test_register_returns_token_and_user(client: TestClient) -> None:
    response = client.post(
        "/auth/register",
        json={
            "name": "Priya Sharma",
            "username": "priya_s",
            "email": "Priya@Example.com",
            "password": "secret123",
        },
    )
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["token"]
    assert body["expires_in"] == settings.access_token_expire_seconds
    user = body["user"]
    assert user["email"] == "priya@example.com"
    assert user["role"] == "user"
    assert user["avatar"] == "default-avatar.jpg"
    assert "password" not in user
    assert "password_hash" not in user


def test_register_duplicate_email_or_username(client: TestClient, alice) -> None:
    same_email = client.post(
        "/auth/register",
        json={"name": "Other", "username": "other", "email": "ALICE@example.com", "password": "secret123"},
    )
    assert same_email.status_code == 400
    assert same_email.json()["error"]["message"] == "Email or username already exists"

    same_username = client.post(
        "/auth/register",
        json={"name": "Other", "username": "alice", "email": "other@example.com", "password": "secret123"},
    )
    assert same_username.status_code == 400


def test_register_validation(client: TestClient) -> None:
    response = client.post(
        "/auth/register",
        json={"name": "X", "username": "no spaces", "email": "not-an-email", "password": "123"},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "VALIDATION_ERROR"
    fields = {error["field"] for error in body["error"]["details"]["errors"]}
    assert {"name", "username", "email", "password"} <= fields


def test_login(client: TestClient, alice) -> None:
    response = client.post(
        "/auth/login", json={"email": "alice@example.com", "password": alice["password"]}
    )
    assert response.status_code == 200
    assert response.json()["user"]["username"] == "alice"


def test_login_failures_are_indistinguishable(client: TestClient, alice) -> None:
    wrong_password = client.post(
        "/auth/login", json={"email": "alice@example.com", "password": "nope-nope"}
    )
    unknown_email = client.post(
        "/auth/login", json={"email": "nobody@example.com", "password": "nope-nope"}
    )
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json()["error"] == unknown_email.json()["error"]


def test_me_requires_token(client: TestClient) -> None:
    response = client.get("/auth/me")
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"


def test_me(client: TestClient, alice) -> None:
    response = client.get("/auth/me", headers=alice["headers"])
    assert response.status_code == 200
    assert response.json()["user"]["id"] == alice["user"]["id"]


def test_garbage_token_rejected(client: TestClient) -> None:
    response = client.get("/auth/me", headers=auth_headers("not.a.token"))
    assert response.status_code == 401


def test_expired_token_rejected(client: TestClient, alice) -> None:
    token = SecurityUtils.create_access_token(
        {"id": alice["user"]["id"]},
        settings.SECRET_KEY,
        timedelta(seconds=-5),
        algorithm=settings.JWT_ALGORITHM,
    )
    response = client.get("/auth/me", headers=auth_headers(token))
    assert response.status_code == 401
    assert "expired" in response.json()["error"]["message"]


def test_verify_token_issues_fresh_token(client: TestClient, alice) -> None:
    response = client.get("/auth/verify-token", headers=alice["headers"])
    assert response.status_code == 200
    body = response.json()
    assert body["token"]
    assert body["user"]["username"] == "alice"

    again = client.get("/auth/me", headers=auth_headers(body["token"]))
    assert again.status_code == 200
