# tests/test_likes.py
"""
Post likes, sequential and concurrent.

The concurrent tests drive the ASGI app directly with httpx so that many
requests are in flight at once, each in its own database session.
"""

import asyncio
from collections.abc import AsyncIterator

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from bloghub.api.main import app
from bloghub.shared.db import Database
from tests.conftest import auth_headers


def test_like_toggle(client: TestClient, alice, bob, create_post) -> None:
    post = create_post(alice)

    liked = client.post(f"/posts/{post['id']}/like", headers=bob["headers"])
    assert liked.status_code == 200
    assert liked.json() == {"success": True, "likesCount": 1, "isLiked": True}

    detail = client.get(f"/posts/{post['id']}", headers=bob["headers"]).json()
    assert detail["isLiked"] is True
    assert detail["post"]["likes_count"] == 1

    unliked = client.post(f"/posts/{post['slug']}/like", headers=bob["headers"])
    assert unliked.json() == {"success": True, "likesCount": 0, "isLiked": False}


def test_like_counts_distinct_users(client: TestClient, alice, bob, create_post) -> None:
    post = create_post(alice)
    client.post(f"/posts/{post['id']}/like", headers=alice["headers"])
    response = client.post(f"/posts/{post['id']}/like", headers=bob["headers"])
    assert response.json()["likesCount"] == 2


def test_like_does_not_touch_updated_at(client: TestClient, alice, bob, create_post) -> None:
    post = create_post(alice)
    client.post(f"/posts/{post['id']}/like", headers=bob["headers"])
    detail = client.get(f"/posts/{post['id']}").json()["post"]
    assert detail["updated_at"] == post["updated_at"]


def test_like_requires_auth(client: TestClient, alice, create_post) -> None:
    post = create_post(alice)
    assert client.post(f"/posts/{post['id']}/like").status_code == 401


def test_like_hidden_draft(client: TestClient, alice, bob, create_post) -> None:
    draft = create_post(alice, status="draft")
    assert client.post(f"/posts/{draft['id']}/like", headers=bob["headers"]).status_code == 404


def test_failed_commit_is_reported(client: TestClient, alice, bob, create_post, monkeypatch) -> None:
    post = create_post(alice)

    async def failing_commit(self: AsyncSession) -> None:
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    with monkeypatch.context() as patch:
        patch.setattr(AsyncSession, "commit", failing_commit)
        response = client.post(f"/posts/{post['id']}/like", headers=bob["headers"])

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "INTERNAL_ERROR"

    # The like was rolled back, and the client was told so
    stats = client.get(f"/posts/{post['id']}/stats").json()
    assert stats["likes"] == 0


# ═══════════════════════════════════════════════════════════════════════════════
# CONCURRENCY
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture()
async def async_client(database_url: str) -> AsyncIterator[httpx.AsyncClient]:
    database = Database(database_url)
    await database.connect()
    await database.create_all()
    app.state.database = database
    transport = httpx.ASGITransport(app=app)
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        await database.close()


async def _register(client: httpx.AsyncClient, n: int) -> dict[str, str]:
    response = await client.post(
        "/auth/register",
        json={
            "name": f"Reader {n}",
            "username": f"reader_{n}",
            "email": f"reader{n}@example.com",
            "password": "secret123",
        },
    )
    assert response.status_code == 201, response.text
    return auth_headers(response.json()["token"])


async def _create_post(client: httpx.AsyncClient, headers: dict[str, str]) -> str:
    response = await client.post(
        "/posts",
        json={"title": "Busy post", "body": "Everyone is here", "category": "Culture"},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["post"]["id"]


async def test_concurrent_likes_from_many_users(async_client: httpx.AsyncClient) -> None:
    users = [await _register(async_client, n) for n in range(8)]
    post_id = await _create_post(async_client, users[0])

    responses = await asyncio.gather(
        *(async_client.post(f"/posts/{post_id}/like", headers=headers) for headers in users)
    )
    assert all(r.status_code == 200 for r in responses)
    assert sorted(r.json()["likesCount"] for r in responses) == list(range(1, 9))

    stats = (await async_client.get(f"/posts/{post_id}/stats")).json()
    assert stats["likes"] == 8

    await asyncio.gather(
        *(async_client.post(f"/posts/{post_id}/like", headers=headers) for headers in users)
    )
    stats = (await async_client.get(f"/posts/{post_id}/stats")).json()
    assert stats["likes"] == 0


async def test_concurrent_toggles_from_one_user_stay_consistent(
    async_client: httpx.AsyncClient,
) -> None:
    headers = await _register(async_client, 1)
    post_id = await _create_post(async_client, headers)

    responses = await asyncio.gather(
        *(async_client.post(f"/posts/{post_id}/like", headers=headers) for _ in range(5))
    )
    assert all(r.status_code == 200 for r in responses)

    detail = (await async_client.get(f"/posts/{post_id}", headers=headers)).json()
    expected = 1 if detail["isLiked"] else 0
    assert detail["post"]["likes_count"] == expected
    # five toggles starting from "not liked" end on "liked"
    assert detail["isLiked"] is True


async def test_concurrent_comments_and_deletes(async_client: httpx.AsyncClient) -> None:
    headers = await _register(async_client, 1)
    post_id = await _create_post(async_client, headers)

    created = await asyncio.gather(
        *(
            async_client.post(
                f"/posts/{post_id}/comments", json={"body": f"comment {i}"}, headers=headers
            )
            for i in range(10)
        )
    )
    assert all(r.status_code == 201 for r in created)
    stats = (await async_client.get(f"/posts/{post_id}/stats")).json()
    assert stats["comments"] == 10

    comment_ids = [r.json()["comment"]["id"] for r in created]
    deleted = await asyncio.gather(
        *(async_client.delete(f"/comments/{cid}", headers=headers) for cid in comment_ids[:6])
    )
    assert all(r.status_code == 200 for r in deleted)

    stats = (await async_client.get(f"/posts/{post_id}/stats")).json()
    listing = (await async_client.get(f"/posts/{post_id}/comments")).json()
    assert stats["comments"] == listing["total"] == 4
