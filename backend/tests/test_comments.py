# tests/test_comments.py
from fastapi.testclient import TestClient


def _comment(client: TestClient, post_id: str, author, body: str, parent_id: str | None = None):
    payload = {"body": body}
    if parent_id is not None:
        payload["parent_id"] = parent_id
    return client.post(f"/posts/{post_id}/comments", json=payload, headers=author["headers"])


def _comments_count(client: TestClient, post_id: str) -> int:
    return client.get(f"/posts/{post_id}/stats").json()["comments"]


def test_add_comment_and_reply(client: TestClient, alice, bob, create_post) -> None:
    post = create_post(alice)

    top = _comment(client, post["id"], bob, "  Lovely photos  ")
    assert top.status_code == 201
    top_comment = top.json()["comment"]
    assert top_comment["body"] == "Lovely photos"
    assert top_comment["parent_id"] is None
    assert top_comment["author"]["username"] == "bob"

    reply = _comment(client, post["id"], alice, "Thank you", parent_id=top_comment["id"])
    assert reply.status_code == 201
    assert reply.json()["comment"]["parent_id"] == top_comment["id"]

    assert _comments_count(client, post["id"]) == 2


def test_comment_by_slug(client: TestClient, alice, create_post) -> None:
    post = create_post(alice)
    assert _comment(client, post["slug"], alice, "via slug").status_code == 201
    assert _comments_count(client, post["id"]) == 1


def test_comment_requires_auth_and_body(client: TestClient, alice, create_post) -> None:
    post = create_post(alice)
    assert client.post(f"/posts/{post['id']}/comments", json={"body": "hi"}).status_code == 401
    assert _comment(client, post["id"], alice, "   ").status_code == 400


def test_reply_to_reply_rejected(client: TestClient, alice, bob, create_post) -> None:
    post = create_post(alice)
    top = _comment(client, post["id"], bob, "top").json()["comment"]
    reply = _comment(client, post["id"], alice, "reply", parent_id=top["id"]).json()["comment"]

    nested = _comment(client, post["id"], bob, "nested", parent_id=reply["id"])
    assert nested.status_code == 400
    assert nested.json()["error"]["code"] == "VALIDATION_ERROR"
    assert _comments_count(client, post["id"]) == 2


def test_reply_parent_must_be_on_same_post(client: TestClient, alice, create_post) -> None:
    first = create_post(alice, title="First")
    second = create_post(alice, title="Second")
    top = _comment(client, first["id"], alice, "on first").json()["comment"]

    response = _comment(client, second["id"], alice, "cross-post", parent_id=top["id"])
    assert response.status_code == 400
    assert _comments_count(client, second["id"]) == 0


def test_comments_on_unknown_or_hidden_post(client: TestClient, alice, bob, create_post) -> None:
    draft = create_post(alice, status="draft")
    assert _comment(client, "missing-slug", bob, "hello").status_code == 404
    assert _comment(client, draft["id"], bob, "hello").status_code == 404
    assert client.get(f"/posts/{draft['id']}/comments").status_code == 404


def test_thread_ordering(client: TestClient, alice, bob, create_post) -> None:
    post = create_post(alice)
    older = _comment(client, post["id"], bob, "older").json()["comment"]
    newer = _comment(client, post["id"], bob, "newer").json()["comment"]
    _comment(client, post["id"], alice, "reply 1", parent_id=older["id"])
    _comment(client, post["id"], bob, "reply 2", parent_id=older["id"])

    listing = client.get(f"/posts/{post['id']}/comments").json()
    assert listing["total"] == 4
    assert [c["id"] for c in listing["comments"]] == [newer["id"], older["id"]]
    assert [r["body"] for r in listing["comments"][1]["replies"]] == ["reply 1", "reply 2"]
    assert listing["comments"][0]["replies"] == []

    detail = client.get(f"/posts/{post['id']}").json()
    assert [c["id"] for c in detail["comments"]] == [newer["id"], older["id"]]
    assert detail["post"]["comments_count"] == 4


def test_delete_top_level_removes_replies(client: TestClient, alice, bob, create_post) -> None:
    post = create_post(alice)
    top = _comment(client, post["id"], alice, "top").json()["comment"]
    _comment(client, post["id"], alice, "reply", parent_id=top["id"])
    _comment(client, post["id"], bob, "reply too", parent_id=top["id"])
    other = _comment(client, post["id"], bob, "unrelated").json()["comment"]
    assert _comments_count(client, post["id"]) == 4

    response = client.delete(f"/comments/{top['id']}", headers=alice["headers"])
    assert response.status_code == 200
    assert response.json()["deleted"] == 3

    assert _comments_count(client, post["id"]) == 1
    listing = client.get(f"/posts/{post['id']}/comments").json()
    assert [c["id"] for c in listing["comments"]] == [other["id"]]


def test_delete_reply_removes_only_itself(client: TestClient, alice, create_post) -> None:
    post = create_post(alice)
    top = _comment(client, post["id"], alice, "top").json()["comment"]
    reply = _comment(client, post["id"], alice, "reply", parent_id=top["id"]).json()["comment"]

    response = client.delete(f"/comments/{reply['id']}", headers=alice["headers"])
    assert response.json()["deleted"] == 1
    assert _comments_count(client, post["id"]) == 1


def test_delete_comment_authorization(client: TestClient, alice, bob, admin, create_post) -> None:
    post = create_post(alice)
    comment = _comment(client, post["id"], bob, "bob's").json()["comment"]

    # not even the post author may delete someone else's comment
    assert client.delete(f"/comments/{comment['id']}", headers=alice["headers"]).status_code == 403
    assert _comments_count(client, post["id"]) == 1

    assert client.delete(f"/comments/{comment['id']}", headers=admin["headers"]).status_code == 200
    assert client.delete(f"/comments/{comment['id']}", headers=admin["headers"]).status_code == 404
    assert _comments_count(client, post["id"]) == 0


def test_comment_like_toggle(client: TestClient, alice, bob, create_post) -> None:
    post = create_post(alice)
    comment = _comment(client, post["id"], alice, "like me").json()["comment"]

    liked = client.post(f"/comments/{comment['id']}/like", headers=bob["headers"])
    assert liked.json() == {"success": True, "likesCount": 1, "isLiked": True}

    unliked = client.post(f"/comments/{comment['id']}/like", headers=bob["headers"])
    assert unliked.json() == {"success": True, "likesCount": 0, "isLiked": False}


def test_comment_like_unknown_comment(client: TestClient, alice) -> None:
    response = client.post(
        "/comments/00000000-0000-0000-0000-000000000000/like", headers=alice["headers"]
    )
    assert response.status_code == 404
