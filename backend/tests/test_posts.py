# tests/test_posts.py
import re

from fastapi.testclient import TestClient


def test_create_post(client: TestClient, alice, create_post) -> None:
    post = create_post(alice, title="Hidden Gems of Northeast India", tags="india, hills,india, ")
    assert re.fullmatch(r"hidden-gems-of-northeast-india-\d{13}", post["slug"])
    assert post["tags"] == ["india", "hills"]
    assert post["status"] == "published"
    assert post["author"]["username"] == "alice"
    assert "email" not in post["author"]
    assert (post["views"], post["likes_count"], post["comments_count"]) == (0, 0, 0)


def test_create_post_requires_auth(client: TestClient) -> None:
    response = client.post(
        "/posts", json={"title": "T", "body": "B", "category": "Travel"}
    )
    assert response.status_code == 401


def test_create_post_rejects_unknown_category(client: TestClient, alice) -> None:
    response = client.post(
        "/posts",
        json={"title": "T", "body": "B", "category": "Astrology"},
        headers=alice["headers"],
    )
    assert response.status_code == 400


def test_same_title_gets_distinct_slugs(client: TestClient, alice, create_post) -> None:
    slugs = {create_post(alice, title="Same title")["slug"] for _ in range(3)}
    assert len(slugs) == 3


def test_get_post_by_id_and_slug_counts_views(client: TestClient, alice, create_post) -> None:
    post = create_post(alice)

    first = client.get(f"/posts/{post['id']}")
    assert first.status_code == 200
    assert first.json()["post"]["views"] == 1
    assert first.json()["isLiked"] is False

    second = client.get(f"/posts/{post['slug']}")
    assert second.json()["post"]["views"] == 2

    stats = client.get(f"/posts/{post['slug']}/stats").json()
    assert stats == {"success": True, "views": 2, "likes": 0, "comments": 0}


def test_unknown_post(client: TestClient) -> None:
    assert client.get("/posts/no-such-slug").status_code == 404
    assert client.get("/posts/00000000-0000-0000-0000-000000000000").status_code == 404


def test_drafts_hidden_from_others(client: TestClient, alice, bob, admin, create_post) -> None:
    draft = create_post(alice, title="Work in progress", status="draft")

    assert client.get(f"/posts/{draft['id']}").status_code == 404
    assert client.get(f"/posts/{draft['id']}", headers=bob["headers"]).status_code == 404
    assert client.put(
        f"/posts/{draft['id']}", json={"title": "Hijack"}, headers=bob["headers"]
    ).status_code == 404

    own = client.get(f"/posts/{draft['id']}", headers=alice["headers"])
    assert own.status_code == 200
    assert own.json()["post"]["views"] == 0
    assert client.get(f"/posts/{draft['id']}", headers=admin["headers"]).status_code == 200

    assert client.get("/posts").json()["total"] == 0
    mine = client.get("/posts/mine", headers=alice["headers"]).json()
    assert [p["id"] for p in mine["posts"]] == [draft["id"]]


def test_update_post(client: TestClient, alice, create_post) -> None:
    post = create_post(alice)
    response = client.put(
        f"/posts/{post['id']}",
        json={"title": "New title", "tags": ["goa"]},
        headers=alice["headers"],
    )
    assert response.status_code == 200
    updated = response.json()["post"]
    assert updated["title"] == "New title"
    assert updated["tags"] == ["goa"]
    assert updated["body"] == post["body"]
    assert updated["slug"] == post["slug"]


def test_update_and_delete_forbidden_for_non_author(client: TestClient, alice, bob, create_post) -> None:
    post = create_post(alice)
    update = client.put(f"/posts/{post['id']}", json={"title": "Mine now"}, headers=bob["headers"])
    assert update.status_code == 403
    assert client.delete(f"/posts/{post['id']}", headers=bob["headers"]).status_code == 403


def test_admin_can_delete_any_post(client: TestClient, alice, admin, create_post) -> None:
    post = create_post(alice)
    assert client.delete(f"/posts/{post['id']}", headers=admin["headers"]).status_code == 200
    assert client.get(f"/posts/{post['id']}").status_code == 404


def test_delete_post_removes_engagement(client: TestClient, alice, bob, create_post) -> None:
    post = create_post(alice)
    comment = client.post(
        f"/posts/{post['id']}/comments", json={"body": "First"}, headers=bob["headers"]
    ).json()["comment"]
    client.post(
        f"/posts/{post['id']}/comments",
        json={"body": "Reply", "parent_id": comment["id"]},
        headers=alice["headers"],
    )
    client.post(f"/comments/{comment['id']}/like", headers=alice["headers"])
    client.post(f"/posts/{post['id']}/like", headers=bob["headers"])

    assert client.delete(f"/posts/{post['id']}", headers=alice["headers"]).status_code == 200
    assert client.get(f"/posts/{post['id']}").status_code == 404
    assert client.post(f"/comments/{comment['id']}/like", headers=alice["headers"]).status_code == 404


def test_list_pagination(client: TestClient, alice, create_post) -> None:
    created = [create_post(alice, title=f"Post {i}") for i in range(5)]

    page = client.get("/posts", params={"page": 2, "limit": 2}).json()
    assert page["total"] == 5
    assert page["totalPages"] == 3
    assert page["currentPage"] == 2
    # newest first
    assert [p["title"] for p in page["posts"]] == ["Post 2", "Post 1"]

    last = client.get("/posts", params={"page": 3, "limit": 2}).json()
    assert [p["id"] for p in last["posts"]] == [created[0]["id"]]

    beyond = client.get("/posts", params={"page": 9, "limit": 2}).json()
    assert beyond["posts"] == []
    assert beyond["total"] == 5


def test_list_page_far_past_the_end(client: TestClient, alice, create_post) -> None:
    create_post(alice)

    response = client.get("/posts", params={"page": 10**17, "limit": 100})
    assert response.status_code == 200
    body = response.json()
    assert body["posts"] == []
    assert body["total"] == 1
    assert body["totalPages"] == 1
    assert body["currentPage"] == 10**17


def test_list_rejects_bad_pagination(client: TestClient) -> None:
    assert client.get("/posts", params={"page": 0}).status_code == 400
    assert client.get("/posts", params={"limit": 1000}).status_code == 400


def test_list_filters(client: TestClient, alice, create_post) -> None:
    create_post(alice, title="Goa beaches", category="Travel", tags=["Beach"])
    create_post(alice, title="Async Python", body="asyncio 100% explained", category="Technology", tags=["python"])
    create_post(alice, title="Street food", category="Food", tags=["beach", "snacks"])

    travel = client.get("/posts", params={"category": "Travel"}).json()
    assert [p["title"] for p in travel["posts"]] == ["Goa beaches"]

    tagged = client.get("/posts", params={"tag": "BEACH"}).json()
    assert {p["title"] for p in tagged["posts"]} == {"Goa beaches", "Street food"}

    searched = client.get("/posts", params={"search": "PYTHON"}).json()
    assert [p["title"] for p in searched["posts"]] == ["Async Python"]

    # LIKE metacharacters are matched literally
    percent = client.get("/posts", params={"search": "100%"}).json()
    assert percent["total"] == 1
    underscore = client.get("/posts", params={"search": "_"}).json()
    assert underscore["total"] == 0

    combined = client.get("/posts", params={"category": "Food", "tag": "beach"}).json()
    assert [p["title"] for p in combined["posts"]] == ["Street food"]

    # Whitespace-only filters are ignored
    blank = client.get("/posts", params={"search": "   ", "tag": "  "}).json()
    assert blank["total"] == 3


def test_sort_orders(client: TestClient, alice, bob, create_post) -> None:
    quiet = create_post(alice, title="Quiet")
    viewed = create_post(alice, title="Viewed")
    liked = create_post(alice, title="Liked")

    client.get(f"/posts/{viewed['id']}")
    client.get(f"/posts/{viewed['id']}")
    client.post(f"/posts/{liked['id']}/like", headers=bob["headers"])
    client.post(f"/posts/{quiet['id']}/comments", json={"body": "hi"}, headers=bob["headers"])

    def titles(sort: str) -> list[str]:
        return [p["title"] for p in client.get("/posts", params={"sort": sort}).json()["posts"]]

    assert titles("recent") == ["Liked", "Viewed", "Quiet"]
    assert titles("popular")[0] == "Viewed"
    assert titles("mostLiked")[0] == "Liked"
    assert titles("mostCommented")[0] == "Quiet"


def test_latest_and_search(client: TestClient, alice, create_post) -> None:
    create_post(alice, title="Monsoon trek", tags=["trekking"])
    create_post(alice, title="Spice market", body="Cardamom and pepper")
    create_post(alice, title="Draft idea", status="draft")

    latest = client.get("/posts/latest", params={"limit": 1}).json()
    assert [p["title"] for p in latest["posts"]] == ["Spice market"]

    by_tag = client.get("/posts/search", params={"q": "TREK"}).json()
    assert [p["title"] for p in by_tag["posts"]] == ["Monsoon trek"]
    by_body = client.get("/posts/search", params={"q": "pepper"}).json()
    assert [p["title"] for p in by_body["posts"]] == ["Spice market"]
    assert client.get("/posts/search", params={"q": "Draft"}).json()["posts"] == []
    assert client.get("/posts/search", params={"q": "  "}).json()["posts"] == []


def test_related_posts(client: TestClient, alice, create_post) -> None:
    main = create_post(alice, title="Main", category="Food")
    sibling = create_post(alice, title="Sibling", category="Food")
    create_post(alice, title="Elsewhere", category="Travel")
    create_post(alice, title="Hidden sibling", category="Food", status="draft")

    detail = client.get(f"/posts/{main['id']}").json()
    assert [p["id"] for p in detail["related"]] == [sibling["id"]]


def test_categories(client: TestClient, alice, create_post) -> None:
    create_post(alice, category="Food")
    create_post(alice, category="Food")
    create_post(alice, category="Travel")
    create_post(alice, category="Travel", status="draft")

    categories = client.get("/categories").json()["categories"]
    counts = {c["name"]: c["count"] for c in categories}
    assert counts["Food"] == 2
    assert counts["Travel"] == 1
    assert counts["Health"] == 0
    assert len(categories) == 9
