"""
Article endpoint tests: CRUD lifecycle, authorization status codes,
favorites, feed and diagnostic headers, all through the HTTP surface.

Each test creates the users and articles it needs via the API, so test
order does not matter.
"""
import pytest
from httpx import AsyncClient


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _user(client: AsyncClient, username: str) -> dict[str, str]:
    """Create a user and return the identity header for requests as them."""
    resp = await client.post("/api/v1/users", json={
        "username": username,
        "email": f"{username}@example.com",
    })
    assert resp.status_code == 201
    return {"X-User-Id": str(resp.json()["id"])}


async def _article(client: AsyncClient, headers: dict, title: str = "Test Article", tags=None) -> dict:
    resp = await client.post("/api/v1/articles", headers=headers, json={
        "title": title,
        "description": "A description",
        "body": "The body",
        "tags": tags or [],
    })
    assert resp.status_code == 201
    return resp.json()


# ---------------------------------------------------------------------------
# Infrastructure / health
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_health(async_client: AsyncClient):
    resp = await async_client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_diagnostic_headers(async_client: AsyncClient):
    """Every response carries timing and a non-zero SQL query count."""
    headers = await _user(async_client, "diag")
    article = await _article(async_client, headers)

    resp = await async_client.get(f"/api/v1/articles/{article['slug']}")
    assert "x-response-time-ms" in resp.headers
    assert int(resp.headers["x-query-count"]) > 0


# ---------------------------------------------------------------------------
# Create + get
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_and_get_article(async_client: AsyncClient):
    headers = await _user(async_client, "writer")
    created = await _article(async_client, headers, "Rust Systems", tags=["rust", "systems"])

    assert created["slug"] == "rust-systems"
    assert sorted(created["tags"]) == ["rust", "systems"]
    assert created["favorites_count"] == 0
    assert created["favorited"] is False
    assert created["author"] == {
        "username": "writer", "bio": None, "image": None, "following": False,
    }

    resp = await async_client.get("/api/v1/articles/rust-systems")
    assert resp.status_code == 200
    detail = resp.json()
    assert detail["title"] == "Rust Systems"
    assert detail["description"] == "A description"
    assert detail["body"] == "The body"
    assert sorted(detail["tags"]) == ["rust", "systems"]


@pytest.mark.asyncio
async def test_create_article_requires_identity(async_client: AsyncClient):
    resp = await async_client.post("/api/v1/articles", json={
        "title": "Anon", "description": "d", "body": "b",
    })
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_create_article_validation_error(async_client: AsyncClient):
    headers = await _user(async_client, "validator")
    resp = await async_client.post("/api/v1/articles", headers=headers, json={"title": "No body"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_get_missing_article_returns_404(async_client: AsyncClient):
    resp = await async_client.get("/api/v1/articles/does-not-exist")
    assert resp.status_code == 404
    assert "does-not-exist" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_tags_endpoint_lists_created_tags(async_client: AsyncClient):
    headers = await _user(async_client, "tagger")
    await _article(async_client, headers, "One", tags=["python", "fastapi"])
    await _article(async_client, headers, "Two", tags=["python"])

    resp = await async_client.get("/api/v1/tags")
    assert resp.status_code == 200
    assert resp.json() == {"tags": ["fastapi", "python"]}


# ---------------------------------------------------------------------------
# Update / delete authorization
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_article_by_author(async_client: AsyncClient):
    headers = await _user(async_client, "owner")
    article = await _article(async_client, headers, "Original")

    resp = await async_client.put(
        f"/api/v1/articles/{article['slug']}", headers=headers, json={"title": "Renamed"}
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "Renamed"
    assert body["slug"] == "original"
    assert body["description"] == article["description"]


@pytest.mark.asyncio
async def test_update_article_by_other_user_is_forbidden(async_client: AsyncClient):
    owner = await _user(async_client, "owner")
    other = await _user(async_client, "other")
    article = await _article(async_client, owner, "Mine")

    resp = await async_client.put(
        f"/api/v1/articles/{article['slug']}", headers=other, json={"title": "Yours"}
    )
    assert resp.status_code == 403

    unchanged = (await async_client.get(f"/api/v1/articles/{article['slug']}")).json()
    assert unchanged["title"] == "Mine"


@pytest.mark.asyncio
async def test_delete_article_flow(async_client: AsyncClient):
    owner = await _user(async_client, "owner")
    other = await _user(async_client, "other")
    article = await _article(async_client, owner, "Doomed")
    url = f"/api/v1/articles/{article['slug']}"

    assert (await async_client.delete(url, headers=other)).status_code == 403
    assert (await async_client.delete(url, headers=owner)).status_code == 204
    assert (await async_client.get(url)).status_code == 404
    assert (await async_client.delete(url, headers=owner)).status_code == 404


# ---------------------------------------------------------------------------
# Favorites
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_favorite_and_unfavorite(async_client: AsyncClient):
    author = await _user(async_client, "author")
    fan = await _user(async_client, "fan")
    article = await _article(async_client, author, "Lovable")
    url = f"/api/v1/articles/{article['slug']}/favorite"

    resp = await async_client.post(url, headers=fan)
    assert resp.status_code == 200
    assert resp.json()["favorited"] is True
    assert resp.json()["favorites_count"] == 1

    # Repeating the favorite is a no-op.
    resp = await async_client.post(url, headers=fan)
    assert resp.json()["favorites_count"] == 1

    resp = await async_client.delete(url, headers=fan)
    assert resp.status_code == 200
    assert resp.json()["favorited"] is False
    assert resp.json()["favorites_count"] == 0


@pytest.mark.asyncio
async def test_favorite_missing_article_returns_404(async_client: AsyncClient):
    fan = await _user(async_client, "fan")
    resp = await async_client.post("/api/v1/articles/ghost/favorite", headers=fan)
    assert resp.status_code == 404


# ---------------------------------------------------------------------------
# Feed
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_feed_shows_followed_authors(async_client: AsyncClient):
    reader = await _user(async_client, "reader")
    followed = await _user(async_client, "followed")
    stranger = await _user(async_client, "stranger")
    await _article(async_client, followed, "Followed One")
    await _article(async_client, followed, "Followed Two")
    await _article(async_client, stranger, "Stranger Post")

    resp = await async_client.post("/api/v1/profiles/followed/follow", headers=reader)
    assert resp.status_code == 200

    resp = await async_client.get("/api/v1/articles/feed", headers=reader)
    assert resp.status_code == 200
    data = resp.json()
    assert data["articles_count"] == 2
    assert {a["author"]["username"] for a in data["articles"]} == {"followed"}

    resp = await async_client.get("/api/v1/articles/feed?limit=1&offset=1", headers=reader)
    assert resp.json()["articles_count"] == 1


@pytest.mark.asyncio
async def test_feed_requires_identity(async_client: AsyncClient):
    resp = await async_client.get("/api/v1/articles/feed")
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_feed_rejects_bad_pagination(async_client: AsyncClient):
    reader = await _user(async_client, "reader")
    resp = await async_client.get("/api/v1/articles/feed?limit=0", headers=reader)
    assert resp.status_code == 422
    resp = await async_client.get("/api/v1/articles/feed?offset=-1", headers=reader)
    assert resp.status_code == 422
