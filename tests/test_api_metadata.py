"""Integration tests for GET /api/metadata."""
import httpx
import pytest
from httpx import AsyncClient

from metadata_api.schemas import MetadataRead, SingleMetadataRead

BLOG_POST = """
<html><head>
<title>Post</title>
<meta property="og:title" content="OG Post">
<meta property="og:description" content="About the post">
<link rel="icon" href="/favicon.png">
<link rel="icon" href="../favicon.png">
<meta property="og:image" content="../img/cover.png">
</head><body></body></html>
"""


class TestMetadataEndpoint:
    @pytest.mark.asyncio
    async def test_returns_metadata(self, client: AsyncClient, upstream):
        upstream.add_page("https://example.com/blog/post", BLOG_POST)
        resp = await client.get("/api/metadata", params={"url": "https://example.com/blog/post"})
        assert resp.status_code == 200
        assert resp.json() == {
            "title": "Post",
            "description": "About the post",
            "favicons": ["https://example.com/favicon.png"],
            "preview_images": ["https://example.com/img/cover.png"],
            "url": "https://example.com/blog/post",
        }

    @pytest.mark.asyncio
    async def test_empty_page_round_trip(self, client: AsyncClient, upstream):
        upstream.add_page("https://example.com/", "")
        resp = await client.get("/api/metadata", params={"url": "https://example.com"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["title"] is None
        assert data["preview_images"] == []
        assert MetadataRead.model_validate_json(resp.text) == MetadataRead(
            favicons=["https://example.com/favicon.ico"],
            url="https://example.com/",
        )

    @pytest.mark.asyncio
    async def test_upstream_error_status_still_returns_metadata(self, client: AsyncClient, upstream):
        upstream.add_page("https://example.com/gone", "<title>410 Gone</title>", status_code=410)
        resp = await client.get("/api/metadata", params={"url": "https://example.com/gone"})
        assert resp.status_code == 200
        assert resp.json()["title"] == "410 Gone"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", "?url=", "?url=example.com", "?url=http%3A%2F%2F", "?url=%20"])
    async def test_invalid_url_returns_400(self, client: AsyncClient, upstream, query):
        resp = await client.get(f"/api/metadata{query}")
        assert resp.status_code == 400
        assert resp.text == "Invalid URL"
        assert upstream.requests == []

    @pytest.mark.asyncio
    async def test_unreachable_host_returns_502(self, client: AsyncClient, upstream):
        resp = await client.get("/api/metadata", params={"url": "https://unreachable.invalid/"})
        assert resp.status_code == 502
        assert resp.text == "Failed to fetch URL"
        assert len(upstream.requests) == 1

    @pytest.mark.asyncio
    async def test_timeout_returns_502(self, client: AsyncClient, upstream):
        upstream.errors["https://slow.example.com/"] = httpx.ConnectTimeout("timed out")
        resp = await client.get("/api/metadata", params={"url": "https://slow.example.com/"})
        assert resp.status_code == 502
        assert "timed out" not in resp.text


class TestSingleShape:
    @pytest.fixture
    def shape(self) -> str:
        return "single"

    @pytest.mark.asyncio
    async def test_returns_single_values(self, client: AsyncClient, upstream):
        upstream.add_page("https://example.com/blog/post", BLOG_POST)
        resp = await client.get("/api/metadata", params={"url": "https://example.com/blog/post"})
        assert resp.status_code == 200
        assert SingleMetadataRead.model_validate_json(resp.text) == SingleMetadataRead(
            title="Post",
            description="About the post",
            favicon="https://example.com/favicon.png",
            preview_image="https://example.com/img/cover.png",
            url="https://example.com/blog/post",
        )

    @pytest.mark.asyncio
    async def test_no_icons_falls_back_to_favicon_ico(self, client: AsyncClient, upstream):
        upstream.add_page("https://example.com/", "<title>bare</title>")
        resp = await client.get("/api/metadata", params={"url": "https://example.com/"})
        data = resp.json()
        assert data["favicon"] == "https://example.com/favicon.ico"
        assert data["preview_image"] is None
