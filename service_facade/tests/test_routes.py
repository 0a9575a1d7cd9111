"""
Unit tests for the facade route table and response normalization.
"""

from unittest.mock import AsyncMock

import httpx
import pytest

from shared.errors import NotFoundError, UpstreamError
from shared.test_helpers import CatalogDataFactory


class TestMangaRoutes:
    """Manga search, lookup and feed routes."""

    def test_search_forwards_query_unmodified(self, client, context):
        results = [CatalogDataFactory.manga("m-1"), CatalogDataFactory.manga("m-2", "Naruto")]
        context.manga.search = AsyncMock(return_value=results)

        response = client.get("/manga?title=one+piece&limit=5")

        assert response.status_code == 200
        assert response.json() == results
        context.manga.search.assert_awaited_once_with({"title": "one piece", "limit": "5"})

    def test_search_without_query_passes_empty_mapping(self, client, context):
        context.manga.search = AsyncMock(return_value=[])

        response = client.get("/manga")

        assert response.status_code == 200
        assert response.json() == []
        context.manga.search.assert_awaited_once_with({})

    def test_get_manga(self, client, context):
        manga = CatalogDataFactory.manga("abc-123")
        context.manga.get = AsyncMock(return_value=manga)

        response = client.get("/manga/abc-123")

        assert response.status_code == 200
        assert response.json() == manga
        context.manga.get.assert_awaited_once_with("abc-123")

    def test_unknown_manga_is_normalized_to_500(self, client, context):
        context.manga.get = AsyncMock(side_effect=NotFoundError("Manga not found"))

        response = client.get("/manga/does-not-exist")

        assert response.status_code == 500
        assert response.json() == {"error": "Manga not found"}

    def test_feed_forwards_id_and_array_params(self, client, context):
        feed = [CatalogDataFactory.chapter("ch-1"), CatalogDataFactory.chapter("ch-2")]
        context.manga.get_feed = AsyncMock(return_value=feed)

        response = client.get(
            "/manga/abc-123/feed",
            params=[
                ("translatedLanguage[]", "en"),
                ("includes[]", "scanlation_group"),
                ("includes[]", "user"),
                ("order[chapter]", "asc"),
            ],
        )

        assert response.status_code == 200
        assert response.json() == feed
        context.manga.get_feed.assert_awaited_once_with(
            "abc-123",
            {
                "translatedLanguage[]": ["en"],
                "includes[]": ["scanlation_group", "user"],
                "order[chapter]": "asc",
            },
        )


class TestChapterPagesRoute:
    """The composed chapter lookup then page resolution route."""

    def test_pages_success(self, client, context):
        chapter = CatalogDataFactory.chapter("ch-1")
        pages = ["https://uploads.test/data/h/1.png", "https://uploads.test/data/h/2.png"]
        context.chapters.get = AsyncMock(return_value=chapter)
        context.chapters.get_readable_pages = AsyncMock(return_value=pages)

        response = client.get("/at-home/server/ch-1")

        assert response.status_code == 200
        assert response.json() == {"pages": pages}
        context.chapters.get.assert_awaited_once_with("ch-1")
        context.chapters.get_readable_pages.assert_awaited_once_with(chapter)

    def test_chapter_lookup_failure_skips_page_resolution(self, client, context):
        context.chapters.get = AsyncMock(side_effect=NotFoundError("Chapter not found"))
        context.chapters.get_readable_pages = AsyncMock(return_value=[])

        response = client.get("/at-home/server/missing")

        assert response.status_code == 500
        assert response.json() == {"error": "Chapter not found"}
        context.chapters.get_readable_pages.assert_not_awaited()

    def test_page_resolution_failure_is_normalized(self, client, context):
        context.chapters.get = AsyncMock(return_value=CatalogDataFactory.chapter("ch-1"))
        context.chapters.get_readable_pages = AsyncMock(
            side_effect=UpstreamError(503, "at-home server unavailable")
        )

        response = client.get("/at-home/server/ch-1")

        assert response.status_code == 500
        assert response.json() == {"error": "at-home server unavailable"}


class TestEntityRoutes:
    """Single-entity lookups and the remaining search routes."""

    def test_get_chapter(self, client, context):
        chapter = CatalogDataFactory.chapter("ch-9")
        context.chapters.get = AsyncMock(return_value=chapter)

        response = client.get("/chapter/ch-9")

        assert response.status_code == 200
        assert response.json() == chapter

    def test_author_and_artist_share_lookup(self, client, context):
        author = CatalogDataFactory.author("9f3")
        context.authors.get = AsyncMock(return_value=author)

        author_response = client.get("/author/9f3")
        artist_response = client.get("/artist/9f3")

        assert author_response.status_code == artist_response.status_code == 200
        assert author_response.content == artist_response.content
        assert context.authors.get.await_count == 2
        assert [call.args for call in context.authors.get.await_args_list] == [("9f3",), ("9f3",)]

    @pytest.mark.parametrize(
        "path,gateway,entity_id",
        [
            ("/group/g-1", "groups", "g-1"),
            ("/cover/c-1", "covers", "c-1"),
            ("/list/l-1", "lists", "l-1"),
        ],
    )
    def test_get_entity(self, client, context, path, gateway, entity_id):
        entity = {"id": entity_id, "type": gateway}
        mock_get = AsyncMock(return_value=entity)
        setattr(getattr(context, gateway), "get", mock_get)

        response = client.get(path)

        assert response.status_code == 200
        assert response.json() == entity
        mock_get.assert_awaited_once_with(entity_id)

    def test_cover_search(self, client, context):
        covers = [{"id": "c-1", "type": "cover_art"}]
        context.covers.search = AsyncMock(return_value=covers)

        response = client.get("/cover?manga[]=abc-123&limit=10")

        assert response.status_code == 200
        assert response.json() == covers
        context.covers.search.assert_awaited_once_with({"manga[]": ["abc-123"], "limit": "10"})

    def test_tags(self, client, context):
        tags = [{"id": "t-1", "type": "tag", "attributes": {"name": {"en": "Action"}}}]
        context.tags.get_all_tags = AsyncMock(return_value=tags)

        response = client.get("/tag?ignored=1")

        assert response.status_code == 200
        assert response.json() == tags
        context.tags.get_all_tags.assert_awaited_once_with()

    @pytest.mark.parametrize(
        "path,gateway,method",
        [
            ("/manga/x", "manga", "get"),
            ("/chapter/x", "chapters", "get"),
            ("/author/x", "authors", "get"),
            ("/artist/x", "authors", "get"),
            ("/group/x", "groups", "get"),
            ("/cover/x", "covers", "get"),
            ("/list/x", "lists", "get"),
            ("/manga", "manga", "search"),
            ("/cover", "covers", "search"),
            ("/manga/x/feed", "manga", "get_feed"),
            ("/tag", "tags", "get_all_tags"),
        ],
    )
    def test_every_failure_is_500_with_error(self, client, context, path, gateway, method):
        setattr(getattr(context, gateway), method, AsyncMock(side_effect=httpx.ConnectError("boom")))

        response = client.get(path)

        assert response.status_code == 500
        assert response.json() == {"error": "boom"}

    def test_error_without_message_uses_exception_name(self, client, context):
        context.groups.get = AsyncMock(side_effect=RuntimeError())

        response = client.get("/group/g-1")

        assert response.status_code == 500
        assert response.json() == {"error": "RuntimeError"}


class TestStaticRoutes:
    """Routes that never reach the upstream API."""

    def test_health_ignores_authentication_state(self, client, service):
        assert service.session.authenticated is False

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_rate_limits_message(self, client, upstream):
        response = client.get("/rate-limits")

        assert response.status_code == 200
        assert response.json() == {"message": "Check X-RateLimit headers on any API response"}
        assert upstream.requests == []

    def test_root_serves_documentation(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "MangaDex Facade API" in response.text

    def test_metrics_exposes_request_counts(self, client):
        client.get("/health")

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "http_requests_total" in response.text


class TestCrossCutting:
    """CORS, request IDs and JSON formatting."""

    def test_cors_allows_any_origin(self, client, context):
        context.manga.get = AsyncMock(return_value={"id": "abc"})

        response = client.get("/manga/abc", headers={"Origin": "http://reader.example"})

        assert response.headers["access-control-allow-origin"] == "*"

    def test_cors_preflight(self, client):
        response = client.options(
            "/manga",
            headers={
                "Origin": "http://reader.example",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    def test_request_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-42"})

        assert response.headers["X-Request-ID"] == "req-42"

    def test_request_id_is_generated(self, client):
        response = client.get("/health")

        assert response.headers["X-Request-ID"]

    def test_json_is_indented(self, client):
        response = client.get("/health")

        assert response.text == '{\n  "status": "ok"\n}'
