"""
Entity gateways over the MangaDex API.

Each gateway wraps one upstream resource type and returns the ``data``
member of the upstream document: an entity object for lookups, a list for
searches and feeds.
"""

from typing import Any, Dict, List, Optional

from shared.errors import ExternalServiceError, UnreadableChapterError

from .mangadex_client import MangaDexClient, QueryParams, path_segment


class EntityGateway:
    """Shared ``get``/``search`` for a resource living under ``/<resource>``."""

    resource = ""

    def __init__(self, client: MangaDexClient) -> None:
        self.client = client

    async def get(self, entity_id: str) -> Dict[str, Any]:
        document = await self.client.get(
            f"/{self.resource}/{path_segment(entity_id)}",
            operation=f"{self.resource}.get",
        )
        return _data(document)

    async def search(self, query: Optional[QueryParams] = None) -> List[Dict[str, Any]]:
        document = await self.client.get(
            f"/{self.resource}",
            params=query,
            operation=f"{self.resource}.search",
        )
        return _data(document)


class MangaGateway(EntityGateway):
    resource = "manga"

    async def get_feed(self, manga_id: str, query: Optional[QueryParams] = None) -> List[Dict[str, Any]]:
        """Chapters of a manga, filtered and paginated by ``query``."""
        document = await self.client.get(
            f"/manga/{path_segment(manga_id)}/feed",
            params=query,
            operation="manga.feed",
        )
        return _data(document)


class ChapterGateway(EntityGateway):
    resource = "chapter"

    async def get_readable_pages(self, chapter: Dict[str, Any]) -> List[str]:
        """Resolve full image URLs for every page of ``chapter``.

        Chapters published on an external site have no MangaDex@Home
        pages and are refused.
        """
        chapter_id = chapter.get("id")
        if not chapter_id:
            raise ExternalServiceError("mangadex", "Chapter entity has no id")

        external_url = (chapter.get("attributes") or {}).get("externalUrl")
        if external_url:
            raise UnreadableChapterError(chapter_id, external_url)

        server = await self.client.get(
            f"/at-home/server/{path_segment(chapter_id)}",
            operation="at-home.server",
        )
        try:
            base_url = server["baseUrl"].rstrip("/")
            chapter_hash = server["chapter"]["hash"]
            files = server["chapter"]["data"]
        except (KeyError, TypeError, AttributeError):
            raise ExternalServiceError(
                "mangadex",
                "Malformed at-home server response",
                details={"chapter_id": chapter_id},
            )
        return [f"{base_url}/data/{chapter_hash}/{filename}" for filename in files]


class AuthorGateway(EntityGateway):
    # Artists are authors upstream; both facade routes use this gateway
    resource = "author"


class GroupGateway(EntityGateway):
    resource = "group"


class CoverGateway(EntityGateway):
    resource = "cover"


class TagGateway:
    def __init__(self, client: MangaDexClient) -> None:
        self.client = client

    async def get_all_tags(self) -> List[Dict[str, Any]]:
        document = await self.client.get("/manga/tag", operation="tag.list")
        return _data(document)


class ListGateway:
    def __init__(self, client: MangaDexClient) -> None:
        self.client = client

    async def get(self, list_id: str) -> Dict[str, Any]:
        document = await self.client.get(f"/list/{path_segment(list_id)}", operation="list.get")
        return _data(document)


def _data(document: Dict[str, Any]) -> Any:
    if "data" not in document:
        raise ExternalServiceError("mangadex", "Response document has no data member")
    return document["data"]
