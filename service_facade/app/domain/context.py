"""
Dependency-injection context handed to the route table.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..adapters import (
    AuthorGateway,
    ChapterGateway,
    CoverGateway,
    GroupGateway,
    ListGateway,
    MangaDexClient,
    MangaGateway,
    TagGateway,
)
from ..auth.session import ServiceSession


@dataclass
class CatalogContext:
    """The one service session plus every gateway that calls through it."""

    session: ServiceSession
    manga: MangaGateway
    chapters: ChapterGateway
    authors: AuthorGateway
    groups: GroupGateway
    covers: CoverGateway
    tags: TagGateway
    lists: ListGateway

    @classmethod
    def from_client(cls, client: MangaDexClient) -> "CatalogContext":
        return cls(
            session=client.session,
            manga=MangaGateway(client),
            chapters=ChapterGateway(client),
            authors=AuthorGateway(client),
            groups=GroupGateway(client),
            covers=CoverGateway(client),
            tags=TagGateway(client),
            lists=ListGateway(client),
        )
