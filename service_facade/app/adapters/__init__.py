"""
Adapters package for the facade service.

Contains the MangaDex HTTP client and the per-entity gateways built on it.
These adapters encapsulate:

- Base URLs, headers and request shapes
- The bearer credential taken from the shared service session
- Error handling that maps upstream failures to shared errors

Keep adapters thin and side-effect free outside of explicit calls.
"""

from .mangadex_client import MangaDexClient
from .gateways import (
    AuthorGateway,
    ChapterGateway,
    CoverGateway,
    GroupGateway,
    ListGateway,
    MangaGateway,
    TagGateway,
)

__all__ = [
    "AuthorGateway",
    "ChapterGateway",
    "CoverGateway",
    "GroupGateway",
    "ListGateway",
    "MangaDexClient",
    "MangaGateway",
    "TagGateway",
]
