"""
Domain helpers for the facade service.

Holds the injected catalog context and composed multi-call operations that
do not belong to adapters or the HTTP layer.
"""

from .context import CatalogContext
from .pages import ChapterPagesPipeline

__all__ = [
    "CatalogContext",
    "ChapterPagesPipeline",
]
