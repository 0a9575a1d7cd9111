"""
Chapter page resolution as a two-stage sequential pipeline.
"""

from typing import Any, Dict, List

from ..adapters.gateways import ChapterGateway


class ChapterPagesPipeline:
    """Look up a chapter, then resolve its page URLs.

    Stages run strictly in order and the second never starts when the first
    raises. Errors propagate unchanged so the caller's single error boundary
    handles a failure at either stage the same way.
    """

    def __init__(self, chapters: ChapterGateway) -> None:
        self.chapters = chapters
        self.stages = (self._fetch_chapter, self._resolve_pages)

    async def run(self, chapter_id: str) -> Dict[str, List[str]]:
        value: Any = chapter_id
        for stage in self.stages:
            value = await stage(value)
        return {"pages": value}

    async def _fetch_chapter(self, chapter_id: str) -> Dict[str, Any]:
        return await self.chapters.get(chapter_id)

    async def _resolve_pages(self, chapter: Dict[str, Any]) -> List[str]:
        return await self.chapters.get_readable_pages(chapter)
