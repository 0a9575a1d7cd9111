"""
Route table mapping inbound requests to gateway operations.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, Union

from fastapi import FastAPI, Request
from starlette.datastructures import QueryParams

from shared.metrics import MetricsCollector

from .domain.context import CatalogContext
from .domain.pages import ChapterPagesPipeline
from .normalizer import normalize

Query = Dict[str, Union[str, List[str]]]


def parse_query(query_params: QueryParams) -> Query:
    """Flatten a query string into a string-keyed mapping.

    Keys are kept verbatim. A repeated key, or one ending in ``[]``, maps to
    the list of its values in arrival order; any other key maps to its value.
    """
    parsed: Query = {}
    for key, value in query_params.multi_items():
        existing = parsed.get(key)
        if existing is None:
            parsed[key] = [value] if key.endswith("[]") else value
        elif isinstance(existing, list):
            existing.append(value)
        else:
            parsed[key] = [existing, value]
    return parsed


@dataclass(frozen=True)
class RequestContext:
    """Inputs extracted from one inbound request."""

    path_params: Dict[str, str]
    query: Query

    @classmethod
    def from_request(cls, request: Request) -> "RequestContext":
        return cls(
            path_params={key: str(value) for key, value in request.path_params.items()},
            query=parse_query(request.query_params),
        )


Handler = Callable[[CatalogContext, RequestContext], Awaitable[Any]]


@dataclass(frozen=True)
class Route:
    method: str
    path: str
    handler: Handler
    name: str


async def search_manga(ctx: CatalogContext, req: RequestContext) -> Any:
    return await ctx.manga.search(req.query)


async def get_manga(ctx: CatalogContext, req: RequestContext) -> Any:
    return await ctx.manga.get(req.path_params["id"])


async def get_manga_feed(ctx: CatalogContext, req: RequestContext) -> Any:
    return await ctx.manga.get_feed(req.path_params["id"], req.query)


async def get_chapter(ctx: CatalogContext, req: RequestContext) -> Any:
    return await ctx.chapters.get(req.path_params["id"])


async def get_chapter_pages(ctx: CatalogContext, req: RequestContext) -> Any:
    return await ChapterPagesPipeline(ctx.chapters).run(req.path_params["chapterId"])


async def get_author(ctx: CatalogContext, req: RequestContext) -> Any:
    return await ctx.authors.get(req.path_params["id"])


async def get_group(ctx: CatalogContext, req: RequestContext) -> Any:
    return await ctx.groups.get(req.path_params["id"])


async def search_covers(ctx: CatalogContext, req: RequestContext) -> Any:
    return await ctx.covers.search(req.query)


async def get_cover(ctx: CatalogContext, req: RequestContext) -> Any:
    return await ctx.covers.get(req.path_params["id"])


async def list_tags(ctx: CatalogContext, req: RequestContext) -> Any:
    return await ctx.tags.get_all_tags()


async def get_list(ctx: CatalogContext, req: RequestContext) -> Any:
    return await ctx.lists.get(req.path_params["id"])


GATEWAY_ROUTES: Tuple[Route, ...] = (
    Route("GET", "/manga", search_manga, "search_manga"),
    Route("GET", "/manga/{id}", get_manga, "get_manga"),
    Route("GET", "/manga/{id}/feed", get_manga_feed, "get_manga_feed"),
    Route("GET", "/chapter/{id}", get_chapter, "get_chapter"),
    Route("GET", "/at-home/server/{chapterId}", get_chapter_pages, "get_chapter_pages"),
    Route("GET", "/author/{id}", get_author, "get_author"),
    # TODO: confirm with product whether artists should stay an alias of authors
    Route("GET", "/artist/{id}", get_author, "get_artist"),
    Route("GET", "/group/{id}", get_group, "get_group"),
    Route("GET", "/cover", search_covers, "search_covers"),
    Route("GET", "/cover/{id}", get_cover, "get_cover"),
    Route("GET", "/tag", list_tags, "list_tags"),
    Route("GET", "/list/{id}", get_list, "get_list"),
)


def _endpoint(context: CatalogContext, route: Route, metrics: Optional[MetricsCollector]):
    async def endpoint(request: Request):
        req = RequestContext.from_request(request)
        return await normalize(route.handler(context, req), route=route.name, metrics=metrics)

    endpoint.__name__ = route.name
    return endpoint


def register_routes(
    app: FastAPI,
    context: CatalogContext,
    routes: Tuple[Route, ...] = GATEWAY_ROUTES,
    metrics: Optional[MetricsCollector] = None,
) -> None:
    """Attach every route in ``routes`` to ``app`` bound to ``context``."""
    for route in routes:
        app.add_api_route(
            route.path,
            _endpoint(context, route, metrics),
            methods=[route.method],
            name=route.name,
            tags=["catalog"],
        )
