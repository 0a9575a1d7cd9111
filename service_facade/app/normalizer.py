"""
Response normalization for dispatched gateway calls.

Every dispatched route produces exactly one of two shapes:

- ``200`` with the gateway result as the whole JSON body
- ``500`` with ``{"error": <message>}``

No upstream failure is mapped to any other status.
"""

from typing import Any, Awaitable, Optional

from fastapi.encoders import jsonable_encoder
from starlette.responses import Response

from shared.base_service import PrettyJSONResponse
from shared.errors import ErrorResponse, error_message
from shared.logging import get_logger
from shared.metrics import MetricsCollector

logger = get_logger("facade.normalizer")


def success(result: Any) -> Response:
    return PrettyJSONResponse(status_code=200, content=jsonable_encoder(result))


def failure(exc: BaseException) -> Response:
    body = ErrorResponse(error=error_message(exc))
    return PrettyJSONResponse(status_code=500, content=body.model_dump())


async def normalize(
    outcome: Awaitable[Any],
    *,
    route: str = "",
    metrics: Optional[MetricsCollector] = None,
) -> Response:
    """Await a gateway call and shape its outcome into an HTTP response."""
    try:
        result = await outcome
    except Exception as exc:
        logger.warning("Gateway call failed", route=route, error=error_message(exc))
        if metrics is not None:
            metrics.record_error(type(exc).__name__)
        return failure(exc)
    return success(result)
