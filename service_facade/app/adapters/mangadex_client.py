"""
MangaDex API client for the facade.
"""

import time
from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import quote

import httpx

from shared.errors import (
    AuthenticationError,
    ExternalServiceError,
    NotFoundError,
    RateLimitError,
    UpstreamError,
)
from shared.logging import get_logger
from shared.metrics import MetricsCollector

from ..auth.session import ServiceSession, SessionCredential

QueryParams = Mapping[str, Union[str, List[str]]]


def path_segment(value: str) -> str:
    """Percent-encode an identifier so it stays a single URL path segment."""
    segment = quote(str(value), safe="")
    if segment in (".", ".."):
        # Dot segments would be collapsed by URL normalization
        segment = segment.replace(".", "%2E")
    return segment


class MangaDexClient:
    """Client for communicating with the MangaDex API and its auth realm."""

    def __init__(
        self,
        api_url: str,
        auth_url: str,
        session: ServiceSession,
        *,
        timeout: float = 10.0,
        user_agent: str = "mangadex-facade/1.0.0",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.auth_url = auth_url
        self.session = session
        self.timeout = timeout
        self.user_agent = user_agent
        self.metrics = metrics
        self._transport = transport
        self.logger = get_logger("facade.mangadex_client")

    def _client(self, **kwargs) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
            headers={"User-Agent": self.user_agent},
            **kwargs
        )

    async def login_personal(
        self,
        client_id: str,
        client_secret: str,
        username: str,
        password: str,
    ) -> SessionCredential:
        """Password-grant login for a personal API client."""
        form = {
            "grant_type": "password",
            "username": username,
            "password": password,
            "client_id": client_id,
            "client_secret": client_secret,
        }
        try:
            async with self._client() as client:
                response = await client.post(self.auth_url, data=form)
        except httpx.HTTPError as exc:
            self.logger.error("MangaDex auth HTTP error", error=str(exc))
            raise ExternalServiceError("mangadex-auth", str(exc) or type(exc).__name__)

        payload = self._decode(response)
        if response.status_code != 200 or not isinstance(payload, dict) or "access_token" not in payload:
            description = None
            if isinstance(payload, dict):
                description = payload.get("error_description") or payload.get("error")
            raise AuthenticationError(
                description or f"Login rejected with status {response.status_code}",
                details={"status_code": response.status_code},
            )

        return SessionCredential.from_token_response(payload)

    async def get(self, path: str, params: Optional[QueryParams] = None, *, operation: Optional[str] = None) -> Dict[str, Any]:
        """GET an API document, raising facade errors on failure."""
        operation = operation or path
        start_time = time.time()
        outcome = "error"
        try:
            try:
                async with self._client(base_url=self.api_url) as client:
                    response = await client.get(
                        path,
                        params=dict(params) if params else None,
                        headers=self.session.authorization_header(),
                    )
            except httpx.HTTPError as exc:
                self.logger.error("MangaDex HTTP error", path=path, error=str(exc))
                raise ExternalServiceError("mangadex", str(exc) or type(exc).__name__, details={"path": path})

            self._raise_for_status(response, path)
            payload = self._decode(response)
            if not isinstance(payload, dict):
                raise ExternalServiceError("mangadex", "Malformed response body", details={"path": path})

            outcome = "success"
            self.logger.debug("MangaDex document retrieved", path=path)
            return payload
        finally:
            self._observe(operation, outcome, time.time() - start_time)

    def _raise_for_status(self, response: httpx.Response, path: str) -> None:
        status = response.status_code
        if status < 400:
            return

        payload = self._decode(response)
        messages = []
        if isinstance(payload, dict):
            for item in payload.get("errors") or []:
                if isinstance(item, dict):
                    text = item.get("detail") or item.get("title")
                    if text:
                        messages.append(str(text))
        message = "; ".join(messages) or f"Unexpected status {status}"
        details = {"status_code": status, "path": path}

        self.logger.info("MangaDex request rejected", path=path, status_code=status, error=message)
        if status == 404:
            raise NotFoundError(message, details=details)
        if status == 429:
            details["retry_after"] = response.headers.get("X-RateLimit-Retry-After")
            raise RateLimitError(message, details=details)
        raise UpstreamError(status, message, details=details)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    def _observe(self, operation: str, outcome: str, duration: float) -> None:
        if self.metrics is None:
            return
        self.metrics.increment_counter("upstream_requests_total", operation=operation, outcome=outcome)
        self.metrics.observe_histogram("upstream_request_duration_seconds", duration, operation=operation)
