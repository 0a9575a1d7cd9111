"""
MangaDex facade service.
"""

import asyncio
from pathlib import Path
from typing import Optional

from fastapi.responses import FileResponse

from shared.base_service import BaseService
from shared.config import ServiceConfig, get_config
from service_facade.app.adapters import MangaDexClient
from service_facade.app.auth import AccountCredentials, CredentialBootstrapper, ServiceSession
from service_facade.app.domain import CatalogContext
from service_facade.app.routes import register_routes

SERVICE_NAME = "facade"
SERVICE_PORT = 5000
STATIC_DIR = Path(__file__).resolve().parent / "static"
RATE_LIMITS_MESSAGE = "Check X-RateLimit headers on any API response"


class FacadeService(BaseService):
    """HTTP facade over the MangaDex API using one service account."""

    def __init__(
        self,
        config: Optional[ServiceConfig] = None,
        *,
        client: Optional[MangaDexClient] = None,
        context: Optional[CatalogContext] = None,
        bootstrapper: Optional[CredentialBootstrapper] = None,
    ):
        super().__init__(SERVICE_NAME, SERVICE_PORT, config=config or get_config(SERVICE_NAME, SERVICE_PORT))

        if client is None:
            session = context.session if context is not None else ServiceSession()
            client = MangaDexClient(
                self.config.mangadex_api_url,
                self.config.mangadex_auth_url,
                session,
                timeout=self.config.http_timeout,
                user_agent=self.config.user_agent,
                metrics=self.metrics,
            )
        self.client = client
        self.context = context or CatalogContext.from_client(client)
        self.bootstrapper = bootstrapper or CredentialBootstrapper(
            client,
            self.context.session,
            AccountCredentials.from_config(self.config),
            metrics=self.metrics,
        )
        self._auth_task: Optional[asyncio.Task] = None

        @self.app.on_event("startup")
        async def _startup():
            # Runs alongside the server so startup never waits on the login
            self._auth_task = asyncio.create_task(self.bootstrapper.authenticate())

        @self.app.on_event("shutdown")
        async def _shutdown():
            if self._auth_task is not None and not self._auth_task.done():
                self._auth_task.cancel()

        self._setup_facade_routes()
        register_routes(self.app, self.context, metrics=self.metrics)

        # Expose service instance via app state for introspection/testing
        self.app.state.facade_service = self

    @property
    def session(self) -> ServiceSession:
        return self.context.session

    def _setup_facade_routes(self):
        """Set up routes that never reach the upstream API."""

        @self.app.get("/", include_in_schema=False)
        async def root():
            """Static API documentation page."""
            return FileResponse(STATIC_DIR / "index.html", media_type="text/html")

        @self.app.get("/rate-limits")
        async def rate_limits():
            """Where to find upstream rate limit information."""
            return {"message": RATE_LIMITS_MESSAGE}


def create_app(**kwargs):
    """Create FastAPI application."""
    service = FacadeService(**kwargs)
    return service.app


def main():
    service = FacadeService()
    service.run()


if __name__ == "__main__":
    main()
