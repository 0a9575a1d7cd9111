"""
One-shot login of the service account at process start.
"""

from typing import Optional

from shared.errors import error_message
from shared.logging import get_logger
from shared.metrics import MetricsCollector

from .session import AccountCredentials, ServiceSession


class CredentialBootstrapper:
    """Acquire the session credential and record whether it worked.

    Failures are logged and recorded on the session but never raised: the
    service keeps serving and individual routes fail once the upstream
    rejects their unauthenticated calls.
    """

    def __init__(
        self,
        client,
        session: ServiceSession,
        credentials: AccountCredentials,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        self.client = client
        self.session = session
        self.credentials = credentials
        self.metrics = metrics
        self.logger = get_logger("facade.bootstrap")

    async def authenticate(self) -> bool:
        """Log in with the personal-client credentials; returns success."""
        try:
            credential = await self.client.login_personal(
                client_id=self.credentials.client_id,
                client_secret=self.credentials.client_secret,
                username=self.credentials.username,
                password=self.credentials.password,
            )
        except Exception as exc:
            message = error_message(exc)
            self.session.mark_failed(message)
            self._record("failure")
            self.logger.error("Authentication failed", error=message, username=self.credentials.username)
            return False

        self.session.store(credential)
        self._record("success")
        self.logger.info(
            "Authenticated with MangaDex",
            username=self.credentials.username,
            expires_at=credential.expires_at,
        )
        return True

    def _record(self, status: str) -> None:
        if self.metrics is not None:
            self.metrics.increment_counter("auth_attempts_total", status=status)
