"""
Session credential state shared by every upstream call.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AccountCredentials:
    """Personal-client login values for the single service account."""

    client_id: str = ""
    client_secret: str = field(default="", repr=False)
    username: str = ""
    password: str = field(default="", repr=False)

    @classmethod
    def from_config(cls, config: Any) -> "AccountCredentials":
        return cls(
            client_id=config.client_id,
            client_secret=config.client_secret,
            username=config.username,
            password=config.password,
        )


@dataclass(frozen=True)
class SessionCredential:
    """Opaque tokens issued by the upstream login operation."""

    access_token: str = field(repr=False)
    refresh_token: Optional[str] = field(default=None, repr=False)
    expires_at: Optional[float] = None

    @classmethod
    def from_token_response(cls, payload: Dict[str, Any], now: Optional[float] = None) -> "SessionCredential":
        issued_at = time.time() if now is None else now
        expires_in = payload.get("expires_in")
        return cls(
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token"),
            expires_at=issued_at + float(expires_in) if expires_in is not None else None,
        )

    def is_expired(self, now: Optional[float] = None) -> bool:
        if self.expires_at is None:
            return False
        return (time.time() if now is None else now) >= self.expires_at


class ServiceSession:
    """Process-wide holder of the one session credential.

    Written once by the bootstrapper and read by every gateway call. A
    credential refresh would need a lock here; nothing renews it today.
    """

    def __init__(self) -> None:
        self._credential: Optional[SessionCredential] = None
        self.authenticated: bool = False
        self.last_error: Optional[str] = None

    @property
    def credential(self) -> Optional[SessionCredential]:
        return self._credential

    def store(self, credential: SessionCredential) -> None:
        self._credential = credential
        self.authenticated = True
        self.last_error = None

    def mark_failed(self, message: str) -> None:
        self.authenticated = False
        self.last_error = message

    def authorization_header(self) -> Dict[str, str]:
        """Bearer header for outgoing calls, empty when not logged in."""
        if self._credential is None:
            return {}
        return {"Authorization": f"Bearer {self._credential.access_token}"}
