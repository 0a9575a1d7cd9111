"""
Shared error handling for the MangaDex facade.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Normalized error body returned to facade clients."""

    error: str


class FacadeException(Exception):
    """Base exception for facade services."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class AuthenticationError(FacadeException):
    """The upstream login operation rejected the service account."""

    def __init__(self, message: str = "Authentication failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("AUTHENTICATION_ERROR", message, details)


class ExternalServiceError(FacadeException):
    """Transport-level failure talking to an external service."""

    def __init__(self, service: str, message: str = "External service error", details: Optional[Dict[str, Any]] = None):
        super().__init__("EXTERNAL_SERVICE_ERROR", f"{service}: {message}", details)


class UpstreamError(FacadeException):
    """The upstream API answered with an error status."""

    def __init__(self, status_code: int, message: str, details: Optional[Dict[str, Any]] = None,
                 code: str = "UPSTREAM_ERROR"):
        self.status_code = status_code
        super().__init__(code, message, details)


class NotFoundError(UpstreamError):
    """The requested upstream entity does not exist."""

    def __init__(self, message: str = "Not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(404, message, details, code="NOT_FOUND")


class RateLimitError(UpstreamError):
    """The upstream API rejected the call for exceeding its rate limit."""

    def __init__(self, message: str = "Rate limit exceeded", details: Optional[Dict[str, Any]] = None):
        super().__init__(429, message, details, code="RATE_LIMIT_ERROR")


class UnreadableChapterError(FacadeException):
    """Chapter pages are hosted on an external site and cannot be resolved."""

    def __init__(self, chapter_id: str, external_url: str):
        super().__init__(
            "UNREADABLE_CHAPTER",
            f"Chapter {chapter_id} is hosted externally at {external_url}",
            {"chapter_id": chapter_id, "external_url": external_url},
        )


def error_message(exc: BaseException) -> str:
    """Best-effort human readable description of an exception, never empty."""
    if isinstance(exc, FacadeException) and exc.message:
        return exc.message
    return str(exc) or exc.__class__.__name__
