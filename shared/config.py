"""
Shared configuration management for the MangaDex facade.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Environment
    env: str = Field(default="local", validation_alias="FACADE_ENV")
    log_level: str = Field(default="info", validation_alias="FACADE_LOG_LEVEL")

    # Upstream catalog
    mangadex_api_url: str = Field(default="https://api.mangadex.org", validation_alias="MANGADEX_API_URL")
    mangadex_auth_url: str = Field(
        default="https://auth.mangadex.org/realms/mangadex/protocol/openid-connect/token",
        validation_alias="MANGADEX_AUTH_URL",
    )
    http_timeout: float = Field(default=10.0, validation_alias="MANGADEX_HTTP_TIMEOUT")
    user_agent: str = Field(default="mangadex-facade/1.0.0", validation_alias="MANGADEX_USER_AGENT")

    # Service account
    client_id: str = Field(default="", validation_alias="MFA_TEST_CLIENT_ID")
    client_secret: str = Field(default="", validation_alias="MFA_TEST_CLIENT_SECRET", repr=False)
    username: str = Field(default="", validation_alias="MFA_TEST_USERNAME")
    password: str = Field(default="", validation_alias="MFA_TEST_PASSWORD", repr=False)


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    port: int
    host: str = "0.0.0.0"

    def __init__(self, service_name: str, port: int, **kwargs):
        super().__init__(service_name=service_name, port=port, **kwargs)


def get_config(service_name: str, port: int) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, port=port)
