"""
Shared fixtures for facade service tests.
"""

import pytest
from fastapi.testclient import TestClient

from shared.config import ServiceConfig
from shared.test_helpers import API_URL, AUTH_URL, FakeMangaDex
from service_facade.app.adapters import MangaDexClient
from service_facade.app.auth import ServiceSession
from service_facade.app.main import FacadeService


@pytest.fixture
def upstream():
    """Fake MangaDex answering for the service account reader/secret."""
    return FakeMangaDex(username="reader", password="secret")


@pytest.fixture
def config():
    return ServiceConfig(
        "facade",
        5000,
        mangadex_api_url=API_URL,
        mangadex_auth_url=AUTH_URL,
        client_id="personal-client",
        client_secret="client-secret",
        username="reader",
        password="secret",
    )


@pytest.fixture
def session():
    return ServiceSession()


@pytest.fixture
def mangadex_client(upstream, session):
    return MangaDexClient(API_URL, AUTH_URL, session, transport=upstream.transport())


@pytest.fixture
def service(config, mangadex_client):
    return FacadeService(config, client=mangadex_client)


@pytest.fixture
def context(service):
    return service.context


@pytest.fixture
def client(service):
    return TestClient(service.app)
