"""Pytest fixtures for all tests."""

import base64

import pytest
from httpx import AsyncClient, ASGITransport

from config import Config, IssuerConfig
from service.app import create_app

USERNAME = "admin"
PASSWORD = "admin123"


@pytest.fixture
def credentials(monkeypatch):
    """Pin basic auth credentials for the service."""
    monkeypatch.setenv("API_USERNAME", USERNAME)
    monkeypatch.setenv("API_PASSWORD", PASSWORD)
    return USERNAME, PASSWORD


@pytest.fixture
def auth_header(credentials):
    """Valid basic auth header."""
    token = base64.b64encode(f"{credentials[0]}:{credentials[1]}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


@pytest.fixture
def fixed_clock():
    """Clock pinned to 0x0123456789ABCDEF ns."""
    return lambda: 0x0123456789ABCDEF


@pytest.fixture
def zero_random():
    """Random source returning zero bytes."""
    return lambda n: bytes(n)


@pytest.fixture
def app(credentials):
    """Create test FastAPI app with a small batch limit."""
    return create_app(Config(issuer=IssuerConfig(default_country=0, max_batch=5)))


@pytest.fixture
async def client(app):
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
