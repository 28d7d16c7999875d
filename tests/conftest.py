"""Shared pytest fixtures for Audio Gateway tests.

This module contains common fixtures used across multiple test files:
test settings, a mocked downstream processor, a gateway bound to a real
httpx client, and a FastAPI test client.
"""

from collections.abc import AsyncIterator

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from app.config import GatewaySettings
from gateway_test_utils import DOWNSTREAM_URL
from services.gateway_api.main import app, override_settings
from services.gateway_api.service import ProcessingGateway


@pytest.fixture
def settings():
    """Gateway settings pointing at the mocked downstream processor."""
    return GatewaySettings(
        downstream_base_url=DOWNSTREAM_URL,
        request_timeout_seconds=5.0,
        health_timeout_seconds=1.0,
    )


@pytest.fixture
def downstream():
    """Mock the downstream processor for every httpx client.

    Unmatched requests fail; routes may be left uncalled.

    Yields:
        respx.MockRouter scoped to DOWNSTREAM_URL.
    """
    with respx.mock(base_url=DOWNSTREAM_URL, assert_all_called=False) as mock:
        yield mock


@pytest.fixture
async def gateway(settings, downstream) -> AsyncIterator[ProcessingGateway]:
    """Create a gateway with a real httpx client for respx mocking."""
    async with httpx.AsyncClient() as http_client:
        yield ProcessingGateway(http_client, settings)


@pytest.fixture
def client(settings, downstream):
    """Create a FastAPI test client wired to the test settings.

    Settings and dependency overrides are cleared after the test completes.

    Yields:
        tuple: (test_client, downstream mock router)
    """
    override_settings(settings)

    with TestClient(app) as test_client:
        yield test_client, downstream

    app.dependency_overrides.clear()
    override_settings(None)
