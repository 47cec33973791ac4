"""Pytest configuration and shared fixtures for generic-api-client tests."""

import httpx
import pytest

from generic_api_client.testing import fake_client  # noqa: F401


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear client environment variables before each test.

    This prevents test pollution when testing settings resolution.
    """
    import os

    for key in list(os.environ.keys()):
        if key.startswith(("GENERIC_API_", "TEST_")):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def products_page():
    """Build a dummyjson-style products page body."""

    def build(skip: int, limit: int = 25, total: int = 100) -> dict:
        return {
            "products": [{"id": index + 1} for index in range(skip, min(skip + limit, total))],
            "total": total,
            "skip": skip,
            "limit": limit,
        }

    return build


@pytest.fixture
def echo_transport():
    """httpx MockTransport answering 200 with the request method and URL, recording what it saw."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"method": request.method, "url": str(request.url)})

    transport = httpx.MockTransport(handler)
    transport.seen = seen
    return transport
