"""Pytest fixtures and the pytest-backed failure reporter.

This module imports pytest, which is installed with the ``test`` extra
(``pip install generic-api-client[test]``).
"""

import pytest

from generic_api_client.client import Client
from generic_api_client.transport import FakeTransport


def pytest_failure_reporter(passed: bool, message: str) -> None:
    """Report failed client assertions through ``pytest.fail``."""
    if not passed:
        pytest.fail(message, pytrace=False)


@pytest.fixture
def fake_client() -> Client:
    """A client in fake mode whose assertions fail the running test."""
    return Client(FakeTransport(), failure_reporter=pytest_failure_reporter)
