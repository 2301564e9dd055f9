"""Shared test fixtures."""

import time

import pytest

from vault_api_client import ApiClient, ApiClientConfiguration

from tests.mock_transport import ScriptedTransport

BASE_URL = "https://vault.example.com/api"
TOKEN = "test-token"


@pytest.fixture
def sleeps(monkeypatch):
    """Record backoff sleeps instead of sleeping."""
    recorded: list[float] = []
    monkeypatch.setattr(time, "sleep", recorded.append)
    return recorded


@pytest.fixture
def make_client(sleeps):
    """Build clients talking to a ScriptedTransport; closed after the test."""
    clients = []

    def factory(*outcomes, **config) -> tuple[ApiClient, ScriptedTransport]:
        transport = ScriptedTransport(*outcomes)
        client = ApiClient(BASE_URL, TOKEN, ApiClientConfiguration(transport=transport, **config))
        clients.append(client)
        return client, transport

    yield factory
    for client in clients:
        client.close()

