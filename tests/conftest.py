from __future__ import annotations

import httpx
import pytest

from k6cloud_client import new_client


@pytest.fixture
def make_client(monkeypatch):
    monkeypatch.delenv("K6CLOUD_HOST", raising=False)
    clients = []

    def _make(handler, *, token: str = "tok", version: str = "0.9.0", host: str = ""):
        client = new_client(token, host, version, transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()
