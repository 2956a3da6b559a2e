"""Shared pytest fixtures for Image Gateway tests."""

from __future__ import annotations

import json
import os
from collections.abc import Callable, Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from imagegate.api.main import create_app
from imagegate.core.config import GatewayConfig

BACKEND_URL = "https://backend.test/generate"


class FakeBackend:
    """Scriptable stand-in for the image-generation backend.

    Records every request it receives and answers with whatever the current
    ``handler`` returns.  The handler may be sync or async, and may raise to
    simulate transport failures.

    Attributes:
        requests: Every ``httpx.Request`` received, in order.
        handler: Callable producing the ``httpx.Response`` for a request.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: Callable = self.reply_json(
            {"image": "https://img.test/cat.png", "remaining": 4, "plan": "free"}
        )

    @staticmethod
    def reply_json(body, status_code: int = 200) -> Callable:
        """Build a handler that always answers with *body* as JSON."""

        def _handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, json=body)

        return _handler

    @property
    def last_payload(self) -> dict:
        """Decoded JSON body of the most recent request."""
        return json.loads(self.requests[-1].content)

    def transport(self) -> httpx.MockTransport:
        def _dispatch(request: httpx.Request):
            self.requests.append(request)
            return self.handler(request)

        return httpx.MockTransport(_dispatch)


@pytest.fixture
def fake_backend() -> FakeBackend:
    """Create a fake backend answering with a successful generation."""
    return FakeBackend()


@pytest.fixture
def test_config(monkeypatch) -> GatewayConfig:
    """Create a test configuration isolated from the environment.

    Returns:
        GatewayConfig pointing at the fake backend with a short timeout
    """
    for key in list(os.environ):
        if key.upper().startswith("IMAGEGATE_"):
            monkeypatch.delenv(key, raising=False)
    return GatewayConfig(
        _env_file=None,
        backend_url=BACKEND_URL,
        backend_timeout_seconds=0.5,
    )


@pytest.fixture
def make_client(fake_backend: FakeBackend, test_config: GatewayConfig):
    """Factory fixture yielding TestClients, optionally with config overrides.

    Usage::

        client = make_client(backend_error_status=500)
    """
    clients: list[TestClient] = []

    def _make(**overrides) -> TestClient:
        cfg = test_config.model_copy(update=overrides) if overrides else test_config
        app = create_app(cfg, transport=fake_backend.transport())
        client = TestClient(app)
        client.__enter__()  # Runs the lifespan (creates the backend client).
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def test_client(make_client) -> Generator[TestClient, None, None]:
    """TestClient for the default (simple mode) application."""
    yield make_client()


@pytest.fixture
def valid_body() -> dict:
    """A complete request body as sent by the frontend."""
    return {
        "prompt": "A goblin workshop at dusk",
        "userEmail": "user@example.com",
        "plan": "pro",
    }
