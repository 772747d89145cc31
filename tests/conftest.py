"""Test fixtures for the app client and a fake backend API."""

from __future__ import annotations

import asyncio
import json
import os
from collections.abc import Callable

# Configure the app *before* importing elitefitness modules; settings are read
# at import time.
os.environ.setdefault("BACKEND_URL", "http://backend.test")
os.environ.setdefault("DEBUG", "true")

import httpx  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from elitefitness.main import app  # noqa: E402
from elitefitness.security import CSRF_COOKIE_NAME, make_csrf_token  # noqa: E402
from elitefitness.security.rate_limit import limiter  # noqa: E402
from elitefitness.services.submissions import SubmissionGateway  # noqa: E402

# Disable rate limiting in tests to prevent cross-test 429 flakes
limiter.enabled = False

BACKEND_BASE = "http://backend.test"
CSRF_TOKEN = make_csrf_token("test-csrf-nonce")


class FakeBackend:
    """Records requests and answers them with ``responder``."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.clients: list[httpx.AsyncClient] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(201, json={"status": "ok"})
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    def respond_with(self, status_code: int, body: object | None = None) -> None:
        self.responder = lambda request: httpx.Response(status_code, json=body)

    def fail_with(self, exc: Exception) -> None:
        def raise_error(request: httpx.Request) -> httpx.Response:
            raise exc

        self.responder = raise_error

    @property
    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    @property
    def payloads(self) -> list[dict]:
        return [json.loads(request.content) for request in self.requests]

    def gateway(self) -> SubmissionGateway:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        self.clients.append(http_client)
        return SubmissionGateway(base_url=BACKEND_BASE, client=http_client)

    async def aclose(self) -> None:
        # Gateways never close an injected client
        for http_client in self.clients:
            await http_client.aclose()


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def fake_backend():
    backend = FakeBackend()
    yield backend
    # Private loop so the event loop pytest-asyncio manages is left alone
    loop = asyncio.new_event_loop()
    try:
        loop.run_until_complete(backend.aclose())
    finally:
        loop.close()
    assert all(http_client.is_closed for http_client in backend.clients)


@pytest.fixture
def backend(client, fake_backend):
    """Route the app's form submissions to ``fake_backend``."""
    previous = app.state.gateway
    app.state.gateway = fake_backend.gateway()
    yield fake_backend
    app.state.gateway = previous


@pytest.fixture
def visitor(client):
    """A fresh visitor: no page state yet, CSRF cookie in place."""
    client.cookies.clear()
    client.cookies.set(CSRF_COOKIE_NAME, CSRF_TOKEN)
    yield client
    client.cookies.clear()
