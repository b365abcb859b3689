"""API test fixtures — isolated FastAPI app and intercepting httpx client.

Invariants:
    - Every test gets its own Store; nothing leaks through the module-level app
    - Requests never leave the process: ASGITransport for the app, MockTransport as fallback

Design Decisions:
    - Fallback records what reached it, so tests can assert on pass-through
"""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from todomock.api.interception import InterceptingTransport
from todomock.main import create_app
from todomock.services.dispatch import Dispatcher


@pytest.fixture
async def client(frozen_store):
    """FastAPI test client over a fresh, unseeded Store."""
    app = create_app(store=frozen_store)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def passthrough():
    """Fallback transport answering 418 and logging every request it sees."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(418, json={"fallback": True})

    return seen, httpx.MockTransport(handler)


@pytest.fixture
async def api_client(frozen_store, passthrough):
    """AsyncClient whose api.todos.com/api/v1 calls are served by the Store."""
    _, fallback = passthrough
    transport = InterceptingTransport(Dispatcher(frozen_store), fallback=fallback)
    async with AsyncClient(transport=transport) as c:
        yield c
