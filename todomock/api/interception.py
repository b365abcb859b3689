"""Request Interception — httpx transport that answers API calls from the in-memory Store.

Invariants:
    - Only requests to the configured host AND under the configured path prefix are intercepted
    - The Dispatcher gets the raw (still percent-encoded) path without the query string
    - Everything else (other hosts, other paths, unmatched templates) goes to the fallback transport
    - Dispatcher failures propagate out of handle_async_request; no envelope is built for them
    - Intercepted responses carry a JSON body and application/json content type

Design Decisions:
    - httpx.AsyncBaseTransport as the boundary: callers keep using a normal AsyncClient
"""

import logging

import httpx

from todomock.config import Settings, get_settings
from todomock.services.dispatch import Dispatcher, InterceptedRequest

logger = logging.getLogger(__name__)


class InterceptingTransport(httpx.AsyncBaseTransport):
    """Serve matching requests from a Dispatcher, forward the rest."""

    def __init__(
        self,
        dispatcher: Dispatcher,
        host: str = "api.todos.com",
        path_prefix: str = "/api/v1",
        fallback: httpx.AsyncBaseTransport | None = None,
    ):
        self.dispatcher = dispatcher
        self.host = host.lower()
        self.path_prefix = path_prefix.rstrip("/")
        self.fallback = fallback or httpx.AsyncHTTPTransport()

    def resource_path(self, request: httpx.Request) -> str | None:
        """Prefix-stripped path when the request targets the mock API, else None."""
        if request.url.host.lower() != self.host:
            return None
        # Still percent-encoded: the router decodes each param exactly once
        path = request.url.raw_path.decode("ascii").split("?", 1)[0]
        if not path.startswith(self.path_prefix):
            return None
        return path[len(self.path_prefix):]

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        path = self.resource_path(request)
        if path is not None:
            body = await request.aread()
            response = await self.dispatcher.dispatch(InterceptedRequest(
                method=request.method,
                path=path,
                body=body,
                headers=dict(request.headers),
            ))
            if response is not None:
                return httpx.Response(
                    response.status,
                    content=response.to_json_bytes(),
                    headers={"content-type": "application/json"},
                    request=request,
                )
        return await self.fallback.handle_async_request(request)

    async def aclose(self) -> None:
        await self.fallback.aclose()


def build_client(
    dispatcher: Dispatcher,
    settings: Settings | None = None,
    fallback: httpx.AsyncBaseTransport | None = None,
    **client_kwargs,
) -> httpx.AsyncClient:
    """AsyncClient whose requests to the mock API never leave the process."""
    settings = settings or get_settings()
    transport = InterceptingTransport(
        dispatcher,
        host=settings.intercept_host,
        path_prefix=settings.path_prefix,
        fallback=fallback,
    )
    logger.info(
        f"Intercepting https://{settings.intercept_host}{settings.path_prefix}",
    )
    return httpx.AsyncClient(transport=transport, **client_kwargs)
