"""Dispatch — explicit routing from intercepted requests to Store operations.

Invariants:
    - Templates tried in registration order: /labels/:id? then /todos/:id?
    - Unmatched paths return None (fall through to the default network behaviour)
    - GET without id -> list (unfiltered); GET with id -> get_by_id
    - Any other verb -> parse JSON body, create (201) without id, update (200) with id
    - The path id wins over any id in the body on update
    - Response body is always {"data": <result-or-null>}
    - Failures are NOT caught here: they propagate to the boundary's failure path

Design Decisions:
    - Every template -> handler mapping is registered in __init__, nothing discovered
    - Status is decided by the presence of the id path parameter, never by the Store outcome
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping

from todomock.core.domain_types import HttpMethod
from todomock.core.errors import MalformedInputError
from todomock.core.routing import Router
from todomock.services.store import RecordCollection, Store

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InterceptedRequest:
    """Method, prefix-stripped path and raw body of an intercepted request."""
    method: str
    path: str
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def is_read(self) -> bool:
        return self.method.upper() == HttpMethod.GET.value

    def json(self, resource: str) -> Any:
        try:
            return json.loads(self.body or b"null")
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MalformedInputError(
                f"{resource} payload is not valid JSON: {e}", resource,
            ) from e


@dataclass(frozen=True)
class ResponseEnvelope:
    data: Any
    status: int = 200

    def to_body(self) -> dict:
        return {"data": self.data}

    def to_json_bytes(self) -> bytes:
        return json.dumps(self.to_body(), ensure_ascii=False).encode("utf-8")


Handler = Callable[
    [tuple[str | None, ...], InterceptedRequest], Awaitable[ResponseEnvelope],
]


def resource_handler(collection: RecordCollection) -> Handler:
    """Bind the `/<resource>/:id?` verbs to one collection."""

    async def handle(
        params: tuple[str | None, ...], request: InterceptedRequest,
    ) -> ResponseEnvelope:
        record_id = params[0] if params else None

        if request.is_read:
            if record_id:
                return ResponseEnvelope(await collection.get_by_id(record_id))
            return ResponseEnvelope(await collection.list())

        payload = request.json(collection.resource)
        if not isinstance(payload, Mapping):
            raise MalformedInputError(
                f"{collection.resource} payload must be a JSON object",
                collection.resource,
            )
        if record_id:
            return ResponseEnvelope(
                await collection.update({**payload, "id": record_id}), 200,
            )
        return ResponseEnvelope(await collection.create(payload), 201)

    return handle


class Dispatcher:
    """Routes intercepted requests -> handler. Explicit registration, no auto-discovery."""

    def __init__(self, store: Store):
        self.store = store
        self.router: Router[Handler] = Router()
        self.router.add("/labels/:id?", resource_handler(store.labels))
        self.router.add("/todos/:id?", resource_handler(store.todos))

    async def dispatch(self, request: InterceptedRequest) -> ResponseEnvelope | None:
        """Return the response envelope, or None when no template matches."""
        match = self.router.match(request.path)
        if match is None:
            logger.debug(
                f"No route for {request.method} {request.path}",
                extra={"method": request.method, "path": request.path},
            )
            return None

        response = await match.handler(match.params, request)
        logger.info(
            f"{request.method} {request.path} -> {response.status}",
            extra={
                "method": request.method,
                "path": request.path,
                "status": response.status,
            },
        )
        return response
