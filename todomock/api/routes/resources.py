"""Resources — serves /labels and /todos through the same Dispatcher the transport uses.

Invariants:
    - Mounted under the configured path prefix; the Dispatcher sees the prefix-stripped path
    - The Dispatcher gets the still-encoded path, so ids are percent-decoded once
    - Paths no template matches return 404 (there is no network to fall through to)
    - Domain errors propagate to the global handlers in error_handlers.py
"""

from urllib.parse import quote

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import JSONResponse

from todomock.services.dispatch import Dispatcher, InterceptedRequest

router = APIRouter(tags=["resources"])


def _encoded_resource_path(request: Request, resource_path: str) -> str:
    raw_path = request.scope.get("raw_path")
    if not raw_path:
        return "/" + quote(resource_path)
    prefix = request.app.state.settings.path_prefix
    path = raw_path.decode("ascii").split("?", 1)[0]
    return path[len(prefix):] if path.startswith(prefix) else path


@router.api_route(
    "/{resource_path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
)
async def mock_resource(resource_path: str, request: Request):
    dispatcher: Dispatcher = request.app.state.dispatcher
    response = await dispatcher.dispatch(InterceptedRequest(
        method=request.method,
        path=_encoded_resource_path(request, resource_path),
        body=await request.body(),
        headers=dict(request.headers),
    ))
    if response is None:
        raise HTTPException(
            status.HTTP_404_NOT_FOUND, detail=f"No resource at /{resource_path}",
        )
    return JSONResponse(status_code=response.status, content=response.to_body())
