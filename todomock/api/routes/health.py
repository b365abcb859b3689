"""Health — liveness probe reporting collection sizes."""

from fastapi import APIRouter, Request, status

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check(request: Request):
    """Returns 200 while the process is up."""
    store = request.app.state.store
    return {
        "status": "healthy",
        "service": "todomock",
        "records": {"labels": len(store.labels), "todos": len(store.todos)},
    }
