"""todomock dev server — FastAPI application exposing the mock backend over real HTTP.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - One Store and one Dispatcher per app, kept on app.state
    - Global error handlers map TodoMockError → structured JSON responses

Design Decisions:
    - create_app() takes an optional Store so tests build isolated apps
    - Lifespan over @app.on_event
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from todomock.api.error_handlers import register_error_handlers
from todomock.api.routes import health, resources
from todomock.config import Settings, get_settings
from todomock.infrastructure.observability import setup_logging
from todomock.services.dispatch import Dispatcher
from todomock.services.store import Store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    logger.info(
        f"todomock API started with {len(app.state.store.todos)} todos",
    )
    yield
    logger.info("todomock API shutting down")


def create_app(store: Store | None = None, settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    store = store if store is not None else Store.from_settings(settings)

    app = FastAPI(title="todomock API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.dispatcher = Dispatcher(store)

    # Health before the catch-all resource route
    app.include_router(health.router, prefix=settings.path_prefix)
    app.include_router(resources.router, prefix=settings.path_prefix)

    register_error_handlers(app)
    return app


app = create_app()
