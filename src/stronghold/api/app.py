"""FastAPI application factory for the Stronghold HTTP API."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stronghold.api import routes
from stronghold.api.runtime import ApiState
from stronghold.config import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(
    *,
    settings: Settings | None = None,
    state_factory: Callable[[], ApiState] | None = None,
) -> FastAPI:
    """Build the API.

    Sessions live in an ``ApiState`` created when the lifespan starts and
    dropped when it ends. ``state_factory`` defaults to a state bound to
    ``settings`` (or the cached process settings).
    """

    resolved = settings or get_settings()
    factory = state_factory or (lambda: ApiState(settings=resolved))

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state = factory()
        app.state.api_state = state
        logger.info("serving kingdoms with saves in %s", state.settings.data_dir)
        try:
            yield
        finally:
            await state.shutdown()

    app = FastAPI(title="Stronghold API", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=resolved.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )
    app.include_router(routes.router)
    return app
