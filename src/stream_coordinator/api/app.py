"""FastAPI and Socket.IO application factories."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import socketio
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stream_coordinator.api.admin import router as admin_router
from stream_coordinator.api.socket_events import register_stream_handlers
from stream_coordinator.api.streams import router as streams_router
from stream_coordinator.app_logging import configure_logging
from stream_coordinator.config import parse_allowed_origins
from stream_coordinator.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Stream coordinator starting",
            extra={"environment": app.state.container.settings.environment},
        )
        yield
        live = app.state.container.registry.list_streams()
        if live:
            logger.warning(
                "Shutting down with live streams",
                extra={"stream_ids": [stream.id for stream in live]},
            )

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    origins = parse_allowed_origins(container.settings.cors_allowed_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if origins == "*" else origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(streams_router)
    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def create_asgi_app(container: AppContainer) -> socketio.ASGIApp:
    """Create the combined Socket.IO and HTTP ASGI application."""
    register_stream_handlers(container.socket_server, container.stream_service)
    return socketio.ASGIApp(
        container.socket_server, other_asgi_app=create_app(container)
    )
