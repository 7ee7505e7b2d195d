from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from group_chat.api.middleware.correlation_id import CorrelationIdMiddleware
from group_chat.api.middleware.timing import RequestTimingMiddleware
from group_chat.api.v1.routers import health, participants, uploads, ws
from group_chat.application.exceptions import ValidationError
from group_chat.config import settings
from group_chat.infrastructure.presence.registry import InMemoryPresenceRegistry
from group_chat.infrastructure.storage.local import LocalFileStore
from group_chat.infrastructure.ws.manager import ConnectionManager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    app.state.file_store.ensure_root()
    logger.info("Upload directory ready at %s", app.state.file_store.root)

    yield

    logger.info(
        "Shutting down with %d connections, %d participants",
        app.state.connections.connection_count,
        len(app.state.registry),
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )

    # Process-wide state, owned by this app instance.
    app.state.registry = InMemoryPresenceRegistry()
    app.state.connections = ConnectionManager()
    app.state.file_store = LocalFileStore(
        settings.UPLOAD_DIR,
        settings.UPLOAD_URL_PREFIX,
        settings.MAX_UPLOAD_BYTES,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(CorrelationIdMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(participants.router)
    app.include_router(uploads.router)
    app.include_router(ws.router)

    app.mount(
        settings.UPLOAD_URL_PREFIX,
        StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
        name="uploads",
    )

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _validation(_req: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": exc.detail})
