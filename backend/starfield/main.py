"""Starfield API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map StarfieldError → {"error": ...} JSON responses
    - CORS configured from settings (permissive by default for the dev client)
    - Store initialized and StarService attached to app.state on startup

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Static client build mounted AFTER API routes so /api/* and /health win;
      unknown paths fall back to index.html for client-side routing
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from starfield.api.error_handlers import register_error_handlers
from starfield.api.routes import health, stars
from starfield.config import get_settings
from starfield.infrastructure import database
from starfield.infrastructure.observability import setup_logging
from starfield.services.store_factory import build_star_service, build_star_store

logger = logging.getLogger(__name__)


class SPAStaticFiles(StaticFiles):
    """StaticFiles that serves index.html for paths with no matching file."""

    async def get_response(self, path: str, scope):
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as exc:
            if exc.status_code != 404:
                raise
            return await super().get_response("index.html", scope)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    store = build_star_store(settings)
    await store.initialize()
    app.state.star_service = build_star_service(settings, store)
    logger.info(
        f"Starfield API started on port {settings.port}",
        extra={"backend": settings.store_backend.value},
    )
    yield
    if database.db_manager is not None:
        await database.db_manager.dispose()
    logger.info("Starfield API shutting down")


def create_app() -> FastAPI:
    settings = get_settings()
    application = FastAPI(
        title="Starfield API", version="1.0.0", lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.include_router(health.router)
    application.include_router(stars.router)
    register_error_handlers(application)

    if os.path.isdir(settings.static_dir):
        application.mount(
            "/", SPAStaticFiles(directory=settings.static_dir, html=True),
            name="static",
        )
    return application


app = create_app()
