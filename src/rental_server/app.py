"""Application factory and CLI entry point.

``create_app()`` builds the FastAPI application with:
  - Lifespan handler that builds the repositories and the upload issuer once
  - CORS middleware
  - Global exception handlers (ValueError → 400/404/409, KeyError → 404)
  - All API routes mounted under ``/api``
  - A ``/health`` endpoint for readiness probes

The ``cli()`` function is the ``rental-server`` console-script entry point.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from rental_db.engine import dispose_engine, get_engine
from rental_db.repository import QuestionRepository, ResponseRepository

from rental_server.config import ServerSettings, load_settings
from rental_server.errors import (
    generic_error_handler,
    key_error_handler,
    value_error_handler,
)
from rental_server.routes import register_routes
from rental_server.storage import UploadTargetIssuer

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Lifespan: runs once at startup/shutdown
# ------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Stash shared singletons on ``app.state``; dispose the DB pool on shutdown."""
    settings: ServerSettings = app.state.settings

    app.state.question_repo = QuestionRepository()
    app.state.response_repo = ResponseRepository()
    app.state.upload_issuer = UploadTargetIssuer(
        settings.object_upload_base_url,
        settings.object_upload_secret,
        ttl_seconds=settings.object_upload_ttl_seconds,
    )
    logger.info("Upload targets issued under %s", settings.object_upload_base_url)

    yield

    await dispose_engine()
    logger.info("Database engine disposed")


# ------------------------------------------------------------------
# Factory
# ------------------------------------------------------------------

def create_app(settings: ServerSettings | None = None) -> FastAPI:
    """Build and return the configured FastAPI application."""
    if settings is None:
        settings = load_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="Rental Needs-Assessment API",
        description="Question catalog, attachment uploads and needs-assessment submissions",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(KeyError, key_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # --- Health check (outside /api prefix) ---
    @app.get("/health")
    async def health() -> dict:
        """Readiness probe — verifies DB connectivity."""
        try:
            async with get_engine().connect() as conn:
                await conn.execute(text("SELECT 1"))
            return {"status": "ok"}
        except Exception as exc:
            logger.error("Health check failed: %s", exc)
            return {"status": "error", "detail": str(exc)}

    register_routes(app)

    return app


# Module-level ASGI export (for uvicorn rental_server.app:app)
app = create_app()


def cli() -> None:
    """Console-script entry point: ``rental-server``."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "rental_server.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )
