"""Main FastAPI application for the visit counter."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI

from .api.visits import router as visits_router
from .config import Settings, get_settings
from .counter.clock import Clock, SystemClock
from .database.connection import DatabaseManager
from .database.migrations import create_tables
from .middleware.headers import ResponseHeadersMiddleware
from .observability.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings: Settings = app.state.settings

    configure_logging(
        environment=settings.environment,
        log_level=settings.get_log_level(),
    )

    db = DatabaseManager.from_settings(settings)
    app.state.db = db
    try:
        await create_tables(db)
        logger.info("Store: %s", settings.database_path)
    except Exception as e:
        # The store retries table creation on its next call
        logger.error("Failed to prepare visit store at %s: %s", settings.database_path, e)

    logger.info("%s v%s started", settings.app_name, settings.app_version)
    logger.info("Environment: %s", settings.environment)

    yield

    logger.info("Shutting down %s...", settings.app_name)
    await db.close()
    logger.info("Database connections closed")


def create_app(settings: Optional[Settings] = None, clock: Optional[Clock] = None) -> FastAPI:
    """Create and configure FastAPI application.

    ``settings`` defaults to the environment-derived settings and ``clock``
    to the wall clock in the configured timezone.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Daily and monthly website visit counter",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.clock = clock or SystemClock.from_name(settings.timezone)

    app.add_middleware(ResponseHeadersMiddleware)

    @app.get(settings.health_path)
    async def health_check():
        """Liveness check.

        Registered ahead of the catch-all counter route, so a GET on this path
        returns service health rather than visit counts.
        """
        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    # Catch-all, so it goes last
    app.include_router(visits_router)

    return app


def run():
    """Console entry point."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "visit_counter.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info"
    )


if __name__ == "__main__":
    run()
