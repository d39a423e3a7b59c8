"""
FastAPI application entry point.
Challenge: Mount routes, configure logging, dispose the engine on shutdown.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from accounts.config import get_settings
from accounts.api.v1.router import api_router
from accounts.db.session import engine

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Root logging for the process; uvicorn keeps its own handlers."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Shutdown: release pooled database connections."""
    logger.info("starting %s", app.title)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)
    app = FastAPI(
        title=settings.app_name,
        description="User accounts API: paged user listing and role counts over PostgreSQL.",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.include_router(api_router, prefix="/api")

    return app


app = create_app()
