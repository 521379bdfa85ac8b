"""Application entry point for Ehonlend."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from ehonlend.core.config import get_settings
from ehonlend.core.logging import setup_logging
from ehonlend.core.matching import get_scoring_config
from ehonlend.core.metrics import setup_metrics
from ehonlend.core.middleware import TracingMiddleware
from ehonlend.core.routes import create_app_router

logger = structlog.get_logger("ehonlend.app")

APP_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    settings = get_settings()
    logger.info(
        "Starting Ehonlend application",
        version=APP_VERSION,
        env=settings.env,
        host=settings.host_bind_address,
        port=settings.host_port,
    )

    # Load the scoring section once so a broken settings file is reported at startup
    scoring = get_scoring_config()
    logger.info(
        "Scoring configuration loaded",
        title_weight=scoring.title_weight,
        author_weight=scoring.author_weight,
    )

    yield

    logger.info("Shutting down Ehonlend application")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    # Setup logging first (use settings)
    setup_logging(
        debug=settings.is_debug,
        logs_dir=settings.logs_dir if settings.log_to_file else None,
        log_level=settings.log_level,
    )

    app = FastAPI(
        title="Ehonlend",
        description="Picture-book lending library: catalog search, ranking and kana sections",
        version=APP_VERSION,
        lifespan=lifespan,
    )

    # Add tracing middleware (before other middleware to capture all requests)
    app.add_middleware(TracingMiddleware)

    # Setup metrics (before routes to instrument all routes)
    setup_metrics(app, APP_VERSION)

    app.include_router(create_app_router())

    return app


def main() -> None:
    """Main entry point."""
    from ehonlend.core.config import reload_settings

    current_settings = reload_settings()

    app = create_app()

    import uvicorn

    logger.info(
        "Starting uvicorn server",
        host=current_settings.host_bind_address,
        port=current_settings.host_port,
    )

    uvicorn.run(
        app,
        host=current_settings.host_bind_address,
        port=current_settings.host_port,
        log_config=None,  # We use structlog
        reload=False,
    )


if __name__ == "__main__":
    main()
