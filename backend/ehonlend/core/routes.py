"""Application routes."""

from __future__ import annotations

import structlog
from fastapi import APIRouter

from ehonlend.routes import books, general, search, text

logger = structlog.get_logger("ehonlend.routes")


def create_app_router() -> APIRouter:
    """Create and configure main application router.

    Returns:
        Configured APIRouter instance
    """
    router = APIRouter()

    router.include_router(general.router, tags=["general"])
    router.include_router(text.router, tags=["text"])
    router.include_router(search.router, tags=["search"])
    router.include_router(books.router, tags=["books"])
    logger.debug("Included API routers in app_router")

    return router
