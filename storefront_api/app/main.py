"""
Main entrypoint for the Storefront API.

``create_app`` configures logging, registers the error handlers and
mounts the versioned routers under ``settings.api_prefix``.  The
module-level ``app`` can be served directly, e.g.::

    uvicorn storefront_api.app.main:app --reload

Database migrations run once in the lifespan handler, before the first
request is accepted.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.errors import add_exception_handlers
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("%s %s ready", settings.project_name, settings.api_version)
    yield


def create_app() -> FastAPI:
    """Create and configure a FastAPI application."""
    # Logging first so that everything below may log.
    setup_logging()

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    add_exception_handlers(app)
    app.include_router(v1_router, prefix=settings.api_prefix)
    return app


app = create_app()
