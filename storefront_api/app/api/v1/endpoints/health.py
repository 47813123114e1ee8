"""Liveness endpoint reporting whether the database answers."""

import logging
import sqlite3

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from storefront_api.app.core.db import ping
from storefront_api.app.schemas.common import HealthResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health", response_model=HealthResponse)
async def health():
    try:
        ping()
    except sqlite3.Error:
        logger.exception("Database health check failed")
        return JSONResponse(status_code=500, content={"status": "error", "database": "disconnected"})
    return HealthResponse(status="ok", database="connected")
