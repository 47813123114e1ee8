"""
Exception handlers mapping errors to JSON responses.

Every error response has the shape ``{"error": <message>, "code": <code>}``
so the storefront pages can show ``error`` directly.  Internal details
of unexpected failures are logged, never returned.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .exceptions import StorefrontError

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, code: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "code": code},
        headers=headers,
    )


def add_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI app."""

    @app.exception_handler(StorefrontError)
    async def storefront_exception_handler(request: Request, exc: StorefrontError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return _error(exc.status_code, exc.message, exc.code, headers)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Standard HTTP errors (unknown route, wrong method)."""
        return _error(exc.status_code, str(exc.detail), "HTTP_ERROR", getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Malformed request bodies and path parameters are client errors (400)."""
        errors = exc.errors()
        fields = sorted({str(err["loc"][-1]) for err in errors if err.get("loc")})
        message = "Invalid or missing fields: " + ", ".join(fields) if fields else "Invalid request"
        return _error(400, message, "VALIDATION_ERROR")

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return _error(500, "An internal error occurred. Please try again later.", "INTERNAL_ERROR")
