"""
Domain exceptions raised by the service layer.

Each exception carries a short human-readable ``message``, a stable
machine ``code`` and the HTTP ``status_code`` the API layer answers
with.  Handlers in ``core.errors`` turn them into JSON responses, so
services never need to know about FastAPI.
"""

from typing import Any, Optional


class StorefrontError(Exception):
    """Base exception for the storefront."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: Optional[Any] = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationError(StorefrontError):
    """Raised when input is missing or malformed."""

    def __init__(self, message: str = "Validation error", details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_ERROR", status_code=400, details=details)


class InvalidReferenceError(StorefrontError):
    """Raised when a request points at a service or user that does not exist."""

    def __init__(self, message: str = "Referenced record does not exist", details: Optional[Any] = None):
        super().__init__(message, code="INVALID_REFERENCE", status_code=400, details=details)


class NotFoundError(StorefrontError):
    """Raised when the addressed record does not exist."""

    def __init__(self, message: str = "Resource not found", details: Optional[Any] = None):
        super().__init__(message, code="NOT_FOUND", status_code=404, details=details)


class DuplicateError(StorefrontError):
    """Raised on a unique-constraint violation."""

    def __init__(self, message: str = "Record already exists", details: Optional[Any] = None):
        super().__init__(message, code="DUPLICATE", status_code=400, details=details)


class DuplicateEmailError(DuplicateError):
    def __init__(self, message: str = "Email already registered", details: Optional[Any] = None):
        super().__init__(message, details=details)


class ConflictError(StorefrontError):
    """Raised when the store refuses a change to protect related records."""

    def __init__(self, message: str = "Conflict", details: Optional[Any] = None):
        super().__init__(message, code="CONFLICT", status_code=409, details=details)


class InvalidTransitionError(ConflictError):
    """Raised when an order cannot move to the requested state."""


class PersistenceError(StorefrontError):
    """Raised when the store is unavailable or a write fails."""

    def __init__(self, message: str = "Database error", details: Optional[Any] = None):
        super().__init__(message, code="PERSISTENCE_ERROR", status_code=500, details=details)


class AuthError(StorefrontError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed", details: Optional[Any] = None):
        super().__init__(message, code="AUTHENTICATION_FAILED", status_code=401, details=details)


class InvalidCredentialsError(AuthError):
    def __init__(self, message: str = "Invalid email or password", details: Optional[Any] = None):
        super().__init__(message, details=details)


class ExternalServiceError(StorefrontError):
    """Raised when the hosted chat model cannot be reached or answers with an error."""

    def __init__(self, message: str = "External service error", details: Optional[Any] = None):
        super().__init__(message, code="EXTERNAL_SERVICE_ERROR", status_code=502, details=details)
