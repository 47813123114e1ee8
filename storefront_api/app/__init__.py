"""
Application package initializer.

The storefront backend is split by concern: ``core`` (settings,
database, security, errors), ``schemas`` (request/response models),
``services`` (business rules) and ``api`` (versioned routers).
"""

from .main import app  # noqa: F401
