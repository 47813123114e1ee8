"""
Top-level router for version 1 of the API.

The storefront pages address routes relative to ``/api`` (see
``settings.api_prefix``), e.g. ``/api/orders`` and
``/api/user/orders/{user_id}``, so most sub-routers declare their own
full paths instead of a prefix.
"""

from fastapi import APIRouter

from .endpoints import admin, auth, chat, health, orders, services

router = APIRouter()

router.include_router(health.router, tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(services.router, prefix="/services", tags=["services"])
router.include_router(orders.router, tags=["orders"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(chat.router, prefix="/chat", tags=["chat"])
