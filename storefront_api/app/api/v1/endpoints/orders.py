"""
Order endpoints used by the storefront checkout.

Checkout is two requests: ``POST /orders`` creates a pending order and
``POST /orders/confirm`` with the payment reference (UTR) moves it to
processing.  ``/orders/confirm`` with a ``status`` instead is an
operator override and requires an admin bearer token.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status
from fastapi.security import HTTPAuthorizationCredentials

from storefront_api.app.core.security import require_admin, security
from storefront_api.app.schemas.common import SQLITE_INT_MAX, SQLITE_INT_MIN, SuccessResponse
from storefront_api.app.schemas.order import OrderCreate, OrderCreated, OrderRead, PaymentConfirm
from storefront_api.app.services.order_service import OrderService

router = APIRouter()


@router.post("/orders", response_model=OrderCreated, status_code=status.HTTP_201_CREATED)
async def create_order(order: OrderCreate) -> OrderCreated:
    """Create a pending order for a catalog item.

    ``userId`` is optional; guest orders are allowed.  Answers 400 when
    a field is missing or the service/user does not exist.
    """
    order_id = await OrderService.create_order(order)
    return OrderCreated(order_id=order_id)


@router.post("/orders/confirm", response_model=SuccessResponse)
async def confirm_order(
    body: PaymentConfirm,
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> SuccessResponse:
    if body.status:
        claims = require_admin(credentials)
        await OrderService.set_status(body.order_id, body.status, claims.get("sub"))
    else:
        await OrderService.submit_payment(body.order_id, body.utr)
    return SuccessResponse()


@router.get("/orders/{order_id}", response_model=OrderRead)
async def get_order(order_id: str) -> OrderRead:
    """Look up one order by its token (used by the checkout status page)."""
    return await OrderService.get_order(order_id)


@router.get("/user/orders/{user_id}", response_model=List[OrderRead])
async def list_user_orders(
    user_id: int = Path(..., ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX),
) -> List[OrderRead]:
    """Orders placed by a user, newest first.  A non-numeric id answers 400."""
    return await OrderService.list_orders_for_user(user_id)
