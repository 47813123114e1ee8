"""
Pydantic models for orders.

Request models accept the camelCase names used by the storefront
pages and also the snake_case field names, so Python callers can build
them directly.  Reads mirror the ``orders`` table plus the joined
display columns.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import SQLITE_INT_MAX, SQLITE_INT_MIN


class OrderCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    telegram_id: Optional[str] = Field(None, alias="telegramId", examples=["@player"])
    service_id: Optional[int] = Field(None, alias="serviceId", examples=[2], ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)
    amount: Optional[int] = Field(None, examples=[400], ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)
    user_id: Optional[int] = Field(
        None, alias="userId", description="Omitted for guest orders", ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX
    )


class OrderCreated(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order_id: str = Field(..., alias="orderId", examples=["MARS-7KQ2M1XZP"])


class PaymentConfirm(BaseModel):
    """Body of ``/orders/confirm``.

    With ``utr`` it is the customer's payment submission.  With
    ``status`` it is an operator override and needs an admin token.
    """

    model_config = ConfigDict(populate_by_name=True)

    order_id: Optional[str] = Field(None, alias="orderId")
    utr: Optional[str] = Field(None, examples=["412345678901"])
    status: Optional[str] = Field(None, examples=["completed"])


class OrderPatch(BaseModel):
    """Partial update; fields left out keep their stored value."""

    model_config = ConfigDict(populate_by_name=True)

    telegram_id: Optional[str] = Field(None, alias="telegramId")
    amount: Optional[int] = Field(None, ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)
    utr: Optional[str] = None
    status: Optional[str] = None


class AdminOrderUpdate(OrderPatch):
    order_id: Optional[str] = Field(None, alias="orderId")


class OrderRead(BaseModel):
    id: str
    telegram_id: str
    service_id: int
    amount: int
    utr: Optional[str] = None
    status: str
    created_at: str
    user_id: Optional[int] = None
    service_name: Optional[str] = None


class AdminOrderRead(OrderRead):
    user_email: Optional[str] = None
