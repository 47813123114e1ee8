"""
Back-office endpoints.

``/admin/login`` issues a signed, expiring token; every other route
requires it as ``Authorization: Bearer <token>`` and passes the token
subject to the services for the audit log.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from storefront_api.app.core.exceptions import ValidationError
from storefront_api.app.core.security import require_admin
from storefront_api.app.schemas.admin import AdminLogin, AdminToken, AuditLogRead
from storefront_api.app.schemas.catalog import ServiceCreated, ServiceWrite
from storefront_api.app.schemas.common import SQLITE_INT_MAX, SQLITE_INT_MIN, SuccessResponse
from storefront_api.app.schemas.order import AdminOrderRead, AdminOrderUpdate, OrderPatch
from storefront_api.app.services.admin_service import AdminService
from storefront_api.app.services.audit_service import AuditService
from storefront_api.app.services.catalog_service import CatalogService
from storefront_api.app.services.order_service import OrderService

router = APIRouter()


@router.post("/login", response_model=AdminToken)
async def admin_login(credentials: AdminLogin) -> AdminToken:
    return await AdminService.login(credentials)


@router.get("/orders", response_model=List[AdminOrderRead])
async def list_orders(admin: Dict[str, Any] = Depends(require_admin)) -> List[AdminOrderRead]:
    """All orders, newest first, with service name and customer email."""
    return await OrderService.list_all_orders()


@router.post("/orders/update", response_model=SuccessResponse)
async def update_order_by_body(
    body: AdminOrderUpdate,
    admin: Dict[str, Any] = Depends(require_admin),
) -> SuccessResponse:
    """Partial update addressed by ``orderId`` in the body.

    Same semantics as ``PUT /admin/orders/{order_id}``; kept for the
    admin page, which posts the whole edit form here.
    """
    if not body.order_id:
        raise ValidationError("Order ID is required")
    await OrderService.admin_patch_order(body.order_id, body, admin.get("sub"))
    return SuccessResponse()


@router.put("/orders/{order_id}", response_model=SuccessResponse)
async def update_order(
    order_id: str,
    patch: OrderPatch,
    admin: Dict[str, Any] = Depends(require_admin),
) -> SuccessResponse:
    """Merge ``telegramId``, ``amount``, ``utr`` and/or ``status`` into an order."""
    await OrderService.admin_patch_order(order_id, patch, admin.get("sub"))
    return SuccessResponse()


@router.delete("/orders/{order_id}", response_model=SuccessResponse)
async def delete_order(order_id: str, admin: Dict[str, Any] = Depends(require_admin)) -> SuccessResponse:
    await OrderService.delete_order(order_id, admin.get("sub"))
    return SuccessResponse()


@router.post("/services", response_model=ServiceCreated, status_code=status.HTTP_201_CREATED)
async def create_service(
    service: ServiceWrite,
    admin: Dict[str, Any] = Depends(require_admin),
) -> ServiceCreated:
    item = await CatalogService.create_item(service, admin.get("sub"))
    return ServiceCreated(id=item.id)


@router.put("/services/{service_id}", response_model=SuccessResponse)
async def update_service(
    service: ServiceWrite,
    service_id: int = Path(..., ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX),
    admin: Dict[str, Any] = Depends(require_admin),
) -> SuccessResponse:
    await CatalogService.update_item(service_id, service, admin.get("sub"))
    return SuccessResponse()


@router.delete("/services/{service_id}", response_model=SuccessResponse)
async def delete_service(
    service_id: int = Path(..., ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX),
    admin: Dict[str, Any] = Depends(require_admin),
) -> SuccessResponse:
    """Delete a catalog item.  Answers 409 while orders still reference it."""
    await CatalogService.delete_item(service_id, admin.get("sub"))
    return SuccessResponse()


@router.get("/audit", response_model=List[AuditLogRead])
async def list_audit(
    object_type: Optional[str] = Query(None),
    object_id: Optional[str] = Query(None),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    admin: Dict[str, Any] = Depends(require_admin),
) -> List[Dict[str, Any]]:
    """Audit trail of back-office changes, newest first."""
    return await AuditService.list_logs(object_type=object_type, object_id=object_id, limit=limit, offset=offset)
