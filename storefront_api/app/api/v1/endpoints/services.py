"""Public catalog listing.  Writes live under ``/admin/services``."""

from typing import List

from fastapi import APIRouter

from storefront_api.app.schemas.catalog import ServiceRead
from storefront_api.app.services.catalog_service import CatalogService

router = APIRouter()


@router.get("", response_model=List[ServiceRead])
async def list_services() -> List[ServiceRead]:
    return await CatalogService.list_items()
