import asyncio

import pytest
from fastapi.testclient import TestClient

from storefront_api.app.core.config import settings
from storefront_api.app.core.db import init_db
from storefront_api.app.core.security import ADMIN_ROLE, create_access_token
from storefront_api.app.main import app
from storefront_api.app.schemas.catalog import ServiceWrite
from storefront_api.app.services.catalog_service import CatalogService

ADMIN_ID = "operator"
ADMIN_PASSWORD = "op-pass-123"


@pytest.fixture(autouse=True)
def db(tmp_path, monkeypatch):
    """Fresh, migrated database per test, with an empty catalog."""
    db_path = tmp_path / "storefront.db"
    monkeypatch.setattr(settings, "database_url", str(db_path))
    monkeypatch.setattr(settings, "seed_catalog", False)
    monkeypatch.setattr(settings, "secret_key", "test-secret")
    monkeypatch.setattr(settings, "admin_id", ADMIN_ID)
    monkeypatch.setattr(settings, "admin_password", ADMIN_PASSWORD)
    monkeypatch.setattr(settings, "admin_password_hash", "")
    init_db()
    return db_path


@pytest.fixture
def client(db):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers():
    token = create_access_token({"sub": ADMIN_ID, "role": ADMIN_ROLE})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seven_day_pack(db):
    return asyncio.run(
        CatalogService.create_item(ServiceWrite(name="7 Day Pack", price=400, duration="7 Days"))
    )
