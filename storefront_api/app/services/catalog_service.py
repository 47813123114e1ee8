"""
Business logic for catalog items ("services").

Items are listed in insertion order.  Deleting an item that orders
still reference is refused by SQLite's foreign key check; the service
translates that into ``ConflictError``.
"""

import logging
import sqlite3
from typing import List, Optional, Tuple

from storefront_api.app.core.db import get_connection, transaction
from storefront_api.app.core.exceptions import (
    ConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from storefront_api.app.services.audit_service import AuditService

from ..schemas.catalog import ServiceRead, ServiceWrite

logger = logging.getLogger(__name__)


def _validate(data: ServiceWrite) -> Tuple[str, int, str]:
    name = (data.name or "").strip()
    duration = (data.duration or "").strip()
    missing = [
        field
        for field, value in (("name", name), ("price", data.price), ("duration", duration))
        if not value and value != 0
    ]
    if missing:
        raise ValidationError("All fields are required: " + ", ".join(missing))
    if isinstance(data.price, bool) or data.price <= 0:
        raise ValidationError("Price must be a positive number")
    return name, data.price, duration


def _row_to_item(row: sqlite3.Row) -> ServiceRead:
    return ServiceRead(id=row["id"], name=row["name"], price=row["price"], duration=row["duration"])


class CatalogService:
    """Read access for the storefront and write access for operators."""

    @classmethod
    async def list_items(cls) -> List[ServiceRead]:
        try:
            conn = get_connection()
            try:
                rows = conn.execute(
                    "SELECT id, name, price, duration FROM services ORDER BY id ASC"
                ).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            logger.exception("Listing services failed")
            raise PersistenceError("Failed to fetch services") from exc
        return [_row_to_item(row) for row in rows]

    @classmethod
    async def get_item(cls, item_id: int) -> ServiceRead:
        try:
            conn = get_connection()
            try:
                row = conn.execute(
                    "SELECT id, name, price, duration FROM services WHERE id = ?", (item_id,)
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            logger.exception("Fetching service %s failed", item_id)
            raise PersistenceError("Failed to fetch service") from exc
        if not row:
            raise NotFoundError(f"Service {item_id} not found")
        return _row_to_item(row)

    @classmethod
    async def create_item(cls, data: ServiceWrite, actor: Optional[str] = None) -> ServiceRead:
        """Insert a new catalog item and return it."""
        name, price, duration = _validate(data)
        try:
            with transaction() as cursor:
                cursor.execute(
                    "INSERT INTO services (name, price, duration) VALUES (?, ?, ?)",
                    (name, price, duration),
                )
                item_id = cursor.lastrowid
                AuditService.record(
                    cursor, actor, "create", "service", item_id,
                    {"name": name, "price": price, "duration": duration},
                )
        except sqlite3.Error as exc:
            logger.exception("Creating service '%s' failed", name)
            raise PersistenceError("Failed to create service") from exc
        logger.info("Service %s created by %s: %s", item_id, actor, name)
        return ServiceRead(id=item_id, name=name, price=price, duration=duration)

    @classmethod
    async def update_item(cls, item_id: int, data: ServiceWrite, actor: Optional[str] = None) -> ServiceRead:
        """Replace name, price and duration of an existing item.

        Existing orders keep their own ``amount``; changing the price
        here never touches them.
        """
        name, price, duration = _validate(data)
        try:
            with transaction() as cursor:
                row = cursor.execute(
                    "SELECT id, name, price, duration FROM services WHERE id = ?", (item_id,)
                ).fetchone()
                if not row:
                    raise NotFoundError(f"Service {item_id} not found")
                cursor.execute(
                    "UPDATE services SET name = ?, price = ?, duration = ? WHERE id = ?",
                    (name, price, duration, item_id),
                )
                AuditService.record(
                    cursor, actor, "update", "service", item_id,
                    {
                        "before": {"name": row["name"], "price": row["price"], "duration": row["duration"]},
                        "after": {"name": name, "price": price, "duration": duration},
                    },
                )
        except sqlite3.Error as exc:
            logger.exception("Updating service %s failed", item_id)
            raise PersistenceError("Failed to update service") from exc
        logger.info("Service %s updated by %s", item_id, actor)
        return ServiceRead(id=item_id, name=name, price=price, duration=duration)

    @classmethod
    async def delete_item(cls, item_id: int, actor: Optional[str] = None) -> None:
        """Delete an item that no order references."""
        try:
            with transaction() as cursor:
                row = cursor.execute("SELECT name FROM services WHERE id = ?", (item_id,)).fetchone()
                if not row:
                    raise NotFoundError(f"Service {item_id} not found")
                cursor.execute("DELETE FROM services WHERE id = ?", (item_id,))
                AuditService.record(cursor, actor, "delete", "service", item_id, {"name": row["name"]})
        except sqlite3.IntegrityError as exc:
            raise ConflictError(
                "Failed to delete service. It is linked to existing orders."
            ) from exc
        except sqlite3.Error as exc:
            logger.exception("Deleting service %s failed", item_id)
            raise PersistenceError("Failed to delete service") from exc
        logger.info("Service %s deleted by %s", item_id, actor)
