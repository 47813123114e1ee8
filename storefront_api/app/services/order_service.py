"""
Order workflow: creation, payment submission and operator overrides.

An order is created ``pending`` with the amount the customer saw,
moves to ``processing`` once the customer submits a payment reference
(UTR) and is completed or failed by an operator.  The automated steps
follow the transition table in ``core.order_states``; operators use
``set_status`` or ``admin_patch_order``, which may move an order to
any state and are always written to the audit log.

Every operation runs in a single ``BEGIN IMMEDIATE`` transaction, so
the existence checks and the write that depends on them cannot be
interleaved with another writer.
"""

import logging
import secrets
import sqlite3
import string
from typing import Any, Dict, List, Optional

from storefront_api.app.core.config import settings
from storefront_api.app.core.db import get_connection, transaction
from storefront_api.app.core.exceptions import (
    InvalidReferenceError,
    InvalidTransitionError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from storefront_api.app.core.order_states import (
    OrderStatus,
    can_transition,
    parse_status,
)
from storefront_api.app.services.audit_service import AuditService

from ..schemas.order import AdminOrderRead, OrderCreate, OrderPatch, OrderRead

logger = logging.getLogger(__name__)

ORDER_ID_ALPHABET = string.ascii_uppercase + string.digits
ORDER_ID_LENGTH = 9
# 36**9 possible suffixes; a handful of attempts is plenty.
MAX_ID_ATTEMPTS = 5

_ORDER_COLUMNS = (
    "o.id, o.telegram_id, o.service_id, o.amount, o.utr, o.status, o.created_at, o.user_id, "
    "s.name AS service_name"
)


def _order_from_row(row: sqlite3.Row) -> OrderRead:
    return OrderRead(**{key: row[key] for key in OrderRead.model_fields})


def _admin_order_from_row(row: sqlite3.Row) -> AdminOrderRead:
    return AdminOrderRead(**{key: row[key] for key in AdminOrderRead.model_fields})


def _parse_status(value: str) -> OrderStatus:
    try:
        return parse_status(value)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc


class OrderService:
    """Order lifecycle operations."""

    @staticmethod
    def generate_order_id() -> str:
        """Return a fresh human-readable order token, e.g. ``MARS-7KQ2M1XZP``."""
        suffix = "".join(secrets.choice(ORDER_ID_ALPHABET) for _ in range(ORDER_ID_LENGTH))
        return f"{settings.order_id_prefix}-{suffix}"

    @classmethod
    async def create_order(cls, data: OrderCreate) -> str:
        """Create a ``pending`` order and return its id.

        The service (and the user, for non-guest orders) is looked up
        again here rather than trusted from the client.  The amount is
        stored as given and never recomputed from the catalog, so later
        price edits do not change existing orders.

        Raises ``ValidationError`` for missing or non-positive fields,
        ``InvalidReferenceError`` for an unknown service or user and
        ``PersistenceError`` when the store fails.
        """
        telegram_id = (data.telegram_id or "").strip()
        if not telegram_id or data.service_id is None or data.amount is None:
            raise ValidationError("Missing required fields: telegramId, serviceId, or amount")
        if data.amount <= 0:
            raise ValidationError("Amount must be a positive number")

        for attempt in range(1, MAX_ID_ATTEMPTS + 1):
            order_id = cls.generate_order_id()
            try:
                with transaction() as cursor:
                    service = cursor.execute(
                        "SELECT id FROM services WHERE id = ?", (data.service_id,)
                    ).fetchone()
                    if not service:
                        raise InvalidReferenceError("Invalid service selected. Please refresh the page.")
                    if data.user_id is not None:
                        user = cursor.execute(
                            "SELECT id FROM users WHERE id = ?", (data.user_id,)
                        ).fetchone()
                        if not user:
                            raise InvalidReferenceError(
                                "User session invalid. Please logout and login again."
                            )
                    cursor.execute(
                        """
                        INSERT INTO orders (id, telegram_id, service_id, amount, user_id, status)
                        VALUES (?, ?, ?, ?, ?, ?)
                        """,
                        (
                            order_id,
                            telegram_id,
                            data.service_id,
                            data.amount,
                            data.user_id,
                            OrderStatus.PENDING.value,
                        ),
                    )
            except sqlite3.IntegrityError as exc:
                if "orders.id" not in str(exc):
                    logger.exception("Order insert rejected by the store")
                    raise PersistenceError("Database error: order could not be saved") from exc
                logger.warning("Order id collision on %s (attempt %s)", order_id, attempt)
                continue
            except sqlite3.Error as exc:
                logger.exception("Order creation database error")
                raise PersistenceError("Database error: order could not be saved") from exc
            logger.info(
                "Created order %s: service=%s amount=%s user=%s",
                order_id, data.service_id, data.amount, data.user_id,
            )
            return order_id
        raise PersistenceError("Could not allocate a unique order id")

    @classmethod
    async def submit_payment(cls, order_id: Optional[str], utr: Optional[str]) -> None:
        """Record the customer's payment reference and move the order to ``processing``.

        Resubmitting while the order is still ``processing`` overwrites
        the reference; once the order is ``completed`` or ``failed`` the
        submission is refused with ``InvalidTransitionError``.
        """
        utr = (utr or "").strip()
        if not order_id:
            raise ValidationError("Order ID is required")
        if not utr:
            raise ValidationError("Please enter the UTR/Transaction ID")
        try:
            with transaction() as cursor:
                row = cursor.execute(
                    "SELECT status, utr FROM orders WHERE id = ?", (order_id,)
                ).fetchone()
                if not row:
                    raise NotFoundError(f"Order {order_id} not found")
                current = OrderStatus(row["status"])
                if not can_transition(current, OrderStatus.PROCESSING):
                    raise InvalidTransitionError(
                        f"Order {order_id} is already {current.value}"
                    )
                cursor.execute(
                    "UPDATE orders SET utr = ?, status = ? WHERE id = ?",
                    (utr, OrderStatus.PROCESSING.value, order_id),
                )
        except sqlite3.Error as exc:
            logger.exception("Payment submission for %s failed", order_id)
            raise PersistenceError("Failed to update order") from exc
        if current is OrderStatus.PROCESSING:
            logger.info("Payment reference for %s resubmitted (was %s)", order_id, row["utr"])
        else:
            logger.info("Payment reference submitted for %s", order_id)

    @classmethod
    async def set_status(cls, order_id: Optional[str], status: str, actor: Optional[str]) -> None:
        """Force an order into ``status``.

        Any state may be set from any state; only unknown status strings
        are rejected.  Each call is audited, noting whether the change
        would have been allowed by the automated flow.
        """
        if not order_id:
            raise ValidationError("Order ID is required")
        target = _parse_status(status)
        try:
            with transaction() as cursor:
                row = cursor.execute("SELECT status FROM orders WHERE id = ?", (order_id,)).fetchone()
                if not row:
                    raise NotFoundError(f"Order {order_id} not found")
                previous = row["status"]
                cursor.execute("UPDATE orders SET status = ? WHERE id = ?", (target.value, order_id))
                try:
                    forced = not can_transition(OrderStatus(previous), target)
                except ValueError:
                    forced = True
                AuditService.record(
                    cursor, actor, "force_status", "order", order_id,
                    {"from": previous, "to": target.value, "outside_flow": forced},
                )
        except sqlite3.Error as exc:
            logger.exception("Setting status of %s failed", order_id)
            raise PersistenceError("Failed to update order") from exc
        logger.info("Order %s status set %s -> %s by %s", order_id, previous, target.value, actor)

    @classmethod
    async def admin_patch_order(cls, order_id: Optional[str], patch: OrderPatch, actor: Optional[str]) -> None:
        """Merge the supplied fields into an order.

        ``telegram_id``, ``amount``, ``utr`` and ``status`` may be given;
        fields that are absent or ``None`` keep their stored value.
        """
        if not order_id:
            raise ValidationError("Order ID is required")
        changes: Dict[str, Any] = {}
        if patch.telegram_id is not None:
            telegram_id = patch.telegram_id.strip()
            if not telegram_id:
                raise ValidationError("Telegram ID cannot be empty")
            changes["telegram_id"] = telegram_id
        if patch.amount is not None:
            if patch.amount <= 0:
                raise ValidationError("Amount must be a positive number")
            changes["amount"] = patch.amount
        if patch.utr is not None:
            changes["utr"] = patch.utr.strip()
        if patch.status is not None:
            changes["status"] = _parse_status(patch.status).value

        try:
            with transaction() as cursor:
                row = cursor.execute(
                    "SELECT telegram_id, amount, utr, status FROM orders WHERE id = ?", (order_id,)
                ).fetchone()
                if not row:
                    raise NotFoundError(f"Order {order_id} not found")
                if changes:
                    assignments = ", ".join(f"{column} = ?" for column in changes)
                    cursor.execute(
                        f"UPDATE orders SET {assignments} WHERE id = ?",
                        (*changes.values(), order_id),
                    )
                    AuditService.record(
                        cursor, actor, "update", "order", order_id,
                        {"before": {column: row[column] for column in changes}, "after": changes},
                    )
        except sqlite3.Error as exc:
            logger.exception("Admin update of %s failed", order_id)
            raise PersistenceError("Failed to update order") from exc
        if changes:
            logger.info("Order %s updated by %s: %s", order_id, actor, sorted(changes))

    @classmethod
    async def delete_order(cls, order_id: str, actor: Optional[str]) -> None:
        try:
            with transaction() as cursor:
                row = cursor.execute(
                    "SELECT telegram_id, amount, status FROM orders WHERE id = ?", (order_id,)
                ).fetchone()
                if not row:
                    raise NotFoundError(f"Order {order_id} not found")
                cursor.execute("DELETE FROM orders WHERE id = ?", (order_id,))
                AuditService.record(cursor, actor, "delete", "order", order_id, dict(row))
        except sqlite3.Error as exc:
            logger.exception("Deleting order %s failed", order_id)
            raise PersistenceError("Failed to delete order") from exc
        logger.info("Order %s deleted by %s", order_id, actor)

    @classmethod
    async def get_order(cls, order_id: str) -> OrderRead:
        try:
            conn = get_connection()
            try:
                row = conn.execute(
                    f"""
                    SELECT {_ORDER_COLUMNS}
                    FROM orders o
                    LEFT JOIN services s ON o.service_id = s.id
                    WHERE o.id = ?
                    """,
                    (order_id,),
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            logger.exception("Fetching order %s failed", order_id)
            raise PersistenceError("Failed to fetch order") from exc
        if not row:
            raise NotFoundError(f"Order {order_id} not found")
        return _order_from_row(row)

    @classmethod
    async def list_orders_for_user(cls, user_id: int) -> List[OrderRead]:
        """Orders of one user, newest first, with the service name joined in.

        The name is ``None`` when the service row is missing.
        """
        try:
            conn = get_connection()
            try:
                rows = conn.execute(
                    f"""
                    SELECT {_ORDER_COLUMNS}
                    FROM orders o
                    LEFT JOIN services s ON o.service_id = s.id
                    WHERE o.user_id = ?
                    ORDER BY o.created_at DESC, o.rowid DESC
                    """,
                    (user_id,),
                ).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            logger.exception("Fetching orders of user %s failed", user_id)
            raise PersistenceError("Failed to fetch your orders") from exc
        return [_order_from_row(row) for row in rows]

    @classmethod
    async def list_all_orders(cls) -> List[AdminOrderRead]:
        """Every order, newest first, with service name and owner email (``None`` for guests)."""
        try:
            conn = get_connection()
            try:
                rows = conn.execute(
                    f"""
                    SELECT {_ORDER_COLUMNS}, u.email AS user_email
                    FROM orders o
                    LEFT JOIN services s ON o.service_id = s.id
                    LEFT JOIN users u ON o.user_id = u.id
                    ORDER BY o.created_at DESC, o.rowid DESC
                    """
                ).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            logger.exception("Admin fetch orders failed")
            raise PersistenceError("Failed to fetch admin orders") from exc
        return [_admin_order_from_row(row) for row in rows]
