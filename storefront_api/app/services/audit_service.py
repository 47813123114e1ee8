"""
Audit service for recording and querying back-office actions.

Writes happen inside the caller's transaction (``record`` takes the
open cursor), so an admin change and its audit row are committed or
rolled back together.
"""

from __future__ import annotations

import json
import sqlite3
from typing import Any, Dict, List, Optional

from storefront_api.app.core.db import get_connection
from storefront_api.app.core.exceptions import PersistenceError


class AuditService:
    """Service class for writing and retrieving audit logs."""

    @staticmethod
    def record(
        cursor: sqlite3.Cursor,
        actor: Optional[str],
        action: str,
        object_type: str,
        object_id: Any = None,
        details: Optional[dict] = None,
    ) -> None:
        """Insert an audit record using the caller's cursor.

        Parameters
        ----------
        cursor : sqlite3.Cursor
            Cursor of the transaction performing the audited change.
        actor : Optional[str]
            Subject of the admin token, or ``None`` for system actions.
        action : str
            Short verb, e.g. ``"create"``, ``"update"``, ``"force_status"``.
        object_type : str
            ``"order"`` or ``"service"``.
        object_id : Any
            Primary key of the affected record; stored as text.
        details : Optional[dict]
            Extra structured data, stored as JSON.
        """
        cursor.execute(
            """
            INSERT INTO audit_logs (actor, action, object_type, object_id, details)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                actor,
                action,
                object_type,
                str(object_id) if object_id is not None else None,
                json.dumps(details) if details else None,
            ),
        )

    @classmethod
    async def list_logs(
        cls,
        object_type: Optional[str] = None,
        object_id: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        """Return audit records, newest first, optionally filtered."""
        where_clauses: List[str] = []
        params: List[Any] = []
        if object_type:
            where_clauses.append("object_type = ?")
            params.append(object_type)
        if object_id:
            where_clauses.append("object_id = ?")
            params.append(object_id)
        query = "SELECT id, actor, action, object_type, object_id, details, timestamp FROM audit_logs"
        if where_clauses:
            query += " WHERE " + " AND ".join(where_clauses)
        query += " ORDER BY id DESC LIMIT ? OFFSET ?"
        params.extend([limit, offset])
        try:
            conn = get_connection()
            try:
                rows = conn.execute(query, tuple(params)).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise PersistenceError("Failed to fetch audit log") from exc
        logs = []
        for row in rows:
            details = json.loads(row["details"]) if row["details"] else None
            logs.append(
                {
                    "id": row["id"],
                    "actor": row["actor"],
                    "action": row["action"],
                    "object_type": row["object_type"],
                    "object_id": row["object_id"],
                    "details": details,
                    "timestamp": row["timestamp"],
                }
            )
        return logs
