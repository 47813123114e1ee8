"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), running one atomic unit of work
(``transaction``), applying migrations on application start
(``init_db``) and a liveness probe used by the health endpoint.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.  A
migration is either an SQL script or a callable receiving a cursor,
for steps that must inspect the existing schema first.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, List, Tuple, Union

from .config import settings

logger = logging.getLogger(__name__)

Migration = Union[str, Callable[[sqlite3.Cursor], None]]

DEFAULT_CATALOG: List[Tuple[str, int, str]] = [
    ("1 Day Pack", 100, "1 Day"),
    ("7 Day Pack", 400, "7 Days"),
    ("15 Day Pack", 500, "15 Days"),
    ("30 Day Pack", 800, "30 Days"),
    ("Full Season", 1500, "Full Season"),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # storefront_api/
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  Foreign key enforcement is switched on for every connection
    because SQLite leaves it off by default; the catalog relies on it to
    refuse deleting services that orders still reference.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


@contextmanager
def transaction() -> Iterator[sqlite3.Cursor]:
    """Run a read-check-write sequence as one atomic transaction.

    The transaction is opened with ``BEGIN IMMEDIATE`` so the write lock
    is taken before the first read; two concurrent admin edits of the
    same order therefore serialise instead of losing an update.  The
    transaction is committed when the block exits normally and rolled
    back on any exception, which is then re-raised.
    """
    conn = get_connection()
    try:
        conn.execute("BEGIN IMMEDIATE")
        yield conn.cursor()
        conn.commit()
    except BaseException:
        conn.rollback()
        raise
    finally:
        conn.close()


def ping() -> None:
    """Execute a trivial query.  Raises ``sqlite3.Error`` if the store is unusable."""
    conn = get_connection()
    try:
        conn.execute("SELECT 1").fetchone()
    finally:
        conn.close()


def _add_order_user_id(cursor: sqlite3.Cursor) -> None:
    # Databases created by the first release already carry the column.
    columns = {row["name"] for row in cursor.execute("PRAGMA table_info(orders)").fetchall()}
    if "user_id" not in columns:
        logger.info("Adding user_id column to orders table")
        cursor.execute("ALTER TABLE orders ADD COLUMN user_id INTEGER REFERENCES users(id)")


MIGRATIONS: List[Tuple[int, Migration]] = [
    # Migration 1: base schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            email TEXT UNIQUE NOT NULL,
            password TEXT NOT NULL,
            created_at DATETIME DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS services (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            price INTEGER NOT NULL,
            duration TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS orders (
            id TEXT PRIMARY KEY,
            telegram_id TEXT NOT NULL,
            service_id INTEGER NOT NULL,
            amount INTEGER NOT NULL,
            utr TEXT,
            status TEXT DEFAULT 'pending',
            created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY (service_id) REFERENCES services(id)
        );
        """,
    ),
    # Migration 2: orders may belong to a registered user
    (2, _add_order_user_id),
    # Migration 3: audit trail for back-office actions and lookup indices
    (
        3,
        """
        CREATE TABLE IF NOT EXISTS audit_logs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            actor TEXT,
            action TEXT NOT NULL,
            object_type TEXT NOT NULL,
            object_id TEXT,
            details TEXT,
            timestamp TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE INDEX IF NOT EXISTS idx_orders_user_id ON orders(user_id);
        CREATE INDEX IF NOT EXISTS idx_orders_service_id ON orders(service_id);
        CREATE INDEX IF NOT EXISTS idx_orders_created_at ON orders(created_at);
        """,
    ),
]


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version and applies any newer entries of
    ``MIGRATIONS``.  When ``settings.seed_catalog`` is on and the
    catalog is empty, the default packs are inserted.
    """
    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, migration in MIGRATIONS:
            if version <= current_version:
                continue
            logger.info("Applying migration %s", version)
            if callable(migration):
                migration(cursor)
            else:
                cursor.executescript(migration)
            cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
            current_version = version

        if settings.seed_catalog:
            count = cursor.execute("SELECT COUNT(*) AS count FROM services").fetchone()["count"]
            if count == 0:
                logger.info("Seeding default services")
                cursor.executemany(
                    "INSERT INTO services (name, price, duration) VALUES (?, ?, ?)",
                    DEFAULT_CATALOG,
                )
