"""
Clinic Medicine Finder — Database Connection Module

Provides a thread-safe connection pool using psycopg2. Configuration
via environment variables with local-development defaults.

When the database is unavailable, the app falls back to the JSON
record store.

Usage:
    from . import db

    if db.init_pool():
        with db.get_conn() as conn:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute("SELECT count(*) FROM clinic_inventory")
                print(cur.fetchone()["count"])
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import psycopg2
from psycopg2 import pool, extras  # noqa: F401 — extras re-exported for callers

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

DB_CONFIG = {
    "host": os.environ.get("MEDFINDER_DB_HOST", "localhost"),
    "port": int(os.environ.get("MEDFINDER_DB_PORT", "5432")),
    "dbname": os.environ.get("MEDFINDER_DB_NAME", "medfinder"),
    "user": os.environ.get("MEDFINDER_DB_USER", "medfinder"),
    "password": os.environ.get("MEDFINDER_DB_PASSWORD", "medfinder_local_dev"),
    "connect_timeout": int(os.environ.get("MEDFINDER_DB_CONNECT_TIMEOUT", "5")),
}

SCHEMA_SQL = Path(__file__).resolve().parent / "sql" / "001_schema.sql"

_pool: pool.ThreadedConnectionPool | None = None


# ---------------------------------------------------------------------------
# Pool lifecycle
# ---------------------------------------------------------------------------


def init_pool(minconn: int = 1, maxconn: int = 10) -> bool:
    """
    Initialize the connection pool.

    Returns True if the database is reachable and the pool is ready.
    Returns False on any failure — the app should fall back to JSON mode.
    """
    global _pool
    try:
        _pool = pool.ThreadedConnectionPool(minconn, maxconn, **DB_CONFIG)
        conn = _pool.getconn()
        cur = conn.cursor()
        cur.execute("SELECT 1")
        cur.close()
        _pool.putconn(conn)
        logger.info(
            "Database pool initialized (%s@%s:%s/%s)",
            DB_CONFIG["user"],
            DB_CONFIG["host"],
            DB_CONFIG["port"],
            DB_CONFIG["dbname"],
        )
        return True
    except psycopg2.Error as e:
        logger.warning("Database unavailable, falling back to JSON: %s", e)
        if _pool is not None:
            try:
                _pool.closeall()
            except psycopg2.Error:
                logger.debug("Ignoring error while closing half-open pool", exc_info=True)
        _pool = None
        return False


def close_pool() -> None:
    """Close all pool connections. Called at app shutdown."""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("Database pool closed.")


def is_available() -> bool:
    """Check whether the database connection pool is active."""
    return _pool is not None


def ensure_schema() -> None:
    """Apply 001_schema.sql if the clinics table doesn't exist yet."""
    with get_conn() as conn:
        with conn.cursor() as cur:
            cur.execute(
                "SELECT EXISTS (SELECT FROM information_schema.tables WHERE table_name = 'clinics')"
            )
            if cur.fetchone()[0]:
                return
            cur.execute(SCHEMA_SQL.read_text())
    logger.info("Applied %s", SCHEMA_SQL.name)


# ---------------------------------------------------------------------------
# Connection context manager
# ---------------------------------------------------------------------------


class get_conn:
    """
    Context manager that checks out a connection from the pool.

    Commits on clean exit, rolls back on exception, always returns the
    connection to the pool.
    """

    def __enter__(self):
        if _pool is None:
            raise pool.PoolError("Database pool not initialized")
        self.pool = _pool
        self.conn = self.pool.getconn()
        return self.conn

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is not None:
                self.conn.rollback()
            else:
                self.conn.commit()
        finally:
            self.pool.putconn(self.conn)
        return False  # don't suppress exceptions
