"""
db/connection.py
----------------
Bootstraps the PostgreSQL connection pool handed to repositories.
Uses psycopg2's ThreadedConnectionPool so one pool can be shared
by concurrent callers.
"""

from typing import Optional

import psycopg2
from psycopg2 import pool

from config import DATABASE_URL, DB_POOL_MAX, DB_POOL_MIN
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.ThreadedConnectionPool | None = None


def init_pool(
    dsn: Optional[str] = None,
    min_conn: int = DB_POOL_MIN,
    max_conn: int = DB_POOL_MAX,
) -> pool.ThreadedConnectionPool:
    """
    Initialize the database connection pool.

    Args:
        dsn: Connection string; defaults to ``config.DATABASE_URL``.
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.

    Returns:
        The initialized pool (the same one on repeated calls).

    Raises:
        RuntimeError: If no connection string is configured.
        psycopg2.OperationalError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return _pool
    dsn = dsn or DATABASE_URL
    if not dsn:
        raise RuntimeError("DATABASE_URL is not configured.")
    try:
        _pool = pool.ThreadedConnectionPool(min_conn, max_conn, dsn)
        logger.info("Database connection pool initialized successfully.")
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise
    return _pool


def get_pool() -> pool.ThreadedConnectionPool:
    """
    Return the initialized pool.

    Raises:
        RuntimeError: If the pool has not been initialized.
    """
    if _pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    return _pool


def close_pool() -> None:
    """Close all connections in the pool."""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("Database connection pool closed.")


def rollback_quietly(conn) -> None:
    """
    Roll back after a failed statement without masking the original error.

    A connection dropped by the server is already closed, so its rollback
    raises too; that secondary failure is logged and dropped so the caller
    can re-raise the error that actually happened.
    """
    try:
        conn.rollback()
    except psycopg2.Error as e:
        logger.warning(f"Rollback failed after error: {e}")
