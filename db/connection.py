"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool because the schedule job hands
connections to worker threads. psycopg2 raises PoolError as soon as the
pool is empty, so checkouts are gated by a semaphore: a caller waits for
a free connection instead of failing.
"""

import threading

import psycopg2
from psycopg2 import pool
from config import DATABASE_URL, DB_POOL_MIN, DB_POOL_MAX, DB_POOL_TIMEOUT_SECONDS
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.ThreadedConnectionPool | None = None
_slots: threading.BoundedSemaphore | None = None


def init_pool(min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX) -> None:
    """
    Initialize the database connection pool.

    Args:
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    global _pool, _slots
    if _pool is not None:
        return
    try:
        _pool = pool.ThreadedConnectionPool(min_conn, max_conn, DATABASE_URL)
        _slots = threading.BoundedSemaphore(max_conn)
        logger.info(f"Database connection pool initialized ({max_conn} connections max).")
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise


def get_connection(timeout: float = DB_POOL_TIMEOUT_SECONDS):
    """
    Get a connection from the pool, waiting for one if all are in use.

    Args:
        timeout: Seconds to wait for a free connection.

    Returns:
        A psycopg2 connection object.

    Raises:
        RuntimeError: If the pool has not been initialized.
        psycopg2.pool.PoolError: If no connection freed up in time.
    """
    if _pool is None or _slots is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    slots = _slots
    if not slots.acquire(timeout=timeout):
        raise pool.PoolError(f"no free database connection after {timeout:g}s")
    try:
        return _pool.getconn()
    except Exception:
        slots.release()
        raise


def release_connection(conn) -> None:
    """
    Return a connection back to the pool.

    Args:
        conn: The psycopg2 connection to release.
    """
    if _pool is not None and _slots is not None:
        _pool.putconn(conn)
        _slots.release()


def close_pool() -> None:
    """Close all connections in the pool."""
    global _pool, _slots
    if _pool is not None:
        _pool.closeall()
        _pool = None
        _slots = None
        logger.info("Database connection pool closed.")
