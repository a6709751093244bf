"""
db/connection.py
----------------
Manages the database connections handed out to the rest of the app.

PostgreSQL URLs go through psycopg2's SimpleConnectionPool.
``sqlite:///path`` URLs share a single sqlite3 connection, which is enough
for local runs without a database server.
"""

import sqlite3
from urllib.parse import urlparse

import psycopg2
from psycopg2 import pool

from config import DATABASE_URL, DB_POOL_MIN, DB_POOL_MAX
from utils.logger import get_logger

logger = get_logger(__name__)

_DIALECTS = {
    "postgresql": "postgresql",
    "postgres": "postgresql",
    "sqlite": "sqlite",
}

_pool: pool.SimpleConnectionPool | None = None
_sqlite_conn: sqlite3.Connection | None = None
_dialect: str | None = None


def detect_dialect(url: str) -> str:
    """
    Detect the SQL dialect from a connection URL.

    Raises:
        ValueError: If the URL scheme is not supported.
    """
    scheme = urlparse(url).scheme.split("+")[0]
    dialect = _DIALECTS.get(scheme)
    if dialect is None:
        raise ValueError(
            f"Unsupported database URL scheme: '{scheme}'. "
            f"Supported schemes: {', '.join(_DIALECTS)}"
        )
    return dialect


def _sqlite_path(url: str) -> str:
    # sqlite:///demo.db -> demo.db, sqlite:////tmp/x.db -> /tmp/x.db, sqlite:// -> :memory:
    path = urlparse(url).path
    if path.startswith("/"):
        path = path[1:]
    return path or ":memory:"


def init_pool(url: str | None = None, min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX) -> None:
    """
    Initialize the database connection pool.

    Args:
        url: Connection URL (default: DATABASE_URL from config).
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.

    Raises:
        psycopg2.OperationalError: If the PostgreSQL server is unreachable.
        ValueError: If the URL scheme is not supported.
    """
    global _pool, _sqlite_conn, _dialect
    if _dialect is not None:
        return
    url = url or DATABASE_URL
    dialect = detect_dialect(url)

    if dialect == "sqlite":
        _sqlite_conn = sqlite3.connect(_sqlite_path(url))
        _dialect = dialect
        logger.info("SQLite connection opened successfully.")
        return

    try:
        _pool = pool.SimpleConnectionPool(min_conn, max_conn, url)
        _dialect = dialect
        logger.info("Database connection pool initialized successfully.")
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise


def get_dialect() -> str:
    """
    Return the dialect of the initialized pool.

    Raises:
        RuntimeError: If the pool has not been initialized.
    """
    if _dialect is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    return _dialect


def get_connection():
    """
    Get a connection from the pool.

    Returns:
        A psycopg2 or sqlite3 connection object.

    Raises:
        RuntimeError: If the pool has not been initialized.
    """
    if _sqlite_conn is not None:
        return _sqlite_conn
    if _pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    return _pool.getconn()


def release_connection(conn) -> None:
    """
    Return a connection back to the pool.

    The shared SQLite connection stays open until close_pool().
    """
    if _pool is not None:
        _pool.putconn(conn)


def close_pool() -> None:
    """Close all connections in the pool."""
    global _pool, _sqlite_conn, _dialect
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("Database connection pool closed.")
    if _sqlite_conn is not None:
        _sqlite_conn.close()
        _sqlite_conn = None
        logger.info("SQLite connection closed.")
    _dialect = None
