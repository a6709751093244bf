"""
db/handle.py
------------
A small statement-level facade over the connection pool.

Every call borrows a connection, runs its statement(s) as one unit of work
(commit on success, rollback on failure) and gives the connection back.
Driver errors are logged and re-raised as StorageError.
"""

import sqlite3
from contextlib import closing
from typing import Callable, Iterable, Sequence, TypeVar

import psycopg2
from psycopg2 import extras

from db.connection import get_connection, get_dialect, release_connection
from db.errors import StorageError
from db.rows import ResultRow
from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

_DRIVER_ERRORS = {
    "postgresql": psycopg2.Error,
    "sqlite": sqlite3.Error,
}


class DatabaseHandle:
    """
    Executes SQL written with ``%s`` placeholders against the pool.

    Args:
        acquire: Returns a DB-API connection (default: get_connection).
        release: Takes the connection back (default: release_connection).
        dialect: 'postgresql' or 'sqlite' (default: the pool's dialect).
    """

    def __init__(
        self,
        acquire: Callable = get_connection,
        release: Callable = release_connection,
        dialect: str | None = None,
    ):
        self.dialect = dialect or get_dialect()
        if self.dialect not in _DRIVER_ERRORS:
            raise ValueError(f"Unsupported dialect: {self.dialect}")
        self._acquire = acquire
        self._release = release
        self._driver_error = _DRIVER_ERRORS[self.dialect]

    def _prepare(self, sql: str) -> str:
        """
        Rewrite placeholders to the driver's paramstyle.

        Every ``%s`` is rewritten, including one inside a quoted SQL
        literal; such literals must be passed as parameters instead.
        """
        if self.dialect == "sqlite":
            return sql.replace("%s", "?")
        return sql

    def _borrow(self):
        """Acquire a connection, raising StorageError if none can be had."""
        try:
            return self._acquire()
        except self._driver_error as e:
            logger.error(f"Failed to acquire connection: {e}")
            raise StorageError(f"Failed to acquire connection: {e}") from e

    def _rollback(self, conn) -> None:
        # A lost connection cannot roll back; the original error is raised by the caller.
        try:
            conn.rollback()
        except self._driver_error as e:
            logger.warning(f"Rollback failed: {e}")

    def execute(self, sql: str) -> None:
        """
        Execute a single statement without parameters (typically DDL).

        Raises:
            StorageError: If the driver rejects the statement.
        """
        conn = self._borrow()
        try:
            with closing(conn.cursor()) as cur:
                cur.execute(sql)
            conn.commit()
        except self._driver_error as e:
            self._rollback(conn)
            logger.error(f"Failed to execute statement: {e}")
            raise StorageError(f"Failed to execute statement: {e}") from e
        finally:
            self._release(conn)

    def batch_insert(self, sql: str, rows: Sequence[tuple]) -> int:
        """
        Submit all rows for one parameterized INSERT as a single batch.

        The batch is committed once; if any row fails the whole batch is
        rolled back.

        Args:
            sql: INSERT statement with ``%s`` placeholders.
            rows: Parameter tuples, inserted in order.

        Returns:
            Number of rows submitted.

        Raises:
            StorageError: If the driver rejects the batch.
        """
        rows = list(rows)
        if not rows:
            return 0
        conn = self._borrow()
        try:
            with closing(conn.cursor()) as cur:
                if self.dialect == "postgresql":
                    extras.execute_batch(cur, sql, rows)
                else:
                    cur.executemany(self._prepare(sql), rows)
            conn.commit()
            return len(rows)
        except self._driver_error as e:
            self._rollback(conn)
            logger.error(f"Failed to insert batch of {len(rows)} rows: {e}")
            raise StorageError(f"Failed to insert batch of {len(rows)} rows: {e}") from e
        finally:
            self._release(conn)

    def query(
        self, sql: str, params: Iterable, row_mapper: Callable[[ResultRow], T]
    ) -> list[T]:
        """
        Run a parameterized query and map every row.

        Args:
            sql: SELECT statement with ``%s`` placeholders.
            params: Values bound to the placeholders.
            row_mapper: Called once per row, in result-set order.

        Returns:
            The mapped rows.

        Raises:
            StorageError: If the driver rejects the query.
            MappingError: If row_mapper finds a missing or null column.
        """
        conn = self._borrow()
        try:
            with closing(conn.cursor()) as cur:
                cur.execute(self._prepare(sql), tuple(params))
                description = cur.description
                fetched = cur.fetchall()
        except self._driver_error as e:
            self._rollback(conn)
            logger.error(f"Failed to run query: {e}")
            raise StorageError(f"Failed to run query: {e}") from e
        finally:
            self._release(conn)

        return [
            row_mapper(ResultRow.from_cursor(description, row, row_num))
            for row_num, row in enumerate(fetched)
        ]
