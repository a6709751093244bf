"""
repositories/customer_repo.py
------------------------------
Data access layer for customer records.
All SQL queries related to the `customers` table live here.
"""

from typing import Iterable

from db.handle import DatabaseHandle
from models.customer import Customer
from utils.logger import get_logger

logger = get_logger(__name__)

NameTuple = tuple[str, str]

INSERT_SQL = "INSERT INTO customers (first_name, last_name) VALUES (%s, %s)"
SELECT_BY_FIRST_NAME_SQL = "SELECT id, first_name, last_name FROM customers WHERE first_name = %s"


class InvalidNameError(ValueError):
    """A full name that is not exactly 'First Last'."""


def split_full_name(full_name: str) -> NameTuple:
    """
    Split "First Last" on its single space.

    Raises:
        InvalidNameError: Unless the name is exactly two non-empty tokens.
    """
    parts = full_name.split(" ")
    if len(parts) != 2 or not all(parts):
        raise InvalidNameError(
            f"Expected 'First Last' (two names separated by one space), got {full_name!r}"
        )
    return parts[0], parts[1]


class CustomerRepository:
    """Repository for batch inserts and queries on the customers table."""

    def __init__(self, handle: DatabaseHandle):
        self.handle = handle

    # ── CREATE ────────────────────────────────────────────

    def insert_names(self, full_names: Iterable[str]) -> list[NameTuple]:
        """
        Insert one customer per full name, as a single batch.

        Every name is validated before anything is written, so a malformed
        entry leaves the table untouched.

        Args:
            full_names: Names in "First Last" form, inserted in order.

        Returns:
            The (first_name, last_name) tuples that were submitted.

        Raises:
            InvalidNameError: If any name is not exactly two tokens.
            StorageError: If the batch is rejected.
        """
        rows = [split_full_name(name) for name in full_names]
        for first_name, last_name in rows:
            logger.info(f"Inserting customer record for {first_name} {last_name}")
        self.handle.batch_insert(INSERT_SQL, rows)
        return rows

    # ── READ ──────────────────────────────────────────────

    def query(self, sql: str, param: str) -> list[Customer]:
        """
        Run a single-parameter query and map each row to a Customer.

        The query must select `id`, `first_name` and `last_name`.

        Raises:
            StorageError: If the query fails.
            MappingError: If a row lacks one of those columns or holds a null.
        """
        return self.handle.query(sql, (param,), Customer.from_row)

    def find_by_first_name(self, first_name: str) -> list[Customer]:
        """Fetch all customers with the given first name, in result-set order."""
        return self.query(SELECT_BY_FIRST_NAME_SQL, first_name)
