"""Pytest configuration and shared fixtures for the customer repository tests"""

import sqlite3
from typing import Generator

import pytest

from config import CUSTOMER_NAMES
from db.connection import close_pool
from db.handle import DatabaseHandle
from db.init_db import create_customers_table
from repositories.customer_repo import CustomerRepository


# ==================== SQLite Fixtures ====================


@pytest.fixture
def sqlite_conn() -> Generator[sqlite3.Connection, None, None]:
    """In-memory SQLite connection, closed after the test"""
    conn = sqlite3.connect(":memory:")
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def handle(sqlite_conn: sqlite3.Connection) -> DatabaseHandle:
    """Handle that always borrows the same in-memory connection"""
    return DatabaseHandle(
        acquire=lambda: sqlite_conn,
        release=lambda conn: None,
        dialect="sqlite",
    )


@pytest.fixture
def repo(handle: DatabaseHandle) -> CustomerRepository:
    """Repository over a freshly created customers table"""
    create_customers_table(handle)
    return CustomerRepository(handle)


@pytest.fixture
def populated_repo(repo: CustomerRepository) -> CustomerRepository:
    """Repository with the four demo customers inserted"""
    repo.insert_names(CUSTOMER_NAMES)
    return repo


# ==================== Pool Cleanup ====================


@pytest.fixture(autouse=True)
def reset_pool() -> Generator[None, None, None]:
    """Make sure no test leaks an initialized pool into the next one"""
    yield
    close_pool()
