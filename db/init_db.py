"""
db/init_db.py
-------------
(Re)creates the `customers` table.
Run this module directly to reset the table on the configured database:
    python -m db.init_db
"""

from db.handle import DatabaseHandle
from utils.logger import get_logger

logger = get_logger(__name__)

DROP_SQL = "DROP TABLE IF EXISTS customers"

CREATE_SQL = {
    "postgresql": """
        CREATE TABLE customers (
            id              BIGSERIAL PRIMARY KEY,
            first_name      VARCHAR(255) NOT NULL,
            last_name       VARCHAR(255) NOT NULL
        )
    """,
    "sqlite": """
        CREATE TABLE customers (
            id              INTEGER PRIMARY KEY AUTOINCREMENT,
            first_name      VARCHAR(255) NOT NULL,
            last_name       VARCHAR(255) NOT NULL
        )
    """,
}


def create_customers_table(handle: DatabaseHandle) -> None:
    """
    Drop the customers table if it exists, then create it empty.
    Any existing rows are lost.

    Raises:
        StorageError: If either statement fails.
    """
    handle.execute(DROP_SQL)
    handle.execute(CREATE_SQL[handle.dialect])
    logger.info("Customers table created.")


if __name__ == "__main__":
    from db.connection import init_pool, close_pool
    init_pool()
    try:
        create_customers_table(DatabaseHandle())
    finally:
        close_pool()
    print("✅ Customers table created successfully.")
