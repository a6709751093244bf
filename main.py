"""
main.py
-------
Entry point for the customer repository demo.

Responsibilities:
    - Initialize the database connection pool.
    - Recreate the customers table and batch-insert the demo names.
    - Query customers by first name and log every record.
"""

import sys

from config import CUSTOMER_NAMES, QUERY_FIRST_NAME
from db.connection import init_pool, close_pool
from db.handle import DatabaseHandle
from db.init_db import create_customers_table
from models.customer import Customer
from repositories.customer_repo import CustomerRepository
from utils.logger import get_logger

logger = get_logger(__name__)


def run(handle: DatabaseHandle) -> list[Customer]:
    """
    Run the three demo steps against an open handle.

    Returns:
        The customers found by the first-name query.
    """
    logger.info("Creating tables")
    create_customers_table(handle)

    repo = CustomerRepository(handle)
    repo.insert_names(CUSTOMER_NAMES)

    logger.info(f"Querying for customer records where first_name = '{QUERY_FIRST_NAME}':")
    customers = repo.find_by_first_name(QUERY_FIRST_NAME)
    for customer in customers:
        logger.info(str(customer))
    return customers


def main() -> None:
    """Initialize the pool, run the demo once and shut down."""
    try:
        init_pool()
        run(DatabaseHandle())
    except Exception:
        logger.exception("Customer demo failed.")
        sys.exit(1)
    finally:
        close_pool()


if __name__ == "__main__":
    main()
