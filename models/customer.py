"""
models/customer.py
------------------
Domain model for customer records.
"""

from dataclasses import dataclass

from db.rows import ResultRow


@dataclass(frozen=True)
class Customer:
    """
    A customer as stored in the `customers` table.

    Attributes:
        id: Database primary key, assigned on insert.
        first_name: Given name.
        last_name: Family name.
    """
    id: int
    first_name: str
    last_name: str

    @classmethod
    def from_row(cls, row: ResultRow) -> "Customer":
        """Map a result row; raises MappingError if a column is missing or null."""
        return cls(
            id=row.get_int("id"),
            first_name=row.get_str("first_name"),
            last_name=row.get_str("last_name"),
        )

    def __str__(self) -> str:
        return f"Customer(id={self.id}, firstName={self.first_name}, lastName={self.last_name})"
