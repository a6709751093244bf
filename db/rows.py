"""
db/rows.py
----------
Typed, by-name access to a single query result row.
Row mappers receive a ResultRow and pull the columns they need out of it.
"""

from typing import Any

from db.errors import MappingError


class ResultRow:
    """
    One row of a result set, addressed by column name.

    Every accessor fails fast: a missing column, a null, or a value of the
    wrong type raises MappingError instead of returning a default.
    """

    def __init__(self, values: dict[str, Any], row_num: int = 0):
        self._values = values
        self.row_num = row_num

    @classmethod
    def from_cursor(cls, description, row: tuple, row_num: int = 0) -> "ResultRow":
        """Build a row from a DB-API cursor description and a fetched tuple."""
        columns = [col[0] for col in description]
        return cls(dict(zip(columns, row)), row_num)

    @property
    def columns(self) -> list[str]:
        return list(self._values)

    def _require(self, column: str) -> Any:
        if column not in self._values:
            raise MappingError(column, f"missing from result row {self.row_num}")
        value = self._values[column]
        if value is None:
            raise MappingError(column, f"null in result row {self.row_num}")
        return value

    def get_int(self, column: str) -> int:
        """Return a non-null integer column."""
        value = self._require(column)
        # bool is an int subclass; a boolean column is not an id
        if isinstance(value, bool) or not isinstance(value, int):
            raise MappingError(column, f"expected integer, got {type(value).__name__}")
        return value

    def get_str(self, column: str) -> str:
        """Return a non-null text column."""
        value = self._require(column)
        if not isinstance(value, str):
            raise MappingError(column, f"expected text, got {type(value).__name__}")
        return value

    def __repr__(self) -> str:
        return f"ResultRow({self._values!r})"
