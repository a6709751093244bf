"""
db/errors.py
------------
Exceptions raised by the database layer.
"""


class StorageError(Exception):
    """A statement could not be executed (connection, permission, constraint)."""


class MappingError(Exception):
    """A result row is missing a column, holds a null, or holds the wrong type."""

    def __init__(self, column: str, message: str):
        super().__init__(f"Column '{column}': {message}")
        self.column = column
