"""
Exception hierarchy for recordbase.

Lookups that find nothing return ``None`` instead of raising. Errors coming
from the database driver (``psycopg.Error``) are never wrapped and reach the
caller unchanged.
"""

from __future__ import annotations

from typing import Iterable


class RecordBaseError(Exception):
    """Base class for errors raised by the mapping layer itself."""


class SchemaMismatchError(RecordBaseError):
    """
    The declared fields of a record type do not match its table.

    Attributes
    ----------
    table : str
        Physical table the record type maps to.
    missing_columns : tuple[str, ...]
        Declared attributes whose column is absent from the table.
    missing_attributes : tuple[str, ...]
        Table columns with no declared attribute on the record type.
    """

    def __init__(
        self,
        table: str,
        missing_columns: Iterable[str] = (),
        missing_attributes: Iterable[str] = (),
    ) -> None:
        self.table = table
        self.missing_columns = tuple(missing_columns)
        self.missing_attributes = tuple(missing_attributes)
        parts = []
        if self.missing_columns:
            parts.append(f"no column for attribute(s) {', '.join(self.missing_columns)}")
        if self.missing_attributes:
            parts.append(f"no attribute for column(s) {', '.join(self.missing_attributes)}")
        super().__init__(f"Schema mismatch on table '{table}': " + "; ".join(parts))


class InvalidArgumentError(RecordBaseError, ValueError):
    """An argument was rejected before any SQL was issued."""


__all__ = ["RecordBaseError", "SchemaMismatchError", "InvalidArgumentError"]
