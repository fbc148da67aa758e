"""
Storage service contract consumed by the mapping layer.

Repositories only talk to the database through this protocol, so any object
with these three methods (the psycopg-backed ``Database`` or a test double)
can be passed in.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Protocol, Type, TypeVar, runtime_checkable

from psycopg import sql

T = TypeVar("T")

Statement = sql.Composable
Params = Optional[Mapping[str, Any]]


@runtime_checkable
class StorageService(Protocol):
    """
    Minimal interface a database handle must implement.
    """

    def execute(
        self,
        statement: Statement,
        params: Params = None,
        target_type: Optional[Type[T]] = None,
    ) -> List[Any]:
        """
        Run a parameterized statement and return the materialized result.

        Parameters
        ----------
        statement : sql.Composable
            Statement with quoted identifiers and named placeholders.
        params : Mapping[str, Any] | None
            Values bound to the placeholders.
        target_type : type | None
            When given, each row is turned into an instance through
            ``target_type.from_row``; otherwise rows are returned as dicts.

        Returns
        -------
        list
            All rows; empty for statements that return none.
        """
        ...

    def last_insert_id(self) -> int:
        """
        Identity assigned by the most recent insert on this connection.

        Session-wide, so it is only reliable when no other thread shares the
        connection; repositories read the identity from ``INSERT ... RETURNING``.
        """
        ...

    def describe_table(self, table_name: str) -> List[str]:
        """Column names of ``table_name`` in schema order."""
        ...


__all__ = ["Params", "Statement", "StorageService"]
