"""
psycopg-backed storage service.

``Database`` wraps one autocommit connection and implements the
``StorageService`` protocol: parameterized execution with fully materialized
results, the identity of the last insert, and table description through
``information_schema``. Driver errors propagate unchanged.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, List, Optional, Type, TypeVar

import psycopg
from psycopg.rows import dict_row

from recordbase.config import get_settings
from recordbase.infrastructure.abstract import Params, Statement
from recordbase.infrastructure.db_factory import apply_statement_timeout, get_sync_connection
from recordbase.utils.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")

_DESCRIBE_SQL = """
    SELECT column_name
    FROM information_schema.columns
    WHERE table_schema = current_schema() AND table_name = %(table)s
    ORDER BY ordinal_position;
"""


class Database:
    """
    Storage service over a single psycopg connection.

    The connection should be in autocommit mode; transaction handling is left
    to whoever owns the connection.
    """

    def __init__(self, conn: psycopg.Connection, statement_timeout_ms: Optional[int] = None) -> None:
        self._conn = conn
        timeout_ms = (
            statement_timeout_ms
            if statement_timeout_ms is not None
            else get_settings().db_statement_timeout_ms
        )
        with self._conn.cursor() as cur:
            apply_statement_timeout(cur, timeout_ms)

    @classmethod
    def connect(cls, dsn: Optional[str] = None) -> "Database":
        """Open a dedicated connection (with retry) and wrap it."""
        return cls(get_sync_connection(dsn))

    @property
    def connection(self) -> psycopg.Connection:
        return self._conn

    def execute(
        self,
        statement: Statement,
        params: Params = None,
        target_type: Optional[Type[T]] = None,
    ) -> List[Any]:
        with self._conn.cursor(row_factory=dict_row) as cur:
            if log.isEnabledFor(logging.DEBUG):
                log.debug(
                    "Executing statement",
                    extra={"sql": statement.as_string(self._conn), "params": list(params or {})},
                )
            cur.execute(statement, params)
            if cur.description is None:
                return []
            rows = cur.fetchall()

        if target_type is None:
            return rows
        return [target_type.from_row(row) for row in rows]  # type: ignore[attr-defined]

    def last_insert_id(self) -> int:
        with self._conn.cursor() as cur:
            cur.execute("SELECT lastval();")
            row = cur.fetchone()
        return int(row[0])

    def describe_table(self, table_name: str) -> List[str]:
        with self._conn.cursor() as cur:
            cur.execute(_DESCRIBE_SQL, {"table": table_name})
            return [row[0] for row in cur.fetchall()]

    def close(self) -> None:
        self._conn.close()


@lru_cache(maxsize=1)
def get_database() -> Database:
    """
    Process-wide database handle built from settings.

    Repositories take the storage service as an argument; this accessor is
    only a convenience for applications that want a single shared handle.
    """
    return Database.connect()


__all__ = ["Database", "get_database"]
