"""
SQL templates used by repositories.

Every builder returns a ``psycopg.sql.Composed``: table and column names are
quoted identifiers taken from the record type's own schema, values are always
named placeholders bound at execution time.
"""

from __future__ import annotations

from psycopg import sql

from recordbase.domain.models import IDENTITY, TableParams

COUNT_ALIAS = "c_records"


def _table(table: str) -> sql.Identifier:
    return sql.Identifier(table)


def select_all(table: str) -> sql.Composed:
    return sql.SQL("SELECT * FROM {}").format(_table(table))


def select_by_column(table: str, column: str, param: str, limit_one: bool = False) -> sql.Composed:
    """``SELECT * FROM t WHERE col = %(param)s``, optionally capped at one row."""
    statement = sql.SQL("SELECT * FROM {} WHERE {} = {}").format(
        _table(table), sql.Identifier(column), sql.Placeholder(param)
    )
    if limit_one:
        statement += sql.SQL(" LIMIT 1")
    return statement


def select_where(table: str, predicate: sql.Composable) -> sql.Composed:
    return sql.SQL("SELECT * FROM {} WHERE {}").format(_table(table), predicate)


def select_page(table: str, order_column: str, descending: bool = False) -> sql.Composed:
    """Ordered window; binds ``limit`` and ``offset``."""
    return sql.SQL("SELECT * FROM {} ORDER BY {} {} LIMIT {} OFFSET {}").format(
        _table(table),
        sql.Identifier(order_column),
        sql.SQL("DESC" if descending else "ASC"),
        sql.Placeholder("limit"),
        sql.Placeholder("offset"),
    )


def count(table: str) -> sql.Composed:
    return sql.SQL("SELECT COUNT({}) AS {} FROM {}").format(
        sql.Identifier(IDENTITY), sql.Identifier(COUNT_ALIAS), _table(table)
    )


def insert(table: str, params: TableParams) -> sql.Composed:
    """Insert that hands back the assigned identity in the same round trip."""
    if not params.columns:
        statement = sql.SQL("INSERT INTO {} DEFAULT VALUES").format(_table(table))
    else:
        statement = sql.SQL("INSERT INTO {} ({}) VALUES ({})").format(
            _table(table),
            sql.SQL(", ").join(sql.Identifier(column) for column in params.columns),
            sql.SQL(", ").join(sql.Placeholder(name) for name in params.params),
        )
    return statement + sql.SQL(" RETURNING {}").format(sql.Identifier(IDENTITY))


def update(table: str, params: TableParams) -> sql.Composed:
    return sql.SQL("UPDATE {} SET {} WHERE {} = {}").format(
        _table(table),
        sql.SQL(", ").join(params.assignments),
        sql.Identifier(IDENTITY),
        sql.Placeholder(IDENTITY),
    )


def delete(table: str) -> sql.Composed:
    return sql.SQL("DELETE FROM {} WHERE {} = {}").format(
        _table(table), sql.Identifier(IDENTITY), sql.Placeholder(IDENTITY)
    )


__all__ = [
    "COUNT_ALIAS",
    "count",
    "delete",
    "insert",
    "select_all",
    "select_by_column",
    "select_page",
    "select_where",
    "update",
]
