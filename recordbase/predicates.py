"""
Multi-value predicate builder.

Turns a list of candidate values into a disjunction of comparisons, one
numbered placeholder per value, for use in ``WHERE`` clauses:

    >>> pred = build_in_predicate("status", ["new", "open"])
    >>> pred.sql.as_string(None)
    '("status" = %(param0)s) OR ("status" = %(param1)s)'
    >>> pred.params
    {'param0': 'new', 'param1': 'open'}
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, NamedTuple

from psycopg import sql

# Matches no row, whatever the column type or table contents.
NO_MATCH = sql.SQL("FALSE")


class InPredicate(NamedTuple):
    sql: sql.Composable
    params: Dict[str, Any]


def build_in_predicate(
    field_name: str,
    values: Iterable[Any],
    operator: str = "=",
    prefix: str = "param",
) -> InPredicate:
    """
    Build ``(field <operator> %(paramK)s) OR ...`` for every value.

    Parameters
    ----------
    field_name : str
        Column compared against each value; quoted as an identifier.
    values : iterable
        Candidate values, bound in input order to ``<prefix>0``, ``<prefix>1``...
    operator : str
        Comparison token inserted verbatim (``=``, ``LIKE``, ``ILIKE``...).
        It must come from code, never from user input.
    prefix : str
        Placeholder name prefix, to combine several predicates in one query.

    Returns
    -------
    InPredicate
        The SQL fragment and its parameter bindings. An empty ``values``
        yields a fragment matching no rows and no bindings.
    """
    column = sql.Identifier(field_name)
    comparator = sql.SQL(operator)
    blocks = []
    params: Dict[str, Any] = {}
    for index, value in enumerate(values):
        name = f"{prefix}{index}"
        blocks.append(
            sql.SQL("({} {} {})").format(column, comparator, sql.Placeholder(name))
        )
        params[name] = value

    if not blocks:
        return InPredicate(NO_MATCH, {})
    return InPredicate(sql.SQL(" OR ").join(blocks), params)


__all__ = ["InPredicate", "NO_MATCH", "build_in_predicate"]
