"""
Name conversion between record attributes and table columns.

Attributes use camelCase (``authorId``), columns use snake_case
(``author_id``). Both functions are pure and inverse to each other for names
made of lowercase alphanumeric segments.
"""

from __future__ import annotations

import re

_INTERIOR_UPPER = re.compile(r"(?<!^)([A-Z])")


def to_attribute_name(column_name: str) -> str:
    """Convert a snake_case column name to a camelCase attribute name."""
    if not column_name:
        return column_name
    head, *tail = column_name.split("_")
    joined = head + "".join(segment[:1].upper() + segment[1:] for segment in tail)
    return joined[:1].lower() + joined[1:]


def to_column_name(attribute_name: str) -> str:
    """Convert a camelCase attribute name to a snake_case column name."""
    return _INTERIOR_UPPER.sub(r"_\1", attribute_name).lower()


__all__ = ["to_attribute_name", "to_column_name"]
