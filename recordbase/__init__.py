"""
recordbase - generic relational-mapping base layer for PostgreSQL.

Concrete record types inherit from ``Record`` and get CRUD persistence and
simple querying through ``RecordRepository`` without per-type SQL:

- camelCase attribute <-> snake_case column name conversion
- field discovery from the declared fields or from the table schema
- create, read by id / column / page, count, update and delete
- multi-value predicates with numbered, bound placeholders
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from recordbase.config import Settings, get_settings
from recordbase.domain.models import FieldDescriptor, Record, TableParams
from recordbase.exceptions import InvalidArgumentError, RecordBaseError, SchemaMismatchError
from recordbase.introspection import SchemaIntrospector
from recordbase.naming import to_attribute_name, to_column_name
from recordbase.predicates import InPredicate, build_in_predicate
from recordbase.repository import RecordRepository
from recordbase.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Records
    "FieldDescriptor",
    "Record",
    "TableParams",
    # Mapping
    "RecordRepository",
    "SchemaIntrospector",
    "InPredicate",
    "build_in_predicate",
    "to_attribute_name",
    "to_column_name",
    # Errors
    "InvalidArgumentError",
    "RecordBaseError",
    "SchemaMismatchError",
    # Logging
    "configure_logging",
    "get_logger",
]
