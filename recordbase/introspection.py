"""
Field discovery for record types.

Two strategies produce the list of persisted fields of a record type:

- ``"instance"`` reads the type's static field table (its pydantic fields,
  in declaration order) and derives column names from attribute names.
- ``"schema"`` asks the storage service for the table's columns, derives
  attribute names from them, and checks the result against the field table.

Any divergence between table and declaration is reported as
``SchemaMismatchError`` the first time the fields are needed.
"""

from __future__ import annotations

from typing import Dict, Generic, List, Literal, Optional, Tuple, Type, TypeVar

from recordbase import statements
from recordbase.config import get_settings
from recordbase.domain.models import FieldDescriptor, Record
from recordbase.exceptions import InvalidArgumentError, SchemaMismatchError
from recordbase.infrastructure.abstract import StorageService
from recordbase.utils.logging import get_logger

log = get_logger(__name__)

R = TypeVar("R", bound=Record)

IntrospectionMode = Literal["instance", "schema"]
INTROSPECTION_MODES: Tuple[str, ...] = ("instance", "schema")

# Descriptor lists per (record type, mode). Written once per key and only read
# afterwards; the schema is assumed not to change while the process runs.
_FIELD_CACHE: Dict[Tuple[type, str], Tuple[FieldDescriptor, ...]] = {}


def clear_field_cache() -> None:
    _FIELD_CACHE.clear()


class SchemaIntrospector(Generic[R]):
    """
    Discovers the persisted fields of ``model`` and counts its rows.

    In ``"instance"`` mode the table is never consulted, so a declared
    attribute without a column only fails when a statement uses it. Call
    ``verify_schema`` to check the declaration against the table up front.

    Parameters
    ----------
    model : type[Record]
        Concrete record type.
    db : StorageService
        Storage service used for schema description and counting.
    mode : "instance" | "schema" | None
        Discovery strategy; defaults to ``settings.introspection_mode``.
    """

    def __init__(
        self,
        model: Type[R],
        db: StorageService,
        mode: Optional[IntrospectionMode] = None,
    ) -> None:
        mode = mode or get_settings().introspection_mode
        if mode not in INTROSPECTION_MODES:
            raise InvalidArgumentError(
                f"Unknown introspection mode '{mode}'. Available: {', '.join(INTROSPECTION_MODES)}"
            )
        self.model = model
        self.db = db
        self.mode = mode

    @property
    def table(self) -> str:
        return self.model.table_name()

    def get_fields(self, by_field_name: bool = False) -> List[FieldDescriptor]:
        """
        Persisted fields of the record type.

        Parameters
        ----------
        by_field_name : bool
            If True, sort by attribute name; otherwise keep schema order.
        """
        key = (self.model, self.mode)
        fields = _FIELD_CACHE.get(key)
        if fields is None:
            if self.mode == "schema":
                fields = self._schema_fields()
            else:
                fields = self._declared_fields()
            _FIELD_CACHE[key] = fields

        if by_field_name:
            return sorted(fields, key=lambda descriptor: descriptor.attribute)
        return list(fields)

    def _declared_fields(self) -> Tuple[FieldDescriptor, ...]:
        return tuple(
            FieldDescriptor.from_attribute(attribute, position)
            for position, attribute in enumerate(self.model.declared_attributes())
        )

    def verify_schema(self) -> None:
        """
        Compare the declared fields with the table's columns, in any mode.

        Raises
        ------
        SchemaMismatchError
            If a declared attribute has no column or a column has no attribute.
        """
        self._schema_fields()

    def _schema_fields(self) -> Tuple[FieldDescriptor, ...]:
        columns = self.db.describe_table(self.table)
        fields = tuple(
            FieldDescriptor.from_column(column, position) for position, column in enumerate(columns)
        )
        declared = set(self.model.declared_attributes())
        described = {descriptor.attribute for descriptor in fields}
        missing_columns = sorted(declared - described)
        missing_attributes = sorted(
            descriptor.column for descriptor in fields if descriptor.attribute not in declared
        )
        if missing_columns or missing_attributes:
            error = SchemaMismatchError(self.table, missing_columns, missing_attributes)
            log.error(
                str(error),
                extra={
                    "table": self.table,
                    "model": self.model.__name__,
                    "missing_columns": missing_columns,
                    "missing_attributes": missing_attributes,
                },
            )
            raise error
        log.debug(
            "Fields described from schema",
            extra={"table": self.table, "columns": len(fields)},
        )
        return fields

    def count_records(self) -> int:
        rows = self.db.execute(statements.count(self.table))
        return int(rows[0][statements.COUNT_ALIAS])


__all__ = [
    "INTROSPECTION_MODES",
    "IntrospectionMode",
    "SchemaIntrospector",
    "clear_field_cache",
]
