"""
Generic CRUD and query helpers for record types.

Usage:
    from recordbase import Record, RecordRepository
    from recordbase.infrastructure import get_database

    class Person(Record):
        name: str
        birthYear: int

        @classmethod
        def table_name(cls) -> str:
            return "people"

    people = RecordRepository(Person, get_database())
    alice = Person(name="Alice", birthYear=1994)
    people.save(alice)          # INSERT, alice.id is now set
    people.get_by_id(alice.id)  # Person(...) or None
"""

from __future__ import annotations

from typing import Any, Generic, Iterable, List, Optional, Type, TypeVar

from recordbase import statements
from recordbase.domain.models import IDENTITY, FieldDescriptor, Record, TableParams
from recordbase.exceptions import InvalidArgumentError
from recordbase.infrastructure.abstract import StorageService
from recordbase.introspection import IntrospectionMode, SchemaIntrospector
from recordbase.predicates import build_in_predicate
from recordbase.utils.logging import get_logger

log = get_logger(__name__)

R = TypeVar("R", bound=Record)


def _require_non_negative_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidArgumentError(f"{name} must be a non-negative integer, got {value!r}")
    return value


class RecordRepository(Generic[R]):
    """
    CRUD surface for one record type.

    Lookups that match nothing return ``None`` (or an empty list). Errors
    raised by the storage service are not caught here.

    Parameters
    ----------
    model : type[Record]
        Concrete record type handled by this repository.
    db : StorageService
        Database handle every statement is delegated to.
    introspection : "instance" | "schema" | None
        Field discovery strategy; defaults to the configured one.
    """

    def __init__(
        self,
        model: Type[R],
        db: StorageService,
        introspection: Optional[IntrospectionMode] = None,
    ) -> None:
        self.model = model
        self.db = db
        self.introspector = SchemaIntrospector(model, db, mode=introspection)

    @property
    def table(self) -> str:
        return self.model.table_name()

    # Queries

    def get_fields(self, by_field_name: bool = False) -> List[FieldDescriptor]:
        return self.introspector.get_fields(by_field_name=by_field_name)

    def count_records(self) -> int:
        return self.introspector.count_records()

    def get_all_records(self) -> List[R]:
        return self.db.execute(statements.select_all(self.table), None, self.model)

    def get_by_id(self, id: int) -> Optional[R]:
        """
        Record whose identity equals ``id``.

        If the identity is not unique in storage, the first row returned wins.
        """
        records = self.db.execute(
            statements.select_by_column(self.table, IDENTITY, IDENTITY),
            {IDENTITY: id},
            self.model,
        )
        return records[0] if records else None

    def find_one_by_column(self, column_name: str, value: Any) -> Optional[R]:
        records = self.db.execute(
            statements.select_by_column(self.table, column_name, "value", limit_one=True),
            {"value": value},
            self.model,
        )
        if not records:
            return None
        return records[0]

    def find_all_by_column_values(
        self, column_name: str, values: Iterable[Any], operator: str = "="
    ) -> List[R]:
        """
        Records where ``column_name <operator> v`` holds for any ``v`` in ``values``.

        An empty ``values`` selects nothing.
        """
        predicate = build_in_predicate(column_name, values, operator=operator)
        return self.db.execute(
            statements.select_where(self.table, predicate.sql), predicate.params, self.model
        )

    def get_rows_group(
        self,
        offset: int,
        limit: int,
        order_column: str = IDENTITY,
        descending: bool = False,
    ) -> List[R]:
        """
        A window of ``limit`` records starting after ``offset``, ordered by ``order_column``.

        An unknown ``order_column`` is reported by the database, not checked here.
        """
        offset = _require_non_negative_int("offset", offset)
        limit = _require_non_negative_int("limit", limit)
        return self.db.execute(
            statements.select_page(self.table, order_column, descending=descending),
            {"offset": offset, "limit": limit},
            self.model,
        )

    # Mutations

    def save(self, record: R) -> None:
        """Insert ``record`` if it has no identity yet, otherwise update its row."""
        self._check_type(record)
        fields = self.get_fields()
        if record.id is None:
            self._insert(record, TableParams.from_record(record, fields, exclude=(IDENTITY,)))
        else:
            self._update(record, TableParams.from_record(record, fields))

    def _insert(self, record: R, params: TableParams) -> None:
        # The identity comes back with the INSERT itself; a separate lastval()
        # round trip can observe another thread's insert on a shared session.
        rows = self.db.execute(statements.insert(self.table, params), params.values)
        record.id = int(rows[0][IDENTITY])
        log.debug(
            "Record inserted",
            extra={"table": self.table, "operation": "insert", "id": record.id},
        )

    def _update(self, record: R, params: TableParams) -> None:
        self.db.execute(statements.update(self.table, params), params.values)
        log.debug(
            "Record updated",
            extra={"table": self.table, "operation": "update", "id": record.id},
        )

    def delete(self, record: R) -> None:
        """Delete the row of ``record`` and detach the instance (``id`` becomes ``None``)."""
        self._check_type(record)
        if record.id is None:
            raise InvalidArgumentError(
                f"Cannot delete a {self.model.__name__} that was never saved"
            )
        deleted_id = record.id
        self.db.execute(statements.delete(self.table), {IDENTITY: deleted_id})
        record.id = None
        log.debug(
            "Record deleted",
            extra={"table": self.table, "operation": "delete", "id": deleted_id},
        )

    def _check_type(self, record: Record) -> None:
        if not isinstance(record, self.model):
            raise InvalidArgumentError(
                f"{type(self).__name__} for {self.model.__name__} "
                f"cannot handle {type(record).__name__}"
            )


__all__ = ["RecordRepository"]
