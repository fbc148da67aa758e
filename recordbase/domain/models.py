"""
Domain models for recordbase.

``Record`` is the base every mapped type inherits from. Subclasses declare
their data attributes as pydantic fields (camelCase) and implement
``table_name()``; the declared fields form the static field table used to
build SQL and to deserialize rows.
"""
from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, TypeVar

from psycopg import sql
from pydantic import BaseModel, ConfigDict, Field

from recordbase.exceptions import SchemaMismatchError
from recordbase.naming import to_attribute_name, to_column_name

R = TypeVar("R", bound="Record")

IDENTITY = "id"


class Record(BaseModel):
    """
    Base class for rows of a mapped table.

    ``id`` is ``None`` until the record has been inserted and is reset to
    ``None`` once the row is deleted.
    """

    id: Optional[int] = Field(None, description="Identity assigned by storage.")

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    @classmethod
    @abc.abstractmethod
    def table_name(cls) -> str:
        """Physical table this record type maps to."""
        raise NotImplementedError

    @classmethod
    def declared_attributes(cls) -> Tuple[str, ...]:
        """Attribute names in declaration order, identity first."""
        return tuple(cls.model_fields)

    @classmethod
    def attribute_for_column(cls, column_name: str) -> str:
        attribute = to_attribute_name(column_name)
        if attribute not in cls.model_fields:
            raise SchemaMismatchError(cls.table_name(), missing_attributes=[column_name])
        return attribute

    @classmethod
    def from_row(cls: Type[R], row: Mapping[str, Any]) -> R:
        """
        Build an instance from a result row keyed by column name.

        Every column must map onto a declared attribute.
        """
        values = {cls.attribute_for_column(column): value for column, value in row.items()}
        return cls.model_validate(values)

    def set_attribute(self, name: str, value: Any) -> None:
        """Assign ``value`` to the attribute matching the column-style ``name``."""
        setattr(self, self.attribute_for_column(name), value)

    @property
    def is_persisted(self) -> bool:
        return self.id is not None


@dataclass(frozen=True)
class FieldDescriptor:
    """An attribute/column pair for one persisted field."""

    attribute: str
    column: str
    position: int

    @classmethod
    def from_attribute(cls, attribute: str, position: int) -> "FieldDescriptor":
        return cls(attribute=attribute, column=to_column_name(attribute), position=position)

    @classmethod
    def from_column(cls, column: str, position: int) -> "FieldDescriptor":
        return cls(attribute=to_attribute_name(column), column=column, position=position)


@dataclass
class TableParams:
    """
    Column, placeholder, and value bundle for a single insert or update.

    Placeholder names equal the column names, so ``values`` can be handed to
    the driver as the named parameter mapping.
    """

    columns: List[str] = field(default_factory=list)
    params: List[str] = field(default_factory=list)
    assignments: List[sql.Composable] = field(default_factory=list)
    values: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_record(
        cls,
        record: Record,
        fields: List[FieldDescriptor],
        exclude: Tuple[str, ...] = (),
    ) -> "TableParams":
        bundle = cls()
        for descriptor in fields:
            if descriptor.attribute in exclude:
                continue
            placeholder = descriptor.column
            bundle.columns.append(descriptor.column)
            bundle.params.append(placeholder)
            bundle.assignments.append(
                sql.SQL("{} = {}").format(
                    sql.Identifier(descriptor.column), sql.Placeholder(placeholder)
                )
            )
            bundle.values[placeholder] = getattr(record, descriptor.attribute)
        return bundle


__all__ = ["IDENTITY", "FieldDescriptor", "Record", "TableParams"]
