from __future__ import annotations

import pytest
from pydantic import ValidationError

from recordbase.domain.models import FieldDescriptor, Record, TableParams
from recordbase.exceptions import SchemaMismatchError


def test_from_row_maps_columns_to_attributes(person_model) -> None:
    person = person_model.from_row({"id": 4, "name": "Alice", "age": 30, "birth_city": "Oslo"})

    assert person.id == 4
    assert person.name == "Alice"
    assert person.age == 30
    assert person.birthCity == "Oslo"


def test_from_row_rejects_unknown_column(person_model) -> None:
    with pytest.raises(SchemaMismatchError) as excinfo:
        person_model.from_row({"id": 1, "name": "Alice", "age": 30, "nickname": "Al"})

    assert excinfo.value.table == "people"
    assert excinfo.value.missing_attributes == ("nickname",)


def test_set_attribute_converts_column_name(person_model) -> None:
    person = person_model(name="Alice", age=30)

    person.set_attribute("birth_city", "Lisbon")

    assert person.birthCity == "Lisbon"


def test_set_attribute_unknown_name_is_schema_mismatch(person_model) -> None:
    person = person_model(name="Alice", age=30)

    with pytest.raises(SchemaMismatchError):
        person.set_attribute("shoe_size", 42)


def test_set_attribute_validates_value(person_model) -> None:
    person = person_model(name="Alice", age=30)

    with pytest.raises(ValidationError):
        person.set_attribute("age", "not a number")


def test_new_record_is_not_persisted(person_model) -> None:
    person = person_model(name="Alice", age=30)

    assert person.id is None
    assert not person.is_persisted


def test_record_without_table_name_is_abstract() -> None:
    class Incomplete(Record):
        label: str

    with pytest.raises(TypeError):
        Incomplete(label="x")


def test_declared_attributes_start_with_identity(person_model) -> None:
    assert person_model.declared_attributes() == ("id", "name", "age", "birthCity")


def test_field_descriptor_derives_column() -> None:
    descriptor = FieldDescriptor.from_attribute("birthCity", 3)

    assert descriptor == FieldDescriptor(attribute="birthCity", column="birth_city", position=3)


def test_table_params_follow_field_order(person_model) -> None:
    person = person_model(id=9, name="Alice", age=30, birthCity="Oslo")
    fields = [
        FieldDescriptor.from_attribute(attribute, position)
        for position, attribute in enumerate(person_model.declared_attributes())
    ]

    params = TableParams.from_record(person, fields, exclude=("id",))

    assert params.columns == ["name", "age", "birth_city"]
    assert params.params == ["name", "age", "birth_city"]
    assert params.values == {"name": "Alice", "age": 30, "birth_city": "Oslo"}
    assert [fragment.as_string(None) for fragment in params.assignments] == [
        '"name" = %(name)s',
        '"age" = %(age)s',
        '"birth_city" = %(birth_city)s',
    ]
