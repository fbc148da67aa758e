from __future__ import annotations

import pytest

from recordbase.naming import to_attribute_name, to_column_name

NAME_PAIRS = [
    ("author_id", "authorId"),
    ("created_at", "createdAt"),
    ("address_line2", "addressLine2"),
    ("a_b_c", "aBC"),
    ("name", "name"),
    ("", ""),
]


@pytest.mark.parametrize("column, attribute", NAME_PAIRS)
def test_column_to_attribute(column: str, attribute: str) -> None:
    assert to_attribute_name(column) == attribute


@pytest.mark.parametrize("column, attribute", NAME_PAIRS)
def test_attribute_to_column(column: str, attribute: str) -> None:
    assert to_column_name(attribute) == column


@pytest.mark.parametrize("column, attribute", NAME_PAIRS)
def test_conversions_are_mutual_inverses(column: str, attribute: str) -> None:
    assert to_attribute_name(to_column_name(attribute)) == attribute
    assert to_column_name(to_attribute_name(column)) == column


def test_plain_lowercase_name_is_fixed_point() -> None:
    assert to_attribute_name("status") == "status"
    assert to_column_name("status") == "status"


def test_first_letter_is_never_prefixed_or_capitalized() -> None:
    assert to_column_name("Status") == "status"
    assert to_attribute_name("Birth_city") == "birthCity"


def test_all_digit_segment_does_not_round_trip() -> None:
    assert to_attribute_name("address_2") == "address2"
    assert to_column_name("address2") == "address2"
    assert to_column_name(to_attribute_name("address_2")) != "address_2"
