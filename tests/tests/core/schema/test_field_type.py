#!/usr/bin/env python3

import pytest
from tagconf.core.schema.field_type import FieldType


# --- Field Type Parsing --- #

@pytest.mark.parametrize("value, expected", [
    ("bool", FieldType.BOOL),
    ("integer", FieldType.INTEGER),
    ("float", FieldType.FLOAT),
    ("string", FieldType.STRING),
    ("sequence", FieldType.SEQUENCE),
    ("section", FieldType.SECTION),
])
def test_valid_parse_fieldtype(value, expected):
    assert FieldType.parse(value) == expected
    assert FieldType.parse(value.upper()) == expected
    assert FieldType.parse(f"  {value}  ") == expected
    assert FieldType.parse(expected) is expected


@pytest.mark.parametrize("value", ["strng", "", None, "list", "dict"])
def test_invalid_parse_fieldtype(value):
    assert FieldType.parse(value) == FieldType.INVALID


# --- Python type mapping --- #

@pytest.mark.parametrize("t, expected", [
    (bool, FieldType.BOOL),
    (int, FieldType.INTEGER),
    (float, FieldType.FLOAT),
    (str, FieldType.STRING),
    (list, FieldType.INVALID),
    (dict, FieldType.INVALID),
    (bytes, FieldType.INVALID),
])
def test_from_python_type(t, expected):
    assert FieldType.from_python_type(t) == expected


# --- Introspection --- #

def test_scalar_and_section_helpers():
    assert all(ft.is_scalar() for ft in (FieldType.BOOL, FieldType.INTEGER, FieldType.FLOAT, FieldType.STRING))
    assert not FieldType.SEQUENCE.is_scalar()
    assert not FieldType.SECTION.is_scalar()
    assert FieldType.SECTION.is_section()


def test_display_names():
    assert FieldType.STRING.display() == "string"
    assert FieldType.SEQUENCE.display(FieldType.STRING) == "sequence<string>"
    assert FieldType.SEQUENCE.display(FieldType.INTEGER) == "sequence<integer>"
    # item type only matters for sequences
    assert FieldType.INTEGER.display(FieldType.STRING) == "integer"
