#!/usr/bin/env python3
"""
Purpose:
    Typed value helpers shared by the generator and the loader: zero values,
    coercion of textual tag defaults, matching of parsed TOML values against
    a field type, and rendering of TOML literals (via tomlkit).
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, List, Optional

import tomlkit

from tagconf.core.schema.field_type import FieldType


# --- Zero values --- #

def zero_value(field_type: FieldType, item_type: Optional[FieldType] = None) -> Any:
    """
    Return the "empty" value of a type.

    Sequences get a fresh list on every call so value trees never share it.
    Sections have no scalar zero value; callers build a zero instance instead.
    """
    if field_type == FieldType.BOOL:
        return False
    if field_type == FieldType.INTEGER:
        return 0
    if field_type == FieldType.FLOAT:
        return 0.0
    if field_type == FieldType.STRING:
        return ""
    if field_type == FieldType.SEQUENCE:
        return []
    raise ValueError(f"{field_type.value!r} has no zero value")


# --- Tag defaults --- #

def coerce_default(raw: str, field_type: FieldType, item_type: Optional[FieldType] = None) -> Any:
    """
    Parse the textual default of a tag into the field's type.

    - bool:     'true' / 'false' (case-insensitive)
    - integer:  base-10 literal; '_' separators allowed
    - float:    any float literal ('1.5', '1e3', 'inf')
    - string:   the text as-is
    - sequence: whitespace-separated items, each coerced to `item_type`

    Raises:
        ValueError: if the text is not a literal of the requested type.
    """
    if field_type == FieldType.SEQUENCE:
        if item_type is None or not item_type.is_scalar():
            raise ValueError("sequence defaults need a scalar item type")
        return [coerce_default(part, item_type) for part in raw.split()]

    if field_type == FieldType.BOOL:
        lowered = raw.strip().lower()
        if lowered not in {"true", "false"}:
            raise ValueError(f"{raw!r} is not a bool literal (use true or false)")
        return lowered == "true"

    if field_type == FieldType.INTEGER:
        try:
            return int(raw, 10)
        except ValueError:
            raise ValueError(f"{raw!r} is not an integer literal") from None

    if field_type == FieldType.FLOAT:
        try:
            return float(raw)
        except ValueError:
            raise ValueError(f"{raw!r} is not a float literal") from None

    if field_type == FieldType.STRING:
        return raw

    raise ValueError(f"fields of type {field_type.value!r} cannot declare a default")


# --- Document values --- #

def toml_type_name(value: Any) -> str:
    """Name of the TOML type a parsed value came from."""
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "table"
    if isinstance(value, _dt.datetime):
        return "datetime"
    if isinstance(value, _dt.date):
        return "date"
    if isinstance(value, _dt.time):
        return "time"
    return type(value).__name__


def describe_value(value: Any) -> str:
    """`<toml type> <literal>` for messages; tables are described by type only."""
    name = toml_type_name(value)
    if isinstance(value, dict):
        return name
    return f"{name} {render_literal(value)}"


def match_document_value(value: Any, field_type: FieldType, item_type: Optional[FieldType] = None) -> Any:
    """
    Check a parsed TOML value against a field type and return the value to store.

    Integers are widened for float fields; booleans never count as numbers.

    Raises:
        TypeError: with a description of what was found when the value does not fit.
    """
    if field_type == FieldType.SEQUENCE:
        if not isinstance(value, list):
            raise TypeError(describe_value(value))
        assert item_type is not None
        items: List[Any] = []
        for idx, item in enumerate(value):
            try:
                items.append(match_document_value(item, item_type))
            except TypeError as e:
                raise TypeError(f"array with {e} at index {idx}") from None
        return items

    if field_type == FieldType.BOOL and isinstance(value, bool):
        return value
    if field_type == FieldType.INTEGER and isinstance(value, int) and not isinstance(value, bool):
        return value
    if field_type == FieldType.FLOAT and isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if field_type == FieldType.STRING and isinstance(value, str):
        return value
    if field_type == FieldType.SECTION and isinstance(value, dict):
        return value
    raise TypeError(describe_value(value))


# --- Rendering --- #

def render_literal(value: Any) -> str:
    """Render a Python value as a TOML literal (e.g. `":8804"`, `[1, 2]`, `true`)."""
    return tomlkit.item(value).as_string()
