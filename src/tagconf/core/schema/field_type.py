#!/usr/bin/env python3
"""
Purpose:
    Defines the FieldType enumeration for tagconf schemas, along with helpers
    for parsing, mapping Python annotations, and introspection of field types.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class FieldType(str, Enum):
    """
    Semantic type of a schema field.

    - bool     : true/false scalar
    - integer  : integral scalar
    - float    : floating point scalar (integers are widened on load)
    - string   : textual scalar
    - sequence : homogeneous list of scalars (element type kept separately)
    - section  : nested structure, rendered as a TOML table
    - invalid  : unrecognized/unsupported type (returned by `parse`)
    """

    BOOL = "bool"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    SEQUENCE = "sequence"
    SECTION = "section"
    INVALID = "invalid"

    # --- Parsing helpers --- #

    @classmethod
    def parse(cls, value: str | FieldType | None) -> FieldType:
        """
        Coerce arbitrary input to a `FieldType`.

        - `FieldType` instance → returned as-is
        - `None` or unknown strings → `FieldType.INVALID`
        - strings are trimmed and lowercased before lookup

        Examples
        --------
        >>> FieldType.parse(" String ")
        <FieldType.STRING: 'string'>
        >>> FieldType.parse(None)
        <FieldType.INVALID: 'invalid'>
        """
        if isinstance(value, FieldType):
            return value
        if value is None:
            return cls.INVALID
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.INVALID

    @classmethod
    def from_python_type(cls, t: Any) -> FieldType:
        """
        Map a scalar Python type object to a `FieldType`.
        `bool` is checked before `int` since it subclasses it.
        Unknowns -> `FieldType.INVALID`.
        """
        if t is bool:
            return cls.BOOL
        if t is int:
            return cls.INTEGER
        if t is float:
            return cls.FLOAT
        if t is str:
            return cls.STRING
        return cls.INVALID

    # --- Introspection helpers --- #

    def is_scalar(self) -> bool:
        """True if the field is a scalar (bool, integer, float, or string)."""
        return self in {FieldType.BOOL, FieldType.INTEGER, FieldType.FLOAT, FieldType.STRING}

    def is_section(self) -> bool:
        return self is FieldType.SECTION

    def display(self, item_type: FieldType | None = None) -> str:
        """Human-readable type name used in generated comments, e.g. `sequence<string>`."""
        if self is FieldType.SEQUENCE and item_type is not None:
            return f"{self.value}<{item_type.value}>"
        return self.value
