#!/usr/bin/env python3
"""
Purpose:
    Implements the FieldDescriptor model for tagconf schemas: the parsed,
    validated form of one field's metadata tag, with its default already
    coerced to the field type.
"""
from __future__ import annotations

from typing import Any, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from tagconf.core import constants as C
from tagconf.core.schema.field_type import FieldType
from tagconf.core.utils import is_valid_key
from tagconf.core.values import coerce_default, zero_value


# --- Model --- #

class FieldDescriptor(BaseModel):
    """
    One field of a tagconf schema.

    Built from a tag `"<key>, <default | required | ''>, <rules>, <description>"`
    plus the field's semantic type (taken from its annotation).

    - `required` and `default` are mutually exclusive.
    - `default_value` holds the default coerced to the field type (None when absent).
    - Sections carry only a key (the table name) and a description.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str = Field(default="", description="Document key (table name for sections).")
    required: bool = Field(default=False, description="Whether the key must be present.")
    default: Optional[str] = Field(default=None, description="Textual default from the tag.")
    rules: Tuple[str, ...] = Field(default=(), description="Rule names, applied in order.")
    description: str = Field(default="", description="Free text for generated comments.")
    field_type: FieldType = Field(default=FieldType.STRING, description="Semantic field type.")
    item_type: Optional[FieldType] = Field(default=None, description="Element type of a sequence.")
    default_value: Any = Field(default=None, description="Default coerced to `field_type`.")

    # --- Validators --- #

    @field_validator("field_type", "item_type", mode="before")
    @classmethod
    def _parse_field_type(cls, v: Any) -> Any:
        """Coerce incoming values to FieldType (unknowns → INVALID)."""
        return None if v is None else FieldType.parse(v)

    @field_validator("key", mode="before")
    @classmethod
    def _normalize_key(cls, v: Any) -> str:
        """Strip whitespace; the pattern check depends on the field type and runs later."""
        return "" if v is None else str(v).strip()

    @field_validator("rules", mode="before")
    @classmethod
    def _split_rules(cls, v: Any) -> Tuple[str, ...]:
        """Accept a whitespace-separated string or any iterable of names."""
        if v is None:
            return ()
        if isinstance(v, str):
            return tuple(v.split())
        return tuple(str(r).strip() for r in v)

    @field_validator("default", "description", mode="after")
    @classmethod
    def _check_comment_text(cls, v: Optional[str]) -> Optional[str]:
        """Both segments are echoed into generated comments."""
        if v is not None and C.COMMENT_FORBIDDEN_RE.search(v):
            raise ValueError(f"control characters are not allowed: {v!r}")
        return v

    @field_validator("rules", mode="after")
    @classmethod
    def _check_rule_names(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        bad = [r for r in v if not C.RULE_NAME_ALLOWED_RE.fullmatch(r)]
        if bad:
            raise ValueError(f"invalid rule name(s): {bad}")
        return v

    @model_validator(mode="after")
    def _post(self) -> "FieldDescriptor":
        """
        Final validation:
        - field type must be known; sequences need a scalar item type
        - keys must be bare TOML keys (sections may leave it empty)
        - `required` and `default` are exclusive
        - sections declare no default, rules or required flag
        - the default must coerce to the field type
        """
        self._check_types()
        self._check_key()
        self._check_required_vs_default()
        self._check_section_shape()
        self._coerce_default()
        return self

    # --- Convenience --- #

    @property
    def is_section(self) -> bool:
        return self.field_type == FieldType.SECTION

    @property
    def has_default(self) -> bool:
        return self.default is not None

    @property
    def type_name(self) -> str:
        """Type as shown in generated comments (e.g. `sequence<string>`)."""
        return self.field_type.display(self.item_type)

    def zero(self) -> Any:
        """Zero value of this field's type (sections excluded)."""
        return zero_value(self.field_type, self.item_type)

    def initial_value(self) -> Any:
        """Value a loader assigns when the key is absent and the field is optional."""
        if self.has_default:
            # copy lists so value trees never share the descriptor's default
            return list(self.default_value) if isinstance(self.default_value, list) else self.default_value
        return self.zero()

    # --- Post Helpers --- #

    def _check_types(self) -> None:
        if self.field_type == FieldType.INVALID:
            raise ValueError("Unknown field_type; valid types are: bool, integer, float, string, sequence, section")
        if self.field_type == FieldType.SEQUENCE:
            if self.item_type is None or not self.item_type.is_scalar():
                raise ValueError("sequence fields need a scalar item_type (bool, integer, float or string)")
        elif self.item_type is not None:
            raise ValueError(f"item_type is only valid for sequences, not {self.field_type.value!r}")

    def _check_key(self) -> None:
        if not self.key:
            if self.is_section:
                return
            raise ValueError("The key segment is empty")
        if not is_valid_key(self.key):
            raise ValueError(f"key {self.key!r} must match the pattern {C.KEY_ALLOWED_RE.pattern!r}")

    def _check_required_vs_default(self) -> None:
        if self.required and self.default is not None:
            raise ValueError("a field cannot be both required and have a default")

    def _check_section_shape(self) -> None:
        if not self.is_section:
            return
        if self.required or self.default is not None or self.rules:
            raise ValueError("section fields cannot declare a default, 'required' or rules")

    def _coerce_default(self) -> None:
        if self.default is None:
            return
        # frozen model: bypass assignment guard once, during validation
        object.__setattr__(self, "default_value", coerce_default(self.default, self.field_type, self.item_type))
