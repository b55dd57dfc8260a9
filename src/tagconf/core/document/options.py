#!/usr/bin/env python3
"""
Purpose:
    Defines LoadOptions, the caller-facing policy knobs of the document loader,
    and how they are derived from the tool configuration.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UnknownKeyPolicy(str, Enum):
    """
    What to do with document keys that have no schema counterpart.

    - error  : collect an UnknownKeyError (the load fails)
    - warn   : log a warning and continue
    - ignore : drop silently
    """

    ERROR = "error"
    WARN = "warn"
    IGNORE = "ignore"


class LoadOptions(BaseModel):
    """Policy options for `unmarshal`."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    unknown_keys: UnknownKeyPolicy = Field(
        default=UnknownKeyPolicy.ERROR,
        description="Severity of keys present in the document but not in the schema.",
    )
    validate_defaults: bool = Field(
        default=False,
        description="Check declared defaults against their field's rules before loading.",
    )
    fail_fast: bool = Field(
        default=False,
        description="Raise after the first document error instead of collecting all of them.",
    )

    @field_validator("unknown_keys", mode="before")
    @classmethod
    def _parse_policy(cls, v: Any) -> Any:
        """Accept policy names case-insensitively."""
        return v.strip().lower() if isinstance(v, str) else v

    # --- Factory --- #

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "LoadOptions":
        """Build options from a merged tool configuration (see `tagconf.core.config`)."""
        known: Dict[str, Any] = {k: config[k] for k in cls.model_fields if k in config}
        return cls(**known)
