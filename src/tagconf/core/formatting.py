#!/usr/bin/env python3
"""
Formatting helpers for tagconf.

- One-line messages for Pydantic v2 `ValidationError` (tag parsing, options).
- One-line-per-problem rendering of an aggregated `ConfigError` (CLI).
"""
from __future__ import annotations

from typing import Any, Iterable, List, Sequence

from tagconf.core.errors import ConfigError

_VALUE_ERROR_PREFIX = "Value error, "


# --- Public API --- #

def format_pydantic_errors_simple(exc: Exception, *, include_loc: bool = True) -> List[str]:
    """
    Return stable one-line messages from a Pydantic v2 ValidationError.

    The "Value error, " prefix Pydantic puts on messages raised by validators
    is dropped. With `include_loc=False` the location is dropped as well, which
    suits models whose checks run at model level (location `<root>`).

    Example:
        <root>: key 'bad key' must match the pattern '^[A-Za-z0-9_-]+$'
        rules: invalid rule name(s): ['1x']

    Falls back to the first line of str(exc) if `exc.errors()` isn't available.
    """
    errors: Sequence[dict[str, Any]] | None = None

    if hasattr(exc, "errors") and callable(getattr(exc, "errors")):
        try:
            errors = exc.errors()  # type: ignore[assignment]
        except TypeError:
            errors = None

    if not errors:
        return [str(exc).splitlines()[0]]

    msgs: List[str] = []
    for err in errors:
        msg = str(err.get("msg", "Validation error")).removeprefix(_VALUE_ERROR_PREFIX)
        if include_loc:
            msg = f"{_format_error_loc(err.get('loc', ()))}: {msg}"
        msgs.append(msg)
    return msgs


def format_config_error(exc: ConfigError) -> List[str]:
    """
    Return one line per collected problem, in the order they were found.

    Example:
        redis.cluster: required key is missing
        listen: value 'nowhere' fails rule 'netaddr'
        port: expected integer, found string "80"
    """
    return [f"{e.dotted_path}: {e.detail}" for e in exc.errors]


# --- Internals --- #

def _format_error_loc(loc: Iterable[Any]) -> str:
    """
    Convert a Pydantic error `loc` tuple into a dotted path with index suffixes.

    Examples:
        ('rules', 1)  -> "rules[1]"
        ()            -> "<root>"
    """
    parts: List[str] = []
    for seg in loc:
        if isinstance(seg, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{seg}]"
            else:
                parts.append(f"[{seg}]")
        else:
            parts.append(str(seg))
    return ".".join(parts) if parts else "<root>"
