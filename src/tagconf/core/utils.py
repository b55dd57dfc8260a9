#!/usr/bin/env python3
"""
Purpose:
    Provides common utility functions such as key validation, dictionary
    merge, schema target import, and file I/O helpers for tagconf.
"""

import importlib
import json
from pathlib import Path
from typing import Any, Dict

from tagconf.core.constants import DEFAULT_TEXT_ENCODING, KEY_ALLOWED_RE


# --- Validation Helpers --- #

def is_valid_key(name: str) -> bool:
    """Return True if the key is a TOML bare key."""
    return bool(KEY_ALLOWED_RE.fullmatch(name))


# --- Generic Utilities --- #

def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge two dictionaries (values from 'override' take precedence).
    Non-dict values are overwritten; dict values are merged depth-first.
    """
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


def import_object(target: str) -> Any:
    """
    Import 'package.module:Attribute' (nested attributes may be dotted).

    Raises:
        ValueError: if the target has no ':' separator.
        ImportError / AttributeError: if the module or attribute cannot be found.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Invalid target {target!r}; expected 'module:Attribute'")
    obj: Any = importlib.import_module(module_name)
    for part in attr_path.split("."):
        obj = getattr(obj, part)
    return obj


# --- File I/O Helpers --- #

def load_json_file(path: Path) -> Dict[str, Any]:
    """
    Load a JSON file from 'path'. Returns an empty dict if the file is missing.

    Raises:
        ValueError: if the file exists but contains invalid JSON.
    """
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding=DEFAULT_TEXT_ENCODING) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON in {str(path)!r}: {e.msg} (line {e.lineno}, col {e.colno})"
        ) from e
