#!/usr/bin/env python3
"""
tagconf tool configuration loader.

Controls the loader policy used by the command line (unknown keys, default
validation, fail-fast) and its log level.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Final

from tagconf.core.utils import merge_dicts, load_json_file

# --- Defaults & locations --- #

DEFAULT_CONFIG: Final[Dict[str, Any]] = {
    "unknown_keys": "error",
    "validate_defaults": False,
    "fail_fast": False,
    "logging": {"level": "WARNING"},
}

GLOBAL_CONFIG_PATH: Final[Path] = Path.home() / ".config" / "tagconf" / "config.json"

PROJECT_CONFIG_NAME: Final[str] = "tagconf.json"


# --- Public API --- #

def load_config() -> Dict[str, Any]:
    """
    Load tagconf configuration with layered precedence.

    Order:
        1. Built-in defaults
        2. Global config (~/.config/tagconf/config.json)
        3. Project config (./tagconf.json)
        4. Environment overrides:
           - TAGCONF_UNKNOWN_KEYS (error | warn | ignore)
           - TAGCONF_VALIDATE_DEFAULTS (true/false)
           - TAGCONF_FAIL_FAST (true/false)
           - TAGCONF_LOG_LEVEL

    Returns:
        A merged configuration dictionary.
    """
    # 1) start with defaults
    config = copy.deepcopy(DEFAULT_CONFIG)

    # 2) global config
    config = merge_dicts(config, load_json_file(GLOBAL_CONFIG_PATH))

    # 3) project config
    project_path = Path.cwd() / PROJECT_CONFIG_NAME
    config = merge_dicts(config, load_json_file(project_path))

    # 4) environment overrides
    unknown_keys_env = os.getenv("TAGCONF_UNKNOWN_KEYS")
    if unknown_keys_env:
        config["unknown_keys"] = unknown_keys_env.strip().lower()

    for name in ("validate_defaults", "fail_fast"):
        raw = os.getenv(f"TAGCONF_{name.upper()}")
        if raw:
            config[name] = _parse_bool_env(raw)

    log_level_env = os.getenv("TAGCONF_LOG_LEVEL")
    if log_level_env:
        config.setdefault("logging", {})["level"] = log_level_env.upper()

    return config


# --- Internals --- #

def _parse_bool_env(value: str) -> bool:
    """
    Interpret common truthy/falsy spellings.

    Example:
        "1", "true", "Yes", "on"  -> True
        anything else             -> False
    """
    return value.strip().lower() in {"1", "true", "yes", "on"}
