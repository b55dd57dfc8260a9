#!/usr/bin/env python3
"""
Purpose:
    Wires together the tagconf application context: the merged tool
    configuration, the loader options derived from it, and the rule registry
    with the built-in catalog loaded.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from tagconf.core.config import load_config
from tagconf.core.document.options import LoadOptions
from tagconf.core.rules.registry import RuleRegistry, rule_registry
import tagconf.core.rules.builtin  # noqa: F401  (registers the built-in rules)


# --- Data model --- #

@dataclass(frozen=True)
class AppContext:
    """Immutable container for configuration, loader options and rules."""
    config: Dict[str, Any]
    options: LoadOptions
    rules: RuleRegistry


# --- Factory --- #

def build_context(
    *,
    config: Optional[Dict[str, Any]] = None,
    rules: Optional[RuleRegistry] = None,
    configure_logging: bool = False,
) -> AppContext:
    """
    Build an `AppContext`.

    Args:
        config:
            Pre-merged configuration. If omitted, `load_config()` is used.
        rules:
            Rule registry to use. Defaults to the process-wide `rule_registry`.
        configure_logging:
            If True, configures the root logger from `config['logging']['level']`.

    Returns:
        AppContext: immutable bundle of config, loader options and rule registry.
    """
    cfg = config or load_config()
    if configure_logging:
        level = str(cfg.get("logging", {}).get("level", "WARNING")).upper()
        logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    return AppContext(config=cfg, options=LoadOptions.from_config(cfg), rules=rules or rule_registry)
