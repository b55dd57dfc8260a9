#!/usr/bin/env python3
"""
Purpose:
    Implements the RuleRegistry, which maps rule names to predicates over a
    single typed value. Tags reference rules by name; the loader asks the
    registry to evaluate them.

Example:
    >>> from tagconf.core.rules.registry import rule, rule_registry
    >>>
    >>> @rule("even")
    ... def even(value):
    ...     return value % 2 == 0
    >>>
    >>> rule_registry.validate("even", 4)
    True
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List

from tagconf.core import constants as C
from tagconf.core.errors import UnknownRuleError

logger = logging.getLogger(__name__)

__all__ = ["Predicate", "RuleRegistry", "rule", "rule_registry"]

Predicate = Callable[[Any], bool]


class RuleRegistry:
    """
    Registry of named validation predicates.

    Registration is expected once at process startup. It is guarded by a lock
    so late registration cannot race a lookup, and `freeze()` turns any later
    attempt into an error.
    """

    def __init__(self) -> None:
        """Initialize an empty, unfrozen registry."""
        self._rules: Dict[str, Predicate] = {}
        self._lock = threading.Lock()
        self._frozen = False

    # --- Registration --- #

    def register(self, name: str, predicate: Predicate) -> None:
        """
        Register `predicate` under `name`.

        Raises:
            ValueError: if the name is invalid or already bound to another predicate.
            RuntimeError: if the registry is frozen.
        """
        if not C.RULE_NAME_ALLOWED_RE.fullmatch(name or ""):
            raise ValueError(
                f"Rule name {name!r} must match the pattern {C.RULE_NAME_ALLOWED_RE.pattern!r}"
            )
        if not callable(predicate):
            raise ValueError(f"Rule {name!r} predicate must be callable")
        with self._lock:
            if self._frozen:
                raise RuntimeError(f"Cannot register rule {name!r}: the registry is frozen")
            existing = self._rules.get(name)
            if existing is not None and existing is not predicate:
                raise ValueError(f"Rule {name!r} is already registered with a different predicate")
            self._rules[name] = predicate
        logger.debug(f"Registered rule {name!r}")

    def freeze(self) -> None:
        """Reject any further registration."""
        with self._lock:
            self._frozen = True

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    # --- Query API --- #

    def has(self, name: str) -> bool:
        """True if a rule is registered under `name`."""
        with self._lock:
            return name in self._rules

    def get(self, name: str) -> Predicate:
        """
        Return the predicate registered under `name`.

        Raises:
            UnknownRuleError: if no rule has that name.
        """
        with self._lock:
            predicate = self._rules.get(name)
            if predicate is None:
                raise UnknownRuleError(name, self._rules.keys())
        return predicate

    def validate(self, name: str, value: Any) -> bool:
        """
        Evaluate rule `name` against `value`.

        A predicate that raises TypeError or ValueError (e.g. a numeric rule on
        a string) counts as a failed check.

        Raises:
            UnknownRuleError: if no rule has that name.
        """
        predicate = self.get(name)
        try:
            return bool(predicate(value))
        except (TypeError, ValueError) as e:
            logger.debug(f"Rule {name!r} raised on {value!r}: {e}")
            return False

    def names(self) -> List[str]:
        """Sorted list of registered rule names."""
        with self._lock:
            return sorted(self._rules)

    def copy(self) -> "RuleRegistry":
        """Unfrozen copy holding the same rules (per-caller extension)."""
        clone = RuleRegistry()
        with self._lock:
            clone._rules = dict(self._rules)
        return clone

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)


# Module-level singleton instance
rule_registry = RuleRegistry()


def rule(name: str, registry: RuleRegistry | None = None) -> Callable[[Predicate], Predicate]:
    """
    Register a predicate via decorator.

    Args:
        name: rule name used in tags.
        registry: target registry (defaults to the process-wide `rule_registry`).

    Returns:
        Decorator that registers the function and returns it unchanged.
    """

    def decorator(fn: Predicate) -> Predicate:
        (registry or rule_registry).register(name, fn)
        return fn

    return decorator
