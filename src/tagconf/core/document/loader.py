#!/usr/bin/env python3
"""
Purpose:
    Loads a TOML document into a schema value tree: type-checks present keys,
    runs their rules, applies defaults or zero values to absent keys, reports
    missing required keys and unknown keys, and writes the results in place.

    Schema problems (unknown rule, bad default) abort immediately. Document
    problems are collected across all fields and raised as one ConfigError.
"""
from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple, Union

from tagconf.core.constants import DEFAULT_TEXT_ENCODING, SUPPORTED_DOCUMENT_EXT
from tagconf.core.document.options import LoadOptions, UnknownKeyPolicy
from tagconf.core.errors import (
    ConfigError,
    DocumentSyntaxError,
    FieldError,
    InvalidDefaultError,
    MissingRequiredError,
    TypeMismatchError,
    UnknownKeyError,
    UnknownRuleError,
    ValidationError,
)
from tagconf.core.rules.registry import RuleRegistry, rule_registry
from tagconf.core.schema.field_descriptor import FieldDescriptor
from tagconf.core.schema.walker import SchemaNode, WalkEntry, new_instance, resolve_schema, walk
from tagconf.core.values import describe_value, match_document_value

logger = logging.getLogger(__name__)

__all__ = [
    "check_defaults",
    "check_rules",
    "load_file",
    "parse_document",
    "unmarshal",
]

_Path = Tuple[str, ...]


# --- Public API --- #

def unmarshal(
    document: Union[bytes, str],
    target: Any,
    *,
    registry: Optional[RuleRegistry] = None,
    options: Optional[LoadOptions] = None,
    source: Optional[str] = None,
) -> Any:
    """
    Fill `target` from a TOML document and return it.

    Args:
        document: TOML text or UTF-8 bytes.
        target: schema instance (filled in place), or schema class or SchemaNode (a fresh
            zero-valued instance is created and filled). An instance is left untouched
            when the load raises.
        registry: rule registry (defaults to the process-wide `rule_registry`).
        options: loader policy (unknown keys, default validation, fail-fast).
        source: name used in messages (e.g. the file path).

    Raises:
        UnknownRuleError: a tag names a rule missing from the registry.
        InvalidDefaultError: with `validate_defaults`, a default fails its rules.
        DocumentSyntaxError: the document is not valid TOML.
        ConfigError: one or more document problems, collected per field.
    """
    options = options or LoadOptions()
    registry = registry or rule_registry
    root = resolve_schema(target)
    in_place = not isinstance(target, (type, SchemaNode))
    # values land in a scratch tree; an in-place target is only touched once the load succeeded
    instance = new_instance(root)

    check_rules(root, registry)
    if options.validate_defaults:
        check_defaults(root, registry)

    data = parse_document(document, source=source)
    collector = _ErrorCollector(fail_fast=options.fail_fast)
    broken: Set[_Path] = set()

    for entry in walk(root, instance):
        if any(entry.path[: i] in broken for i in range(1, len(entry.path))):
            continue
        if entry.descriptor.is_section:
            _load_section(entry, data, collector, broken)
        else:
            _load_leaf(entry, data, registry, collector)

    _report_unknown_keys(data, root, (), options.unknown_keys, collector, source)
    collector.raise_if_any()
    logger.debug(f"Loaded configuration from {source or '<document>'}")
    if not in_place:
        return instance
    _copy_values(root, instance, target)
    return target


def load_file(
    path: Union[str, Path],
    target: Any,
    *,
    registry: Optional[RuleRegistry] = None,
    options: Optional[LoadOptions] = None,
) -> Any:
    """
    Load a TOML file into `target` (see `unmarshal`).

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if the extension is not .toml
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"The file {str(p)!r} does not exist")
    if p.suffix.lower() not in SUPPORTED_DOCUMENT_EXT:
        raise ValueError(
            f"Invalid document file extension for {p.name!r}; expected one of {sorted(SUPPORTED_DOCUMENT_EXT)}"
        )
    return unmarshal(p.read_bytes(), target, registry=registry, options=options, source=str(p))


def parse_document(document: Union[bytes, str], *, source: Optional[str] = None) -> Dict[str, Any]:
    """
    Parse TOML text or bytes into plain Python values.

    Raises:
        DocumentSyntaxError: if the bytes are not UTF-8 or the text is not TOML.
    """
    if isinstance(document, (bytes, bytearray)):
        try:
            document = bytes(document).decode(DEFAULT_TEXT_ENCODING)
        except UnicodeDecodeError as e:
            raise DocumentSyntaxError(f"not {DEFAULT_TEXT_ENCODING} ({e.reason})", source) from e
    try:
        return tomllib.loads(document)
    except tomllib.TOMLDecodeError as e:
        raise DocumentSyntaxError(str(e), source) from e


def check_rules(schema: Any, registry: RuleRegistry) -> None:
    """
    Ensure every rule named by the schema is registered.

    Raises:
        UnknownRuleError: for the first rule (in declaration order) that is missing.
    """
    for entry in walk(schema):
        for name in entry.descriptor.rules:
            if not registry.has(name):
                raise UnknownRuleError(name, registry.names(), path=entry.path)


def check_defaults(schema: Any, registry: RuleRegistry) -> None:
    """
    Validate declared defaults against their own field's rules.

    Raises:
        InvalidDefaultError: for the first default that fails a rule.
    """
    for entry in walk(schema):
        fd = entry.descriptor
        if not fd.has_default:
            continue
        failed = _first_failing_rule(fd, fd.default_value, registry)
        if failed is not None:
            raise InvalidDefaultError(entry.path, failed, fd.default_value)


# --- Result transfer --- #

def _copy_values(root: SchemaNode, source: Any, target: Any) -> None:
    """Copy every leaf of `source` onto `target`, keeping the section objects `target` already holds."""
    for src, dst in zip(walk(root, source), walk(root, target)):
        if not src.descriptor.is_section:
            assert src.handle is not None and dst.handle is not None
            dst.handle.set(src.handle.get())


# --- Field loading --- #

def _load_section(entry: WalkEntry, data: Dict[str, Any], collector: "_ErrorCollector", broken: Set[_Path]) -> None:
    """A present section must be a table; an absent one cascades to its children."""
    present, raw = _lookup(data, entry.path)
    if present and not isinstance(raw, dict):
        collector.add(TypeMismatchError(entry.path, "table", describe_value(raw)))
        broken.add(entry.path)


def _load_leaf(entry: WalkEntry, data: Dict[str, Any], registry: RuleRegistry, collector: "_ErrorCollector") -> None:
    fd = entry.descriptor
    assert entry.handle is not None
    present, raw = _lookup(data, entry.path)

    if not present:
        if fd.required:
            collector.add(MissingRequiredError(entry.path))
        else:
            entry.handle.set(fd.initial_value())
        return

    try:
        value = match_document_value(raw, fd.field_type, fd.item_type)
    except TypeError as e:
        collector.add(TypeMismatchError(entry.path, fd.type_name, str(e)))
        return

    failed = _first_failing_rule(fd, value, registry)
    if failed is not None:
        collector.add(ValidationError(entry.path, failed, raw))
        return

    entry.handle.set(value)


def _first_failing_rule(fd: FieldDescriptor, value: Any, registry: RuleRegistry) -> Optional[str]:
    for name in fd.rules:
        if not registry.validate(name, value):
            return name
    return None


def _lookup(data: Dict[str, Any], path: _Path) -> Tuple[bool, Any]:
    """Follow `path` through nested tables; any missing or non-table step means absent."""
    current: Any = data
    for key in path[:-1]:
        if not isinstance(current, dict) or key not in current:
            return False, None
        current = current[key]
    if not isinstance(current, dict) or path[-1] not in current:
        return False, None
    return True, current[path[-1]]


# --- Unknown keys --- #

def _report_unknown_keys(
    table: Dict[str, Any],
    node: SchemaNode,
    prefix: _Path,
    policy: UnknownKeyPolicy,
    collector: "_ErrorCollector",
    source: Optional[str],
) -> None:
    for key, value in table.items():
        path = prefix + (key,)
        child = node.child(key)
        if child is None:
            _unknown_key(path, policy, collector, source)
        elif child.is_section and isinstance(value, dict):
            _report_unknown_keys(value, child, path, policy, collector, source)


def _unknown_key(path: _Path, policy: UnknownKeyPolicy, collector: "_ErrorCollector", source: Optional[str]) -> None:
    if policy == UnknownKeyPolicy.ERROR:
        collector.add(UnknownKeyError(path))
    elif policy == UnknownKeyPolicy.WARN:
        logger.warning(f"Unknown configuration key {'.'.join(path)!r} in {source or '<document>'}. It will be ignored.")


# --- Error collection --- #

class _ErrorCollector:
    """Accumulates FieldErrors; with fail_fast, raises on the first one."""

    def __init__(self, *, fail_fast: bool = False) -> None:
        self.errors: List[FieldError] = []
        self.fail_fast = fail_fast

    def add(self, error: FieldError) -> None:
        self.errors.append(error)
        if self.fail_fast:
            raise ConfigError(self.errors)

    def raise_if_any(self) -> None:
        if self.errors:
            raise ConfigError(self.errors)
