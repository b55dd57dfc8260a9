"""
tagconf: declarative, tag-driven TOML configuration.

Each dataclass field carries a four-segment metadata tag
(`"<key>, <default | required>, <rules>, <description>"`). The same tags drive
both directions:

- `marshal(schema)` renders a self-documenting TOML document.
- `unmarshal(document, target)` loads a document into a value tree, applying
  defaults and rules and collecting every problem into one `ConfigError`.

Example:
    >>> from dataclasses import dataclass
    >>> from tagconf import setting, marshal, unmarshal
    >>> @dataclass
    ... class Config:
    ...     listen: str = setting("listen, :8804, netaddr, The address to listen")
    >>> unmarshal(b"", Config).listen
    ':8804'
"""

from __future__ import annotations

import tagconf.core.rules.builtin  # noqa: F401  (registers the built-in rules)
from tagconf.core.document.generator import marshal, render_template, write_template
from tagconf.core.document.loader import check_defaults, check_rules, load_file, unmarshal
from tagconf.core.document.options import LoadOptions, UnknownKeyPolicy
from tagconf.core.errors import (
    ConfigError,
    DocumentSyntaxError,
    FieldError,
    InvalidDefaultError,
    MalformedTagError,
    MissingRequiredError,
    SchemaError,
    TagconfError,
    TypeMismatchError,
    UnknownKeyError,
    UnknownRuleError,
    UnsupportedTypeError,
    ValidationError,
)
from tagconf.core.rules.registry import RuleRegistry, rule, rule_registry
from tagconf.core.schema.declarations import setting
from tagconf.core.schema.field_descriptor import FieldDescriptor
from tagconf.core.schema.field_type import FieldType
from tagconf.core.schema.tag_parser import parse_tag
from tagconf.core.schema.walker import SchemaNode, build_schema, new_instance, walk

__all__ = [
    "ConfigError",
    "DocumentSyntaxError",
    "FieldDescriptor",
    "FieldError",
    "FieldType",
    "InvalidDefaultError",
    "LoadOptions",
    "MalformedTagError",
    "MissingRequiredError",
    "RuleRegistry",
    "SchemaError",
    "SchemaNode",
    "TagconfError",
    "TypeMismatchError",
    "UnknownKeyError",
    "UnknownKeyPolicy",
    "UnknownRuleError",
    "UnsupportedTypeError",
    "ValidationError",
    "build_schema",
    "check_defaults",
    "check_rules",
    "load_file",
    "marshal",
    "new_instance",
    "parse_tag",
    "render_template",
    "rule",
    "rule_registry",
    "setting",
    "unmarshal",
    "walk",
    "write_template",
]
