#!/usr/bin/env python3
"""
Purpose:
    Generates a self-documenting TOML document from a schema, providing
    functions to render it as text/bytes or write it to disk.

Layout per leaf field (blocks separated by a blank line):

    # type: string
    # rules: netaddr
    # description: The address to listen
    # default: :8804
    # listen=":8804"

A key line is commented out exactly when a default is declared; otherwise it
is live and holds the type's zero value as a placeholder. Sections render as
TOML tables. Since every key after a table header belongs to that table, the
leaves of a structure come before its sections.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Tuple

from tagconf.core.constants import COMMENT_PREFIX, DEFAULT_TEXT_ENCODING
from tagconf.core.schema.walker import SchemaNode, resolve_schema
from tagconf.core.values import render_literal

logger = logging.getLogger(__name__)


# --- Public API --- #

def marshal(schema: Any) -> bytes:
    """
    Return the UTF-8 encoded document for `schema`.

    `schema` may be a dataclass type, an instance (only its type is used) or a
    built SchemaNode. The output depends on the schema shape only, so repeated
    calls are byte-identical.

    Raises:
        UnsupportedTypeError / MalformedTagError: if the schema cannot be built.
    """
    return render_template(schema).encode(DEFAULT_TEXT_ENCODING)


def render_template(schema: Any) -> str:
    """Return the document for `schema` as text."""
    root = resolve_schema(schema)
    blocks = _render_structure(root, prefix=())
    if not blocks:
        return ""
    return "\n\n".join("\n".join(block) for block in blocks) + "\n"


def write_template(schema: Any, path: Path) -> None:
    """Render and write the document for `schema` to `path`."""
    path = Path(path)
    text = render_template(schema)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding=DEFAULT_TEXT_ENCODING)
    logger.info(f"Wrote configuration template to {path}")


# --- Internal Helpers --- #

def _render_structure(node: SchemaNode, prefix: Tuple[str, ...]) -> List[List[str]]:
    """Leaves first (declaration order), then each section with its own content."""
    blocks: List[List[str]] = [_render_leaf(leaf) for leaf in node.leaves()]
    for section in node.sections():
        path = prefix + (section.key,)
        blocks.append(_render_section_header(section, path))
        blocks.extend(_render_structure(section, path))
    return blocks


def _render_section_header(node: SchemaNode, path: Tuple[str, ...]) -> List[str]:
    lines: List[str] = []
    if node.descriptor.description:
        lines.append(_comment(f"description: {node.descriptor.description}"))
    lines.append(f"[{'.'.join(path)}]")
    return lines


def _render_leaf(node: SchemaNode) -> List[str]:
    """
    Render one leaf field: comment block, then the key line.

    - type is always documented
    - rules / description only when present
    - default and required are exclusive
    """
    fd = node.descriptor
    lines = [_comment(f"type: {fd.type_name}")]
    if fd.rules:
        lines.append(_comment(f"rules: {' '.join(fd.rules)}"))
    if fd.description:
        lines.append(_comment(f"description: {fd.description}"))
    if fd.has_default:
        lines.append(_comment(f"default: {fd.default}"))
    if fd.required:
        lines.append(_comment("required"))

    if fd.has_default:
        lines.append(_comment(_assignment(node.key, fd.default_value)))
    else:
        lines.append(_assignment(node.key, fd.zero()))
    return lines


def _assignment(key: str, value: Any) -> str:
    return f"{key}={render_literal(value)}"


def _comment(text: str) -> str:
    """Comment out every line of `text`; a line break in a description or default never ends the comment."""
    return "\n".join(f"{COMMENT_PREFIX}{line}" for line in text.splitlines() or [""])
