#!/usr/bin/env python3
"""
Purpose:
    Parses the four-segment metadata tag attached to a schema field into a
    FieldDescriptor.

    Grammar:
        "<key>, <default | required | ''>, <rule1 rule2 ...>, <description>"

    Exactly three separating commas are required. The description is the
    remainder after the third comma and may itself contain commas.
"""
from __future__ import annotations

from typing import NamedTuple, Optional

from pydantic import ValidationError as PydanticValidationError

from tagconf.core import constants as C
from tagconf.core.errors import MalformedTagError
from tagconf.core.formatting import format_pydantic_errors_simple
from tagconf.core.schema.field_descriptor import FieldDescriptor
from tagconf.core.schema.field_type import FieldType


class TagSegments(NamedTuple):
    """Raw, trimmed segments of a tag."""
    key: str
    default: str
    rules: str
    description: str


# --- Public API --- #

def split_tag(tag: str) -> TagSegments:
    """
    Split a tag into its four trimmed segments.

    Raises:
        MalformedTagError: if fewer than three separating commas are present.

    Examples
    --------
    >>> split_tag("listen, :8804, netaddr, The address to listen")
    TagSegments(key='listen', default=':8804', rules='netaddr', description='The address to listen')
    """
    if not isinstance(tag, str):
        raise MalformedTagError(repr(tag), "tag must be a string")
    parts = tag.split(",", C.TAG_SEGMENTS - 1)
    if len(parts) < C.TAG_SEGMENTS:
        raise MalformedTagError(
            tag, f"expected {C.TAG_SEGMENTS} comma-separated segments, found {len(parts)}"
        )
    return TagSegments(*(p.strip() for p in parts))


def parse_tag(
    tag: str,
    field_type: FieldType = FieldType.STRING,
    item_type: Optional[FieldType] = None,
    *,
    field: Optional[str] = None,
) -> FieldDescriptor:
    """
    Parse a metadata tag into a `FieldDescriptor` of the given type.

    Segment 2 semantics:
        - 'required' (exact, case-sensitive) -> required, no default
        - any other non-empty text           -> default literal, coerced to `field_type`
        - empty                              -> optional; the zero value is used

    Args:
        tag: the raw metadata string.
        field_type: semantic type of the field (from its annotation).
        item_type: element type when `field_type` is a sequence.
        field: attribute name, only used to improve error messages.

    Raises:
        MalformedTagError: on a wrong segment count or any invalid segment
            (bad key, bad rule name, default not coercible, section with rules...).
    """
    seg = split_tag(tag)
    required = seg.default == C.REQUIRED_TOKEN
    default = None if required or not seg.default else seg.default

    try:
        return FieldDescriptor(
            key=seg.key,
            required=required,
            default=default,
            rules=seg.rules,
            description=seg.description,
            field_type=field_type,
            item_type=item_type,
        )
    except PydanticValidationError as e:
        reason = "; ".join(format_pydantic_errors_simple(e, include_loc=False))
        raise MalformedTagError(tag, reason, field=field) from e


def untagged(name: str) -> str:
    """Tag used for a schema field declared without one: key = attribute name."""
    return f"{name}, , , "

