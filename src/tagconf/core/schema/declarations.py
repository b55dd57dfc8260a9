#!/usr/bin/env python3
"""
Purpose:
    Declares schema fields on dataclasses by attaching a metadata tag.

Example:
    >>> from dataclasses import dataclass
    >>> from tagconf import setting
    >>>
    >>> @dataclass
    ... class Redis:
    ...     cluster: list[str] = setting("cluster, required, dialstring, Redis cluster nodes")
    >>>
    >>> @dataclass
    ... class Config:
    ...     listen: str = setting("listen, :8804, netaddr, The address to listen")
    ...     redis: Redis = setting("redis, , , Redis client", default_factory=Redis)
"""
from __future__ import annotations

import dataclasses
from typing import Any, Optional

from tagconf.core.constants import TAG_METADATA_KEY
from tagconf.core.schema.tag_parser import split_tag


def setting(tag: str, **kwargs: Any) -> Any:
    """
    Create a dataclass field carrying a tagconf metadata tag.

    The tag's segment count is checked immediately so a missing comma fails at
    class-definition time. The full parse, which needs the field's annotation,
    happens when the schema is first built.

    Args:
        tag: `"<key>, <default | required | ''>, <rules>, <description>"`.
        **kwargs: forwarded to `dataclasses.field`. Without `default` or
            `default_factory` the attribute defaults to None, so schema classes
            can always be instantiated without arguments.

    Raises:
        MalformedTagError: if the tag does not have four segments.
    """
    split_tag(tag)
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[TAG_METADATA_KEY] = tag
    if "default" not in kwargs and "default_factory" not in kwargs:
        kwargs["default"] = None
    return dataclasses.field(metadata=metadata, **kwargs)


def field_tag(f: dataclasses.Field) -> Optional[str]:
    """Return the raw tag stored on a dataclass field, if any."""
    return f.metadata.get(TAG_METADATA_KEY)
