#!/usr/bin/env python3
"""
Purpose:
    Builds an explicit, cached tree of SchemaNode objects from a dataclass
    schema, and walks that tree depth-first (optionally alongside a value
    tree), pairing every field with its parsed FieldDescriptor.
"""
from __future__ import annotations

import dataclasses
import logging
import sys
import threading
import typing
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from tagconf.core.errors import MalformedTagError, UnsupportedTypeError
from tagconf.core.schema.declarations import field_tag
from tagconf.core.schema.field_descriptor import FieldDescriptor
from tagconf.core.schema.field_type import FieldType
from tagconf.core.schema.tag_parser import parse_tag, untagged

logger = logging.getLogger(__name__)

__all__ = [
    "SchemaNode",
    "ValueHandle",
    "WalkEntry",
    "build_schema",
    "clear_schema_cache",
    "new_instance",
    "resolve_schema",
    "walk",
]


# --- Data model --- #

@dataclass(frozen=True)
class SchemaNode:
    """
    One node of a built schema.

    - name: dataclass attribute name ("" for the root)
    - descriptor: parsed tag (sections have field_type SECTION)
    - model: dataclass type for sections, None for leaves
    - children: child nodes in declaration order (sections only)
    - init: whether the attribute is an `__init__` parameter of its owner
    """
    name: str
    descriptor: FieldDescriptor
    model: Optional[type] = None
    children: Tuple["SchemaNode", ...] = ()
    init: bool = True

    @property
    def key(self) -> str:
        """Document key; sections without a tag key fall back to the attribute name."""
        return self.descriptor.key or self.name

    @property
    def is_section(self) -> bool:
        return self.descriptor.is_section

    def child(self, key: str) -> Optional["SchemaNode"]:
        """Child node owning document key `key`, or None."""
        for c in self.children:
            if c.key == key:
                return c
        return None

    def leaves(self) -> List["SchemaNode"]:
        return [c for c in self.children if not c.is_section]

    def sections(self) -> List["SchemaNode"]:
        return [c for c in self.children if c.is_section]


@dataclass(frozen=True)
class ValueHandle:
    """Reads and writes one attribute of one object in a value tree."""
    owner: Any
    attr: str

    def get(self) -> Any:
        return getattr(self.owner, self.attr)

    def set(self, value: Any) -> None:
        setattr(self.owner, self.attr, value)


class WalkEntry(typing.NamedTuple):
    """One step of a walk: document path, descriptor, node, and value handle (or None)."""
    path: Tuple[str, ...]
    descriptor: FieldDescriptor
    node: SchemaNode
    handle: Optional[ValueHandle]


# --- Schema cache --- #

_SCHEMA_CACHE: Dict[type, SchemaNode] = {}
_SCHEMA_LOCK = threading.Lock()


def build_schema(cls: type) -> SchemaNode:
    """
    Build (or fetch from cache) the SchemaNode tree for a dataclass schema.

    Every tag is parsed exactly once per class; the tree never changes after
    it is built.

    Raises:
        UnsupportedTypeError: if `cls` (or a nested section) is not a mutable
            dataclass, or a field's annotation cannot be mapped to a FieldType.
        MalformedTagError: if a tag is malformed or sibling keys collide.
    """
    with _SCHEMA_LOCK:
        cached = _SCHEMA_CACHE.get(cls)
    if cached is not None:
        return cached

    _require_schema_class(cls, field=cls.__name__ if isinstance(cls, type) else repr(cls))
    root = SchemaNode(
        name="",
        descriptor=FieldDescriptor(field_type=FieldType.SECTION),
        model=cls,
        children=_build_children(cls, stack=(cls,)),
    )
    logger.debug(f"Built schema for {cls.__qualname__} ({len(root.children)} top-level fields)")

    with _SCHEMA_LOCK:
        return _SCHEMA_CACHE.setdefault(cls, root)


def clear_schema_cache() -> None:
    """Drop every cached schema tree (tests and reloaded modules)."""
    with _SCHEMA_LOCK:
        _SCHEMA_CACHE.clear()


def resolve_schema(schema: Any) -> SchemaNode:
    """Accept a SchemaNode, a dataclass type, or an instance of one."""
    if isinstance(schema, SchemaNode):
        return schema
    if isinstance(schema, type):
        return build_schema(schema)
    return build_schema(type(schema))


# --- Walking --- #

def walk(schema: Any, instance: Any = None) -> Iterator[WalkEntry]:
    """
    Depth-first traversal in declaration order.

    Sections are yielded before their children; child paths are scoped under
    the section key. When `instance` is given, each entry carries a
    ValueHandle, and section attributes that do not hold an instance of their
    dataclass are replaced by a fresh zero-valued one so children can be
    filled in place.
    """
    root = resolve_schema(schema)
    if instance is not None and root.model is not None and not isinstance(instance, root.model):
        raise TypeError(f"Expected an instance of {root.model.__qualname__}, got {type(instance).__qualname__}")
    yield from _walk(root, (), instance)


def _walk(node: SchemaNode, prefix: Tuple[str, ...], owner: Any) -> Iterator[WalkEntry]:
    for child in node.children:
        path = prefix + (child.key,)
        handle = ValueHandle(owner, child.name) if owner is not None else None
        yield WalkEntry(path, child.descriptor, child, handle)
        if child.is_section:
            yield from _walk(child, path, _ensure_section(handle, child))


def _ensure_section(handle: Optional[ValueHandle], node: SchemaNode) -> Any:
    if handle is None:
        return None
    current = handle.get()
    if not isinstance(current, node.model):  # type: ignore[arg-type]
        current = new_instance(node)
        handle.set(current)
    return current


# --- Value trees --- #

def new_instance(schema: Any, *, defaults: bool = False) -> Any:
    """
    Build a value tree for a schema: zero values everywhere, or declared
    defaults where present when `defaults=True`.
    """
    node = resolve_schema(schema)
    kwargs: Dict[str, Any] = {}
    late: Dict[str, Any] = {}
    for child in node.children:
        if child.is_section:
            value = new_instance(child, defaults=defaults)
        elif defaults:
            value = child.descriptor.initial_value()
        else:
            value = child.descriptor.zero()
        (kwargs if child.init else late)[child.name] = value

    obj = node.model(**kwargs)  # type: ignore[misc]
    for name, value in late.items():
        setattr(obj, name, value)
    return obj


# --- Build Helpers --- #

def _require_schema_class(cls: Any, *, field: str, owner: Optional[str] = None) -> None:
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise UnsupportedTypeError(field, cls, owner)
    if cls.__dataclass_params__.frozen:  # type: ignore[attr-defined]
        # the loader fills value trees in place
        raise UnsupportedTypeError(field, f"frozen dataclass {cls.__qualname__}", owner)


def _resolve_annotations(cls: type) -> Dict[str, Any]:
    """
    Resolve field annotations, string annotations included.

    Section classes defined inside a function are not in the module namespace;
    they are found through the `default_factory` of the fields that hold them.
    A field whose annotation still does not resolve keeps the raw string, so
    only that field is rejected by `_classify`.
    """
    localns = _local_namespace(cls)
    try:
        return typing.get_type_hints(cls, localns=localns)
    except NameError:
        pass

    module = sys.modules.get(cls.__module__)
    globalns: Dict[str, Any] = dict(vars(module)) if module is not None else {}
    return {f.name: _eval_annotation(f.type, globalns, localns) for f in dataclasses.fields(cls)}


def _local_namespace(cls: type) -> Dict[str, Any]:
    ns: Dict[str, Any] = {cls.__name__: cls}
    for f in dataclasses.fields(cls):
        if isinstance(f.default_factory, type):
            ns.setdefault(f.default_factory.__name__, f.default_factory)
    return ns


def _eval_annotation(annotation: Any, globalns: Dict[str, Any], localns: Dict[str, Any]) -> Any:
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, globalns, localns)  # noqa: S307 (same evaluation typing.get_type_hints performs)
    except NameError:
        return annotation


def _build_children(cls: type, stack: Tuple[type, ...]) -> Tuple[SchemaNode, ...]:
    hints = _resolve_annotations(cls)
    nodes: List[SchemaNode] = []
    for f in dataclasses.fields(cls):
        annotation = hints.get(f.name, f.type)
        field_type, item_type, model = _classify(annotation, f.name, cls)
        tag = field_tag(f) or untagged(f.name)
        descriptor = parse_tag(tag, field_type, item_type, field=f"{cls.__qualname__}.{f.name}")

        children: Tuple[SchemaNode, ...] = ()
        if model is not None:
            if model in stack:
                raise UnsupportedTypeError(f.name, f"recursive section {model.__qualname__}", cls.__qualname__)
            children = _build_children(model, stack + (model,))

        nodes.append(SchemaNode(name=f.name, descriptor=descriptor, model=model, children=children, init=f.init))

    _check_unique_keys(cls, nodes)
    return tuple(nodes)


def _classify(annotation: Any, name: str, owner: type) -> Tuple[FieldType, Optional[FieldType], Optional[type]]:
    """Map an annotation to (field_type, item_type, section model)."""
    if isinstance(annotation, str):
        raise UnsupportedTypeError(name, f"unresolved annotation {annotation!r}", owner.__qualname__)

    scalar = FieldType.from_python_type(annotation)
    if scalar != FieldType.INVALID:
        return scalar, None, None

    if typing.get_origin(annotation) is list:
        args = typing.get_args(annotation)
        item = FieldType.from_python_type(args[0]) if len(args) == 1 else FieldType.INVALID
        if item == FieldType.INVALID:
            raise UnsupportedTypeError(name, annotation, owner.__qualname__)
        return FieldType.SEQUENCE, item, None

    if isinstance(annotation, type) and dataclasses.is_dataclass(annotation):
        _require_schema_class(annotation, field=name, owner=owner.__qualname__)
        return FieldType.SECTION, None, annotation

    raise UnsupportedTypeError(name, annotation, owner.__qualname__)


def _check_unique_keys(cls: type, nodes: List[SchemaNode]) -> None:
    counts = Counter(n.key for n in nodes)
    dups = sorted(k for k, c in counts.items() if c > 1)
    if dups:
        tags = [field_tag(f) or untagged(f.name) for f in dataclasses.fields(cls)]
        raise MalformedTagError(
            " | ".join(t for t, n in zip(tags, nodes) if n.key in dups),
            f"duplicate key(s) among siblings of {cls.__qualname__}: {', '.join(dups)}",
        )
