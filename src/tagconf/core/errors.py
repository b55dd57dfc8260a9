#!/usr/bin/env python3
"""
Purpose:
    Defines the tagconf exception hierarchy.

    - SchemaError and subclasses flag schema bugs (bad tag, unsupported type,
      unknown rule). They abort an operation immediately.
    - FieldError and subclasses flag problems in a document. They are collected
      across all fields and raised together inside a ConfigError.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Sequence


def _dotted(path: Sequence[str]) -> str:
    return ".".join(path) if path else "<root>"


class TagconfError(Exception):
    """Base exception for all tagconf errors."""

    pass


# --- Structural (schema) errors --- #

class SchemaError(TagconfError):
    """The schema itself is wrong; fixing the document cannot help."""

    pass


class MalformedTagError(SchemaError):
    """A metadata tag cannot be parsed into a field descriptor."""

    def __init__(self, tag: str, reason: str, *, field: str | None = None) -> None:
        where = f" on field {field!r}" if field else ""
        super().__init__(f"Malformed tag {tag!r}{where}: {reason}")
        self.tag = tag
        self.reason = reason
        self.field = field


class UnsupportedTypeError(SchemaError):
    """A field's annotation has no representation in the document model."""

    def __init__(self, field: str, annotation: Any, owner: str | None = None) -> None:
        name = f"{owner}.{field}" if owner else field
        super().__init__(f"Field {name!r} has unsupported type {annotation!r}")
        self.field = field
        self.annotation = annotation
        self.owner = owner


class UnknownRuleError(SchemaError):
    """A tag references a rule that is not registered."""

    def __init__(self, name: str, available: Iterable[str] = (), *, path: Sequence[str] = ()) -> None:
        names = sorted(available)
        where = f" (referenced by {_dotted(path)!r})" if path else ""
        if names:
            message = f"Unknown rule {name!r}{where}. Registered rules: {', '.join(names)}"
        else:
            message = f"Unknown rule {name!r}{where}. No rules are registered."
        super().__init__(message)
        self.name = name
        self.path = tuple(path)


class InvalidDefaultError(SchemaError):
    """A declared default fails one of its own field's rules."""

    def __init__(self, path: Sequence[str], rule: str, value: Any) -> None:
        super().__init__(f"{_dotted(path)}: default {value!r} fails rule {rule!r}")
        self.path = tuple(path)
        self.rule = rule
        self.value = value


# --- Document content errors --- #

class FieldError(TagconfError):
    """
    A problem with one key of a document.

    `path` is the full tuple of document keys; `key` is its last element.
    """

    def __init__(self, path: Sequence[str], message: str) -> None:
        super().__init__(f"{_dotted(path)}: {message}")
        self.path = tuple(path)
        self.detail = message

    @property
    def key(self) -> str:
        return self.path[-1] if self.path else ""

    @property
    def dotted_path(self) -> str:
        return _dotted(self.path)


class TypeMismatchError(FieldError):
    """The document value's type disagrees with the field's declared type."""

    def __init__(self, path: Sequence[str], expected: str, found: str) -> None:
        super().__init__(path, f"expected {expected}, found {found}")
        self.expected = expected
        self.found = found


class MissingRequiredError(FieldError):
    """A required key is absent from the document."""

    def __init__(self, path: Sequence[str]) -> None:
        super().__init__(path, "required key is missing")


class ValidationError(FieldError):
    """A present value fails a named rule."""

    def __init__(self, path: Sequence[str], rule: str, value: Any) -> None:
        super().__init__(path, f"value {value!r} fails rule {rule!r}")
        self.rule = rule
        self.value = value


class UnknownKeyError(FieldError):
    """The document contains a key with no schema counterpart."""

    def __init__(self, path: Sequence[str]) -> None:
        super().__init__(path, "unknown key")


# --- Aggregates --- #

class ConfigError(TagconfError):
    """All document problems found during one load."""

    def __init__(self, errors: Iterable[FieldError]) -> None:
        self.errors: List[FieldError] = list(errors)
        count = len(self.errors)
        lines = [f"{count} configuration error{'s' if count != 1 else ''}:"]
        lines.extend(f"  - {e}" for e in self.errors)
        super().__init__("\n".join(lines))

    def of_type(self, kind: type[FieldError]) -> List[FieldError]:
        """Return the collected errors that are instances of `kind`."""
        return [e for e in self.errors if isinstance(e, kind)]

    def __iter__(self):
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)


class DocumentSyntaxError(TagconfError):
    """The document is not valid TOML."""

    def __init__(self, reason: str, source: str | None = None) -> None:
        where = f" in {source!r}" if source else ""
        super().__init__(f"Invalid TOML{where}: {reason}")
        self.reason = reason
        self.source = source
