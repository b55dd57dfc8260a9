#!/usr/bin/env python3
"""
Core constants used across tagconf.

- Tag grammar: segment count and the literal that marks a required field.
- Document layout: comment prefix and the text encoding of generated documents.
- Regular expressions: compiled patterns used by the tag parser and validators.
"""

import re
from typing import Final

# --- Tag grammar --- #

# Number of comma-separated segments in a metadata tag: key, default, rules, description
TAG_SEGMENTS: Final[int] = 4

# Literal placed in the default segment to mark a field as required
REQUIRED_TOKEN: Final[str] = "required"

# Metadata key under which setting() stores the raw tag on a dataclass field
TAG_METADATA_KEY: Final[str] = "tagconf"


# --- Document layout --- #

# Prefix used for generated comment lines and commented-out key lines
COMMENT_PREFIX: Final[str] = "# "

# Default text encoding for documents
DEFAULT_TEXT_ENCODING: Final[str] = "utf-8"

# Supported document file extensions
SUPPORTED_DOCUMENT_EXT: Final[frozenset[str]] = frozenset({".toml"})


# --- Regular Expressions --- #
# Matches TOML bare keys: letters, digits, underscores and dashes
KEY_ALLOWED_RE: re.Pattern[str] = re.compile(r"^[A-Za-z0-9_-]+$")

# Matches rule names: leading letter, then letters/digits/underscores/dashes
RULE_NAME_ALLOWED_RE: re.Pattern[str] = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")

# Matches characters a TOML comment cannot hold (control characters other than tab and line breaks)
COMMENT_FORBIDDEN_RE: re.Pattern[str] = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


# --- Runtime guard --- #
def validate_constants():
    """
    Ensure constants are valid at runtime.
    """
    if not KEY_ALLOWED_RE.fullmatch(REQUIRED_TOKEN):
        raise RuntimeError(f"REQUIRED_TOKEN must be a bare key, got {REQUIRED_TOKEN!r}")

validate_constants()
