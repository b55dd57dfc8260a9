#!/usr/bin/env python3
"""
Purpose:
    Resolves a `module:Class` command line argument to a schema class.
"""

import os
import sys
from typing import Any

from tagconf.core.utils import import_object


def load_target(target: str) -> Any:
    """
    Import the schema class named by `target`.

    The current working directory is importable so that project-local modules
    resolve the same way they do under `python -m`.

    Raises:
        ValueError: if `target` is not of the form 'module:Class'.
        ImportError / AttributeError: if it cannot be found.
        TypeError: if it names something other than a class.
    """
    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)
    obj = import_object(target)
    if not isinstance(obj, type):
        raise TypeError(f"{target!r} is not a class")
    return obj
