#!/usr/bin/env python3
import json
from pathlib import Path
import pytest

from tagconf.core import utils


# --- Validation helpers --- #

@pytest.mark.parametrize("name,expected", [
    ("abc", True),
    ("_ok1", True),
    ("with-dash", True),
    ("1numeric", True),
    ("has space", False),
    ("dotted.key", False),
    ("", False),
])
def test_is_valid_key(name, expected):
    assert utils.is_valid_key(name) is expected


# --- merge_dicts --- #

def test_merge_dicts_recursive_override():
    base = {"a": 1, "nested": {"x": 1, "y": 2}, "keep": True}
    override = {"a": 2, "nested": {"y": 3, "z": 4}}
    merged = utils.merge_dicts(base, override)
    assert merged == {"a": 2, "nested": {"x": 1, "y": 3, "z": 4}, "keep": True}
    # inputs untouched
    assert base["nested"] == {"x": 1, "y": 2}


def test_merge_dicts_non_dict_replaces_dict():
    assert utils.merge_dicts({"a": {"x": 1}}, {"a": 5}) == {"a": 5}


# --- import_object --- #

def test_import_object_module_attribute():
    from tagconf.core.schema.field_type import FieldType
    assert utils.import_object("tagconf.core.schema.field_type:FieldType") is FieldType


def test_import_object_nested_attribute():
    from tagconf.core.schema.field_type import FieldType
    assert utils.import_object("tagconf.core.schema.field_type:FieldType.STRING") is FieldType.STRING


@pytest.mark.parametrize("target", ["no_colon", ":Attr", "module:"])
def test_import_object_requires_module_and_attribute(target):
    with pytest.raises(ValueError, match="expected 'module:Attribute'"):
        utils.import_object(target)


def test_import_object_missing_pieces():
    with pytest.raises(ImportError):
        utils.import_object("tagconf_no_such_module:X")
    with pytest.raises(AttributeError):
        utils.import_object("tagconf.core.utils:no_such_attr")


# --- load_json_file --- #

def test_load_json_file_missing_returns_empty(tmp_path: Path):
    assert utils.load_json_file(tmp_path / "missing.json") == {}


def test_load_json_file_reads_object(tmp_path: Path):
    p = tmp_path / "c.json"
    p.write_text(json.dumps({"unknown_keys": "warn"}), encoding="utf-8")
    assert utils.load_json_file(p) == {"unknown_keys": "warn"}


def test_load_json_file_invalid_raises(tmp_path: Path):
    p = tmp_path / "bad.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid JSON"):
        utils.load_json_file(p)
