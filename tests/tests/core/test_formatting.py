#!/usr/bin/env python3
import pytest
from pydantic import ValidationError

from tagconf.core.errors import (
    ConfigError,
    MissingRequiredError,
    TypeMismatchError,
    ValidationError as RuleValidationError,
)
from tagconf.core.formatting import format_config_error, format_pydantic_errors_simple, _format_error_loc
from tagconf.core.schema.field_descriptor import FieldDescriptor


# --- Unit tests for _format_error_loc --- #

@pytest.mark.parametrize("loc,expected", [
    (("rules", 1), "rules[1]"),
    ((0, "items"), "[0].items"),
    ((), "<root>"),
    ((0, 1, "x"), "[0][1].x"),
    (("a", 3, 2, "b"), "a[3][2].b"),
])
def test_format_error_loc(loc, expected):
    assert _format_error_loc(loc) == expected


# --- format_pydantic_errors_simple: happy path with .errors() --- #

def test_format_pydantic_errors_simple_with_pydantic_like_errors():
    class FakeValidationError(Exception):
        def errors(self):
            return [
                {"loc": ("rules", 1), "msg": "Input should be a valid string"},
                {"loc": (), "msg": "Invalid payload"},
            ]

    msgs = format_pydantic_errors_simple(FakeValidationError("ignored string"))
    assert msgs == [
        "rules[1]: Input should be a valid string",
        "<root>: Invalid payload",
    ]


def test_format_pydantic_errors_simple_with_real_model_error():
    with pytest.raises(ValidationError) as ei:
        FieldDescriptor(key="bad key")
    msgs = format_pydantic_errors_simple(ei.value)
    assert len(msgs) == 1
    assert msgs[0].startswith("<root>: key 'bad key' must match the pattern")


# --- format_pydantic_errors_simple: fallbacks --- #

def test_format_pydantic_errors_simple_without_errors_attr_uses_str_first_line():
    exc = ValueError("Boom!\nDetails that should be ignored")
    assert format_pydantic_errors_simple(exc) == ["Boom!"]


def test_format_pydantic_errors_simple_when_errors_method_raises_uses_str_first_line():
    class Exploding(Exception):
        def errors(self, required_arg):
            return []

    exc = Exploding("Top line only\nand the rest")
    assert format_pydantic_errors_simple(exc) == ["Top line only"]


# --- format_config_error --- #

def test_format_config_error_one_line_per_problem():
    err = ConfigError([
        MissingRequiredError(("redis", "cluster")),
        RuleValidationError(("listen",), "netaddr", "nowhere"),
        TypeMismatchError(("port",), "integer", 'string "80"'),
    ])
    assert format_config_error(err) == [
        "redis.cluster: required key is missing",
        "listen: value 'nowhere' fails rule 'netaddr'",
        'port: expected integer, found string "80"',
    ]


def test_format_pydantic_errors_simple_without_location():
    with pytest.raises(ValidationError) as ei:
        FieldDescriptor(key="x", rules=["1x"])
    assert format_pydantic_errors_simple(ei.value, include_loc=False) == ["invalid rule name(s): ['1x']"]
