#!/usr/bin/env python3
import pytest
from pydantic import ValidationError

from tagconf.core.document.options import LoadOptions, UnknownKeyPolicy


def test_defaults():
    opts = LoadOptions()
    assert opts.unknown_keys is UnknownKeyPolicy.ERROR
    assert opts.validate_defaults is False
    assert opts.fail_fast is False


@pytest.mark.parametrize("raw, expected", [
    ("error", UnknownKeyPolicy.ERROR),
    (" Warn ", UnknownKeyPolicy.WARN),
    ("IGNORE", UnknownKeyPolicy.IGNORE),
    (UnknownKeyPolicy.WARN, UnknownKeyPolicy.WARN),
])
def test_policy_parsing(raw, expected):
    assert LoadOptions(unknown_keys=raw).unknown_keys is expected


def test_unknown_policy_raises():
    with pytest.raises(ValidationError):
        LoadOptions(unknown_keys="explode")


def test_extra_options_forbidden():
    with pytest.raises(ValidationError):
        LoadOptions(strict=True)


def test_options_are_frozen():
    opts = LoadOptions()
    with pytest.raises(ValidationError):
        opts.fail_fast = True


def test_from_config_ignores_unrelated_keys():
    opts = LoadOptions.from_config({
        "unknown_keys": "warn",
        "validate_defaults": True,
        "logging": {"level": "DEBUG"},
    })
    assert opts.unknown_keys is UnknownKeyPolicy.WARN
    assert opts.validate_defaults is True
    assert opts.fail_fast is False
