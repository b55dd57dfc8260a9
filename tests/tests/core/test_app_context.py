#!/usr/bin/env python3
import logging
from dataclasses import FrozenInstanceError

import pytest

import tagconf.core.app_context as ac
from tagconf.core.document.options import UnknownKeyPolicy
from tagconf.core.rules.registry import RuleRegistry, rule_registry


def test_build_context_uses_load_config_when_config_missing(monkeypatch):
    cfg = {"unknown_keys": "warn", "fail_fast": True, "logging": {"level": "INFO"}}
    monkeypatch.setattr(ac, "load_config", lambda: cfg)

    ctx = ac.build_context()

    assert ctx.config is cfg
    assert ctx.options.unknown_keys is UnknownKeyPolicy.WARN
    assert ctx.options.fail_fast is True
    assert ctx.options.validate_defaults is False
    assert ctx.rules is rule_registry


def test_build_context_overrides(monkeypatch):
    monkeypatch.setattr(ac, "load_config", lambda: (_ for _ in ()).throw(AssertionError("should not be called")))
    reg = RuleRegistry()

    ctx = ac.build_context(config={"validate_defaults": True}, rules=reg)

    assert ctx.rules is reg
    assert ctx.options.validate_defaults is True
    assert ctx.options.unknown_keys is UnknownKeyPolicy.ERROR


def test_build_context_loads_builtin_rules(monkeypatch):
    ctx = ac.build_context(config={"logging": {"level": "WARNING"}})
    assert ctx.rules.has("netaddr")
    assert ctx.rules.has("dialstring")


def test_build_context_configures_logging(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))

    ac.build_context(config={"logging": {"level": "debug"}}, configure_logging=True)

    assert calls and calls[0]["level"] == "DEBUG"


def test_appcontext_is_frozen_dataclass():
    ctx = ac.build_context(config={"logging": {"level": "WARNING"}})
    with pytest.raises(FrozenInstanceError):
        ctx.config = {}
