#!/usr/bin/env python3

import pytest

from tagconf.core.rules import builtin
from tagconf.core.rules.registry import rule_registry


def _check(name, value):
    return rule_registry.validate(name, value)


# --- Address rules --- #

@pytest.mark.parametrize("value, ok", [
    (":8804", True),
    ("localhost:80", True),
    ("127.0.0.1:6379", True),
    ("[::1]:443", True),
    ("example.com:0", True),
    ("not-an-address", False),
    ("host:99999", False),
    ("host:http", False),
    ("host:\u0668\u0660", False),
    ("host:\u00b2", False),
    ("a:b:c", False),
    ("-bad-.com:80", False),
    (8804, False),
])
def test_netaddr(value, ok):
    assert _check("netaddr", value) is ok


@pytest.mark.parametrize("value, ok", [
    ("127.0.0.1:6379", True),
    ("redis.internal:6380", True),
    (":6379", False),
    ("127.0.0.1", False),
])
def test_dialstring(value, ok):
    assert _check("dialstring", value) is ok


def test_address_rules_apply_to_each_element():
    assert _check("dialstring", ["127.0.0.1:6379", "127.0.0.1:6380"])
    assert not _check("dialstring", ["127.0.0.1:6379", "nowhere"])
    # an empty sequence has no failing element
    assert _check("dialstring", [])


@pytest.mark.parametrize("value, ok", [
    ("example.com", True),
    ("localhost", True),
    ("10.0.0.1", True),
    ("::1", True),
    ("", False),
    ("-bad.com", False),
    ("under_score.com", False),
    (5, False),
])
def test_hostname(value, ok):
    assert _check("hostname", value) is ok


# --- Numeric rules --- #

@pytest.mark.parametrize("value, ok", [
    (0, True),
    (80, True),
    (65535, True),
    (65536, False),
    (-1, False),
    (True, False),
    ("80", False),
    (80.0, False),
])
def test_port(value, ok):
    assert _check("port", value) is ok


@pytest.mark.parametrize("name, value, ok", [
    ("positive", 1, True),
    ("positive", 0.5, True),
    ("positive", 0, False),
    ("positive", -3, False),
    ("positive", True, False),
    ("positive", "1", False),
    ("nonnegative", 0, True),
    ("nonnegative", 0.0, True),
    ("nonnegative", -0.1, False),
])
def test_sign_rules(name, value, ok):
    assert _check(name, value) is ok


# --- Text rules --- #

@pytest.mark.parametrize("value, ok", [
    ("a", True),
    (["x"], True),
    ("", False),
    ([], False),
    (5, False),
])
def test_nonempty(value, ok):
    assert _check("nonempty", value) is ok


@pytest.mark.parametrize("value, ok", [
    ("https://example.com/path", True),
    ("http://localhost:8080", True),
    ("ftp://example.com", False),
    ("http://", False),
    ("example.com", False),
    (42, False),
])
def test_url(value, ok):
    assert _check("url", value) is ok


# --- Helpers --- #

def test_split_host_port():
    assert builtin.split_host_port("h:1") == ("h", 1)
    assert builtin.split_host_port(":8804") == ("", 8804)
    assert builtin.split_host_port("[::1]:80") == ("::1", 80)
    with pytest.raises(ValueError, match="missing port"):
        builtin.split_host_port("nohost")


def test_split_host_port_rejects_non_ascii_digits():
    with pytest.raises(ValueError, match="invalid port"):
        builtin.split_host_port("host:٨٠")
