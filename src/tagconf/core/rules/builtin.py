#!/usr/bin/env python3
"""
Purpose:
    Built-in rule catalog, registered into the process-wide registry on import.

    - nonempty    : string or sequence with at least one element/character
    - netaddr     : listen address "host:port"; host may be empty (":8804")
    - dialstring  : dial address "host:port"; host required
    - hostname    : RFC 1123 host name or IP address
    - port        : integer in [0, 65535]
    - positive    : number > 0
    - nonnegative : number >= 0
    - url         : http(s) URL with a host

    Address-like rules apply element-wise to sequences.
"""
from __future__ import annotations

import functools
import ipaddress
import re
from typing import Any, Callable
from urllib.parse import urlsplit

from tagconf.core.rules.registry import rule

_HOST_LABEL_RE: re.Pattern[str] = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")


def _each(fn: Callable[[Any], bool]) -> Callable[[Any], bool]:
    """Apply a scalar predicate to every element when given a sequence."""

    @functools.wraps(fn)
    def wrapper(value: Any) -> bool:
        if isinstance(value, list):
            return all(fn(v) for v in value)
        return fn(value)

    return wrapper


# --- Helpers --- #

def is_hostname(host: str) -> bool:
    """True for an IP address (v4/v6) or an RFC 1123 host name."""
    if not host:
        return False
    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        pass
    if len(host) > 253:
        return False
    return all(_HOST_LABEL_RE.fullmatch(label) for label in host.rstrip(".").split("."))


def split_host_port(addr: str) -> tuple[str, int]:
    """
    Split "host:port" (or "[v6]:port") into its parts.

    Raises:
        ValueError: if the port is missing, not numeric, or out of range.
    """
    if not isinstance(addr, str):
        raise TypeError(f"address must be a string, got {type(addr).__name__}")
    host, sep, port = addr.rpartition(":")
    if not sep:
        raise ValueError(f"missing port in address {addr!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
        ipaddress.IPv6Address(host)
    elif ":" in host:
        raise ValueError(f"too many colons in address {addr!r}")
    if not (port.isascii() and port.isdigit()) or not 0 <= int(port) <= 65535:
        raise ValueError(f"invalid port in address {addr!r}")
    return host, int(port)


# --- Rules --- #

@rule("nonempty")
def nonempty(value: Any) -> bool:
    """String or sequence with at least one element."""
    return len(value) > 0


@rule("netaddr")
@_each
def netaddr(value: Any) -> bool:
    """Listen address host:port; the host may be empty."""
    host, _ = split_host_port(value)
    return host == "" or is_hostname(host)


@rule("dialstring")
@_each
def dialstring(value: Any) -> bool:
    """Dial address host:port with a host."""
    host, _ = split_host_port(value)
    return is_hostname(host)


@rule("hostname")
@_each
def hostname(value: Any) -> bool:
    return isinstance(value, str) and is_hostname(value)


@rule("port")
@_each
def port(value: Any) -> bool:
    """Integer port in [0, 65535]."""
    return not isinstance(value, bool) and isinstance(value, int) and 0 <= value <= 65535


@rule("positive")
@_each
def positive(value: Any) -> bool:
    return not isinstance(value, bool) and value > 0


@rule("nonnegative")
@_each
def nonnegative(value: Any) -> bool:
    return not isinstance(value, bool) and value >= 0


@rule("url")
@_each
def url(value: Any) -> bool:
    """http(s) URL with a host."""
    if not isinstance(value, str):
        return False
    parts = urlsplit(value)
    return parts.scheme in {"http", "https"} and bool(parts.hostname)
