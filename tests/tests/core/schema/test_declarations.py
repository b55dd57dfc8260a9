#!/usr/bin/env python3

import dataclasses
from dataclasses import dataclass, field

import pytest

from tagconf.core.constants import TAG_METADATA_KEY
from tagconf.core.errors import MalformedTagError
from tagconf.core.schema.declarations import field_tag, setting


@dataclass
class _Inner:
    name: str = setting("name, , , ")


@dataclass
class _Declared:
    listen: str = setting("listen, :8804, netaddr, The address to listen")
    retries: int = setting("retries, 3, , ", default=3)
    inner: _Inner = setting("inner, , , ", default_factory=_Inner)
    plain: str = field(default="x")


def test_setting_stores_tag_in_metadata():
    fields = {f.name: f for f in dataclasses.fields(_Declared)}
    assert fields["listen"].metadata[TAG_METADATA_KEY] == "listen, :8804, netaddr, The address to listen"
    assert field_tag(fields["listen"]) == "listen, :8804, netaddr, The address to listen"
    assert field_tag(fields["plain"]) is None


def test_setting_defaults_attribute_to_none():
    obj = _Declared()
    assert obj.listen is None
    assert obj.retries == 3
    assert isinstance(obj.inner, _Inner)


def test_setting_merges_user_metadata():
    f = setting("k, , , ", metadata={"other": 1})
    assert f.metadata["other"] == 1
    assert f.metadata[TAG_METADATA_KEY] == "k, , , "


def test_setting_rejects_short_tag_at_declaration():
    with pytest.raises(MalformedTagError):
        setting("listen, :8804")
