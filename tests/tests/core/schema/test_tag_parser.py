#!/usr/bin/env python3

import pytest

from tagconf.core.errors import MalformedTagError, SchemaError
from tagconf.core.schema.field_type import FieldType
from tagconf.core.schema.tag_parser import TagSegments, parse_tag, split_tag, untagged


# --- split_tag --- #

def test_split_tag_trims_segments():
    assert split_tag("listen, :8804, netaddr, The address to listen") == TagSegments(
        key="listen", default=":8804", rules="netaddr", description="The address to listen"
    )


def test_description_keeps_extra_commas():
    seg = split_tag("hosts, , nonempty, Hosts, in order, of preference")
    assert seg.description == "Hosts, in order, of preference"


def test_all_empty_segments_after_key():
    assert split_tag("name, , , ") == TagSegments("name", "", "", "")


@pytest.mark.parametrize("tag, found", [
    ("listen", 1),
    ("listen, :8804", 2),
    ("listen, :8804, netaddr", 3),
])
def test_too_few_segments_raises(tag, found):
    with pytest.raises(MalformedTagError, match=f"expected 4 comma-separated segments, found {found}"):
        split_tag(tag)


def test_non_string_tag_raises():
    with pytest.raises(MalformedTagError, match="tag must be a string"):
        split_tag(42)  # type: ignore[arg-type]


# --- parse_tag: segment 2 --- #

def test_parse_tag_with_default():
    fd = parse_tag("listen, :8804, netaddr, The address to listen")
    assert fd.key == "listen"
    assert fd.required is False
    assert fd.default == ":8804"
    assert fd.default_value == ":8804"
    assert fd.rules == ("netaddr",)
    assert fd.description == "The address to listen"


def test_parse_tag_required_sequence():
    fd = parse_tag(
        "cluster, required, dialstring, Redis cluster nodes",
        FieldType.SEQUENCE,
        FieldType.STRING,
    )
    assert fd.required is True
    assert fd.default is None
    assert fd.type_name == "sequence<string>"


def test_required_token_is_case_sensitive():
    fd = parse_tag("mode, Required, , ")
    assert fd.required is False
    assert fd.default == "Required"


def test_empty_default_segment_means_optional_zero():
    fd = parse_tag("count, , positive, ", FieldType.INTEGER)
    assert fd.required is False
    assert fd.has_default is False
    assert fd.initial_value() == 0


def test_multiple_rules_in_order():
    fd = parse_tag("port, 80, port positive, ", FieldType.INTEGER)
    assert fd.rules == ("port", "positive")
    assert fd.default_value == 80


# --- parse_tag: failures --- #

def test_bad_key_names_the_field():
    with pytest.raises(MalformedTagError) as ei:
        parse_tag("bad key, , , ", field="Config.listen")
    msg = str(ei.value)
    assert "on field 'Config.listen'" in msg
    assert "must match the pattern" in msg
    assert ei.value.field == "Config.listen"


def test_empty_key_for_leaf_raises():
    with pytest.raises(MalformedTagError, match="The key segment is empty"):
        parse_tag(" , , , ")


def test_uncoercible_default_raises():
    with pytest.raises(MalformedTagError, match="'eighty' is not an integer literal"):
        parse_tag("port, eighty, , ", FieldType.INTEGER)


def test_section_with_rules_raises():
    with pytest.raises(MalformedTagError, match="section fields cannot"):
        parse_tag("redis, , nonempty, ", FieldType.SECTION)


def test_control_character_in_description_raises():
    with pytest.raises(MalformedTagError, match="control characters"):
        parse_tag("name, , , Escape \x1b[31m")


def test_malformed_tag_is_a_schema_error():
    with pytest.raises(SchemaError):
        parse_tag("only, two")


# --- untagged --- #

def test_untagged_uses_attribute_name():
    tag = untagged("timeout")
    assert tag == "timeout, , , "
    fd = parse_tag(tag, FieldType.FLOAT)
    assert fd.key == "timeout"
    assert fd.rules == () and fd.description == "" and not fd.required
