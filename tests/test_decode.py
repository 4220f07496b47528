import logging
import struct

import pytest
from google.protobuf import any_pb2, wrappers_pb2

import rawproto
from rawproto import DecodedField, LengthDelimitedValue, decode
from rawproto.errors import DepthExceeded, UnimplementedWireType
from tests.util import len_delim, tag


@pytest.mark.parametrize(
    ["message", "wire_type", "expected"],
    [
        (wrappers_pb2.UInt64Value(value=300), 0, 300),
        (wrappers_pb2.UInt32Value(value=1), 0, 1),
        (wrappers_pb2.BoolValue(value=True), 0, 1),
        (wrappers_pb2.DoubleValue(value=3.25), 1, 3.25),
        (wrappers_pb2.FloatValue(value=1.5), 5, 1.5),
    ],
)
def test_decode_scalar_wrappers(message, wire_type, expected):
    assert decode(message.SerializeToString()) == [
        DecodedField(number=1, wire_type=wire_type, value=expected)
    ]


def test_decode_string():
    data = wrappers_pb2.StringValue(value="hello").SerializeToString()
    assert data == b"\x0a\x05hello"

    [field] = decode(data)
    assert field.number == 1
    assert field.wire_type_description.startswith("Length-delimited")
    assert field.value == [LengthDelimitedValue(data=b"hello", text="hello")]


def test_decode_embedded_message():
    inner = wrappers_pb2.UInt64Value(value=1).SerializeToString()
    data = any_pb2.Any(type_url="a", value=inner).SerializeToString()

    type_url, value = decode(data)
    assert type_url.number == 1
    assert type_url.value == [LengthDelimitedValue(data=b"a", text="a")]
    assert value.number == 2
    assert value.value[0].nested == [
        DecodedField(number=1, wire_type=0, value=1, depth=1)
    ]


def test_decode_several_levels():
    inner = tag(1, 0) + b"\x01"
    data = len_delim(1, len_delim(1, inner))

    [outer] = decode(data)
    [middle] = outer.value[0].nested
    [leaf] = middle.value[0].nested
    assert (middle.depth, leaf.depth) == (1, 2)
    assert leaf.value == 1


def test_depth_limit_leaves_value_opaque(caplog):
    data = len_delim(1, len_delim(1, tag(1, 0) + b"\x01"))

    with caplog.at_level(logging.WARNING, logger="rawproto"):
        [outer] = decode(data, max_depth=1)

    [middle] = outer.value[0].nested
    assert middle.value[0].data == b"\x08\x01"
    assert middle.value[0].nested is None
    assert "exceeds 1" in caplog.text


def test_depth_exceeded_on_direct_call():
    with pytest.raises(DepthExceeded) as exc_info:
        decode(b"\x08\x01", depth=2, max_depth=1)
    assert exc_info.value.max_depth == 1


def test_start_group_only_fails_at_top_level():
    [field] = decode(len_delim(1, b"\x0b\x01"))
    assert field.value[0].nested is None

    with pytest.raises(UnimplementedWireType):
        decode(b"\x0b\x01")


def test_mixed_message():
    data = (
        tag(1, 0)
        + b"\x96\x01"
        + tag(2, 1)
        + struct.pack("<d", -1.0)
        + len_delim(3, b"")
        + tag(4, 5)
        + struct.pack("<f", 0.5)
    )
    assert [(f.number, f.wire_type) for f in decode(data)] == [
        (1, 0),
        (2, 1),
        (3, 2),
        (4, 5),
    ]
    assert [f.value for f in decode(data)] == [
        150,
        -1.0,
        [LengthDelimitedValue(data=b"", text="")],
        0.5,
    ]


def test_decode_is_idempotent(repeat):
    data = any_pb2.Any(
        type_url="type.example.com/Thing",
        value=wrappers_pb2.StringValue(value="hi there").SerializeToString(),
    ).SerializeToString()
    first = decode(data)
    for _ in range(repeat):
        assert decode(data) == first


def test_wire_type_description():
    assert rawproto.wire_type_description(3) == "Start group groups (deprecated)"
    assert rawproto.wire_type_description(rawproto.WireType.FIXED_32) == (
        "32-bit (fixed32, sfixed32, float)"
    )
    assert rawproto.wire_type_description(7) is None

    with pytest.raises(TypeError):
        rawproto.const.WIRE_TYPE_DESCRIPTIONS[7] = "nope"
