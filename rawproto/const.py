from types import MappingProxyType
from typing import Mapping


# Wire types
# https://developers.google.com/protocol-buffers/docs/encoding#structure
WIRE_VARINT = 0
WIRE_FIXED_64 = 1
WIRE_LEN_DELIM = 2
WIRE_START_GROUP = 3
WIRE_END_GROUP = 4
WIRE_FIXED_32 = 5

# Human readable wire type names, as printed next to each field.
WIRE_TYPE_DESCRIPTIONS: Mapping[int, str] = MappingProxyType(
    {
        WIRE_VARINT: "Varint (int32, int64, uint32, uint64, sint32, sint64, bool, enum)",
        WIRE_FIXED_64: "64-bit (fixed64, sfixed64, double)",
        WIRE_LEN_DELIM: "Length-delimited (string, bytes, embedded messages, packed repeated fields)",
        WIRE_START_GROUP: "Start group groups (deprecated)",
        WIRE_END_GROUP: "End group groups  (deprecated)",
        WIRE_FIXED_32: "32-bit (fixed32, sfixed32, float)",
    }
)

# Payload widths of the fixed size wire types.
FIXED_WIDTHS: Mapping[int, int] = MappingProxyType({WIRE_FIXED_64: 8, WIRE_FIXED_32: 4})

# Little-endian struct formats of the fixed size wire types.
FIXED_FORMATS: Mapping[int, str] = MappingProxyType({WIRE_FIXED_64: "<d", WIRE_FIXED_32: "<f"})

# How many levels of speculative nested decoding are allowed before giving up.
DEFAULT_MAX_DEPTH = 100

# Spaces per nesting level in text output.
INDENT_WIDTH = 4
