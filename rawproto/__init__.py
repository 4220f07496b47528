import dataclasses
import enum
import logging
import struct
from base64 import b64encode
from typing import Any, Dict, List, Optional, Union

import stringcase

from .const import (
    DEFAULT_MAX_DEPTH,
    FIXED_FORMATS,
    FIXED_WIDTHS,
    WIRE_END_GROUP,
    WIRE_FIXED_32,
    WIRE_FIXED_64,
    WIRE_LEN_DELIM,
    WIRE_START_GROUP,
    WIRE_TYPE_DESCRIPTIONS,
    WIRE_VARINT,
)
from .errors import DecodeError, DepthExceeded, MalformedFraming, UnimplementedWireType

__version__ = "0.1.0"

log = logging.getLogger(__name__)


class WireType(enum.IntEnum):
    VARINT = WIRE_VARINT
    FIXED_64 = WIRE_FIXED_64
    LEN_DELIM = WIRE_LEN_DELIM
    START_GROUP = WIRE_START_GROUP
    END_GROUP = WIRE_END_GROUP
    FIXED_32 = WIRE_FIXED_32


class Casing(enum.Enum):
    """Casing constants for serialization."""

    CAMEL = "camelcase"
    SNAKE = "snakecase"

    def apply(self, value: str) -> str:
        return getattr(stringcase, self.value)(value)


def wire_type_description(wire_type: int) -> Optional[str]:
    """Returns the human readable name of a wire type, or None if unknown."""
    return WIRE_TYPE_DESCRIPTIONS.get(wire_type)


@dataclasses.dataclass(frozen=True)
class RawField:
    """
    A single framed record. For length-delimited fields the payload still
    starts with the one byte length prefix.
    """

    wire_type: int
    number: int
    payload: bytes


@dataclasses.dataclass(frozen=True)
class LengthDelimitedValue:
    data: bytes
    # Strict UTF-8 decode of `data`, if it is valid UTF-8.
    text: Optional[str] = None
    # Set only when `data` also parsed as a message with at least one field.
    nested: Optional[List["DecodedField"]] = None

    @property
    def display_text(self) -> str:
        if self.text is not None:
            return self.text
        return self.data.decode("utf-8", errors="replace")

    def to_dict(self, casing: Casing = Casing.CAMEL) -> Dict[str, Any]:
        output: Dict[str, Any] = {"data": b64encode(self.data).decode("utf8")}
        if self.text is not None:
            output["text"] = self.text
        if self.nested is not None:
            output["nested"] = [field.to_dict(casing) for field in self.nested]
        return {casing.apply(key): value for key, value in output.items()}


DecodedValue = Union[int, float, List[LengthDelimitedValue]]


@dataclasses.dataclass(frozen=True)
class DecodedField:
    number: int
    wire_type: int
    value: DecodedValue
    depth: int = 0

    @property
    def wire_type_description(self) -> Optional[str]:
        return wire_type_description(self.wire_type)

    def to_dict(self, casing: Casing = Casing.CAMEL) -> Dict[str, Any]:
        """
        Returns a dict representation of this field suitable for JSON output.
        Length-delimited values become a list of dicts with base64 `data`.
        """
        value: Any = self.value
        if self.wire_type == WIRE_LEN_DELIM:
            value = [v.to_dict(casing) for v in self.value]
        output = {
            "field_number": self.number,
            "wire_type": self.wire_type,
            "wire_type_name": self.wire_type_description,
            "value": value,
        }
        return {casing.apply(key): value for key, value in output.items()}


class WireScanner:
    """
    Byte at a time framing state machine. Feed it bytes with `feed`, which
    returns a `RawField` whenever the current frame is complete.

    Only single byte tags and single byte length prefixes are understood.
    """

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.expecting_tag = True
        self.wire_type: Optional[int] = None
        self.number: Optional[int] = None
        self.frame = bytearray()

    @property
    def pending(self) -> int:
        """Number of bytes (tag included) of an incomplete frame."""
        if self.expecting_tag:
            return 0
        return len(self.frame) + 1

    def feed(self, byte: int) -> Optional[RawField]:
        if self.expecting_tag:
            self.wire_type = byte & 0x7
            self.number = byte >> 3
            self.frame.clear()
            self.expecting_tag = False
            return None

        self.frame.append(byte)
        if not self._frame_complete(byte):
            return None

        field = RawField(
            wire_type=self.wire_type, number=self.number, payload=bytes(self.frame)
        )
        self.reset()
        return field

    def _frame_complete(self, byte: int) -> bool:
        wire_type = self.wire_type
        if wire_type == WIRE_VARINT:
            return not (byte & 0x80)
        elif wire_type in FIXED_WIDTHS:
            return len(self.frame) == FIXED_WIDTHS[wire_type]
        elif wire_type == WIRE_LEN_DELIM:
            length = self.frame[0]
            return length == 0 or len(self.frame) - 1 == length
        raise UnimplementedWireType(wire_type)


def scan(data: bytes) -> List[RawField]:
    """
    Split a flat byte buffer into raw field records. A trailing incomplete
    frame is dropped without error.
    """
    scanner = WireScanner()
    fields = []
    for byte in data:
        field = scanner.feed(byte)
        if field is not None:
            fields.append(field)

    if scanner.pending:
        log.debug(
            "Dropping %d trailing bytes of an incomplete field %s",
            scanner.pending,
            scanner.number,
        )
    return fields


def decode_varint(payload: bytes) -> int:
    """
    Decode an unsigned base-128 varint. Bytes after the first one with a
    clear continuation bit are ignored. No zig-zag decoding is applied.
    """
    groups = []
    for b in payload:
        groups.append(b & 0x7F)
        if not (b & 0x80):
            break

    value = 0
    for group in reversed(groups):
        value = (value << 7) | group
    return value


def decode_fixed(wire_type: int, payload: bytes) -> float:
    """Reinterpret a fixed32/fixed64 payload as a little-endian float/double."""
    width = FIXED_WIDTHS[wire_type]
    if len(payload) != width:
        raise MalformedFraming(
            f"Expected {width} bytes for wire type {wire_type}, got {len(payload)}"
        )
    return struct.unpack(FIXED_FORMATS[wire_type], payload)[0]


def split_length_delimited(payload: bytes) -> List[bytes]:
    """
    Split a length-delimited payload into its `(length byte, value)` records.
    """
    values = []
    i = 0
    while i < len(payload):
        length = payload[i]
        end = i + 1 + length
        if end > len(payload):
            raise MalformedFraming(
                f"Length {length} at offset {i} runs past the {len(payload)} byte payload"
            )
        values.append(payload[i + 1 : end])
        i = end
    return values


def _try_utf8(data: bytes) -> Optional[str]:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


def _try_nested(data: bytes, depth: int, max_depth: int) -> Optional[List[DecodedField]]:
    """
    Speculatively decode `data` as an embedded message. Returns None when it
    doesn't look like one.
    """
    if not data:
        return None
    try:
        nested = decode(data, depth=depth, max_depth=max_depth)
    except (UnimplementedWireType, MalformedFraming) as e:
        log.debug("Not a nested message at depth %d: %s", depth, e)
        return None
    except DepthExceeded as e:
        log.warning("%s, leaving the value undecoded", e)
        return None
    return nested or None


def interpret(
    field: RawField, depth: int = 0, max_depth: int = DEFAULT_MAX_DEPTH
) -> DecodedValue:
    """
    Decode the payload of a single raw field according to its wire type.
    Length-delimited values are also tried as nested messages one level
    deeper than `depth`.
    """
    wire_type = field.wire_type
    if wire_type == WIRE_VARINT:
        return decode_varint(field.payload)
    elif wire_type in (WIRE_FIXED_64, WIRE_FIXED_32):
        return decode_fixed(wire_type, field.payload)
    elif wire_type == WIRE_LEN_DELIM:
        return [
            LengthDelimitedValue(
                data=value,
                text=_try_utf8(value),
                nested=_try_nested(value, depth + 1, max_depth),
            )
            for value in split_length_delimited(field.payload)
        ]

    raise UnimplementedWireType(wire_type)


def decode(
    data: bytes, depth: int = 0, max_depth: int = DEFAULT_MAX_DEPTH
) -> List[DecodedField]:
    """
    Decode a buffer into a tree of fields without any schema.

    `depth` is the nesting level of `data` and only affects the `depth` of the
    returned fields. Raises `DepthExceeded` once `depth` goes over `max_depth`.
    """
    if depth > max_depth:
        raise DepthExceeded(max_depth)

    return [
        DecodedField(
            number=raw.number,
            wire_type=raw.wire_type,
            value=interpret(raw, depth=depth, max_depth=max_depth),
            depth=depth,
        )
        for raw in scan(data)
    ]


from .render import render_text, to_json  # noqa: E402
