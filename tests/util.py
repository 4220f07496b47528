from typing import List


def encode_varint(value: int) -> bytes:
    """Encodes a single unsigned varint value."""
    b: List[int] = []

    bits = value & 0x7F
    value >>= 7
    while value:
        b.append(0x80 | bits)
        bits = value & 0x7F
        value >>= 7
    return bytes(b + [bits])


def tag(number: int, wire_type: int) -> bytes:
    """A single byte tag, only valid for field numbers up to 31."""
    return bytes([(number << 3) | wire_type])


def len_delim(number: int, value: bytes) -> bytes:
    return tag(number, 2) + bytes([len(value)]) + value
