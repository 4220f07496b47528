class DecodeError(Exception):
    """The base class for all exceptions raised while decoding wire data"""


class UnimplementedWireType(DecodeError, NotImplementedError):
    """
    Raised for wire types the decoder cannot frame, i.e. the deprecated group
    markers and the unassigned codes 6 and 7.

    Attributes
    ----------
    wire_type: :class:`int`
        The offending 3-bit wire type code.
    """

    def __init__(self, wire_type: int):
        super().__init__(f"Wire type {wire_type} is not implemented")
        self.wire_type = wire_type


class MalformedFraming(DecodeError, ValueError):
    """A length or width does not match the bytes that are actually there."""


class DepthExceeded(DecodeError, RecursionError):
    """
    Attributes
    ----------
    max_depth: :class:`int`
        The nesting limit that was hit.
    """

    def __init__(self, max_depth: int):
        super().__init__(f"Nested message depth exceeds {max_depth}")
        self.max_depth = max_depth
