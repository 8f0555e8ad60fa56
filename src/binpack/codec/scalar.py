"""
Scalar Codec

Encodes and decodes single fixed-width integers and IEEE-754 floats in a
given byte order. Floats travel as the unsigned integer with the same bit
pattern, so the stream never holds anything but the two IEEE-754 widths and
two's-complement integers.
"""

from __future__ import annotations
import struct
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Union

from ..errors import InvalidByteOrderError, ScalarRangeError


class ByteOrder(str, Enum):
    """Byte order used to serialize multi-byte scalars."""

    LITTLE = "little"
    BIG = "big"

    @property
    def prefix(self) -> str:
        """struct format prefix for this byte order."""
        return "<" if self is ByteOrder.LITTLE else ">"

    @classmethod
    def coerce(cls, value: Union["ByteOrder", str, None]) -> Optional["ByteOrder"]:
        """
        Accept a ByteOrder, its string value, or None.

        Raises:
            InvalidByteOrderError: If a string names no byte order
        """
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as e:
            raise InvalidByteOrderError(value) from e


class ScalarKind(str, Enum):
    """Fixed-width scalar kinds understood by the codec."""

    INT8 = "int8"
    UINT8 = "uint8"
    INT16 = "int16"
    UINT16 = "uint16"
    INT32 = "int32"
    UINT32 = "uint32"
    INT64 = "int64"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"

    @property
    def size(self) -> int:
        return _SIZES[self]

    @property
    def is_float(self) -> bool:
        return self in (ScalarKind.FLOAT32, ScalarKind.FLOAT64)

    @property
    def signed(self) -> bool:
        return self.value.startswith("int")

    @property
    def bounds(self) -> tuple[int, int]:
        """Inclusive (min, max) for integer kinds."""
        bits = self.size * 8
        if self.signed:
            return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
        return 0, (1 << bits) - 1

    @classmethod
    def integer_kind(cls, name: str) -> Optional["ScalarKind"]:
        """Look up one of the eight integer kinds by name, or None."""
        try:
            kind = cls(name)
        except ValueError:
            return None
        return None if kind.is_float else kind


_SIZES = {
    ScalarKind.INT8: 1, ScalarKind.UINT8: 1,
    ScalarKind.INT16: 2, ScalarKind.UINT16: 2,
    ScalarKind.INT32: 4, ScalarKind.UINT32: 4,
    ScalarKind.INT64: 8, ScalarKind.UINT64: 8,
    ScalarKind.FLOAT32: 4, ScalarKind.FLOAT64: 8,
}

_INT_FORMATS = {
    ScalarKind.INT8: "b", ScalarKind.UINT8: "B",
    ScalarKind.INT16: "h", ScalarKind.UINT16: "H",
    ScalarKind.INT32: "i", ScalarKind.UINT32: "I",
    ScalarKind.INT64: "q", ScalarKind.UINT64: "Q",
}

# float kind -> (float format, unsigned carrier kind)
_FLOAT_CARRIERS = {
    ScalarKind.FLOAT32: ("f", ScalarKind.UINT32),
    ScalarKind.FLOAT64: ("d", ScalarKind.UINT64),
}

# Largest element count each length-prefix kind can carry.
MAX_LENGTH: Mapping[ScalarKind, int] = MappingProxyType({
    kind: kind.bounds[1] for kind in _INT_FORMATS
})


def float_to_bits(kind: ScalarKind, value: float) -> int:
    """Reinterpret a float as the unsigned integer with the same bits."""
    fmt, carrier = _FLOAT_CARRIERS[kind]
    try:
        packed = struct.pack("<" + fmt, value)
    except (OverflowError, struct.error) as e:
        raise ScalarRangeError(value, kind.value) from e
    return struct.unpack("<" + _INT_FORMATS[carrier], packed)[0]


def bits_to_float(kind: ScalarKind, bits: int) -> float:
    """Reinterpret unsigned integer bits as a float of the given kind."""
    fmt, carrier = _FLOAT_CARRIERS[kind]
    return struct.unpack("<" + fmt, struct.pack("<" + _INT_FORMATS[carrier], bits))[0]


def pack_scalar(order: ByteOrder, kind: ScalarKind, value: Union[int, float]) -> bytes:
    """Return the wire bytes of one scalar."""
    if kind.is_float:
        _, carrier = _FLOAT_CARRIERS[kind]
        return pack_scalar(order, carrier, float_to_bits(kind, value))

    if isinstance(value, float) or not isinstance(value, int):
        raise ScalarRangeError(value, kind.value)
    lo, hi = kind.bounds
    if value < lo or value > hi:
        raise ScalarRangeError(value, kind.value)
    return struct.pack(order.prefix + _INT_FORMATS[kind], value)


def unpack_scalar(order: ByteOrder, kind: ScalarKind, data: bytes) -> Union[int, float]:
    """Inverse of pack_scalar; ``data`` must be exactly ``kind.size`` bytes."""
    if kind.is_float:
        _, carrier = _FLOAT_CARRIERS[kind]
        return bits_to_float(kind, unpack_scalar(order, carrier, data))
    return struct.unpack(order.prefix + _INT_FORMATS[kind], data)[0]


def write_scalar(sink, order: ByteOrder, kind: ScalarKind, value: Union[int, float]) -> None:
    """
    Encode one scalar to a sink.

    Args:
        sink: BinaryWriter receiving the bytes
        order: Byte order for multi-byte values
        kind: Scalar kind
        value: Integer or float value

    Raises:
        ScalarRangeError: If the value does not fit the kind
        IOWriteError: Propagated from the sink
    """
    sink.write(pack_scalar(order, kind, value))


def read_scalar(source, order: ByteOrder, kind: ScalarKind) -> Union[int, float]:
    """
    Decode one scalar from a source.

    Raises:
        ShortReadError: If the source ends early
        IOReadError: Propagated from the source
    """
    return unpack_scalar(order, kind, source.read_exact(kind.size))


__all__ = [
    "ByteOrder",
    "ScalarKind",
    "MAX_LENGTH",
    "float_to_bits",
    "bits_to_float",
    "pack_scalar",
    "unpack_scalar",
    "write_scalar",
    "read_scalar",
]
