"""
binpack - Binary marshaling for nested dataclasses

Translates between composite values (dataclasses, fixed arrays,
length-prefixed sequences, fixed-width scalars) and a deterministic byte
stream. Variable-length members carry a length prefix whose integer kind is
declared per field, and any field may override the byte order used for
itself and everything nested inside it.
"""

from .api import Codec, decode, default_codec, encode, pack, unpack
from .codec import MAX_LENGTH, BinaryReader, BinaryWriter, ByteOrder, ScalarKind
from .errors import *
from .options import CodecOptions
from .tags import FieldAnnotation, parse_tag
from .types import (
    Array,
    ByteArray,
    Bytes,
    FixedBytes,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    binfield,
)

__version__ = "0.1.0"
__all__ = [
    "encode", "decode", "pack", "unpack", "Codec", "default_codec", "CodecOptions",
    "BinaryReader", "BinaryWriter", "ByteOrder", "ScalarKind", "MAX_LENGTH",
    "FieldAnnotation", "parse_tag",
    "Int8", "UInt8", "Int16", "UInt16", "Int32", "UInt32", "Int64", "UInt64",
    "Float32", "Float64", "Bytes", "ByteArray", "Array", "FixedBytes", "binfield",
    "ErrorCode", "BinpackError", "InvalidByteOrderError",
    "MissingLengthPrefixError", "UnknownLengthPrefixKindError", "SequenceTooLargeError",
    "InsufficientCapacityError", "UnsupportedShapeError", "ScalarRangeError",
    "FixedLengthMismatchError", "NegativeLengthError",
    "IOWriteError", "IOReadError", "ShortReadError", "TrailingDataError",
]
