"""
Binpack Byte Codec Module

Low-level pieces the traversal engine calls into.

Key components:
- scalar.py: Fixed-width integer/float encoding in a given byte order
- writer.py: Sequential byte sink (memory or stream)
- reader.py: Sequential byte source (memory or stream)
"""

from .reader import BinaryReader
from .scalar import (
    MAX_LENGTH,
    ByteOrder,
    ScalarKind,
    read_scalar,
    write_scalar,
)
from .writer import BinaryWriter

__all__ = [
    "BinaryReader",
    "BinaryWriter",
    "ByteOrder",
    "ScalarKind",
    "MAX_LENGTH",
    "read_scalar",
    "write_scalar",
]
