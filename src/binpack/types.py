"""
Type-hint vocabulary for describing wire layouts.

Composite values are plain dataclasses whose field hints name the wire
shape of each member::

    @dataclass
    class Reading:
        sensor: UInt16
        values: List[Float32] = binfield(lenprefix="uint8", default_factory=list)
        serial: FixedBytes(6) = bytes(6)
"""

from __future__ import annotations
import dataclasses
from dataclasses import dataclass
from typing import Annotated, Any, List, Optional

from .codec.scalar import ByteOrder, ScalarKind
from .tags import TAG_KEY

Int8 = Annotated[int, ScalarKind.INT8]
UInt8 = Annotated[int, ScalarKind.UINT8]
Int16 = Annotated[int, ScalarKind.INT16]
UInt16 = Annotated[int, ScalarKind.UINT16]
Int32 = Annotated[int, ScalarKind.INT32]
UInt32 = Annotated[int, ScalarKind.UINT32]
Int64 = Annotated[int, ScalarKind.INT64]
UInt64 = Annotated[int, ScalarKind.UINT64]
Float32 = Annotated[float, ScalarKind.FLOAT32]
Float64 = Annotated[float, ScalarKind.FLOAT64]

Bytes = bytes
ByteArray = bytearray


@dataclass(frozen=True)
class FixedLength:
    """Marks a sequence hint as having a static element count."""

    length: int

    def __post_init__(self):
        if self.length < 0:
            raise ValueError("fixed length cannot be negative")


def Array(element: Any, length: int) -> Any:
    """Fixed-length sequence hint: ``Array(UInt16, 4)``."""
    return Annotated[List[element], FixedLength(length)]


def FixedBytes(length: int, mutable: bool = False) -> Any:
    """Fixed-length raw byte hint: ``FixedBytes(16)``."""
    return Annotated[bytearray if mutable else bytes, FixedLength(length)]


def build_tag(lenprefix: Optional[str] = None, endian: Optional[ByteOrder | str] = None,
              skip: bool = False) -> str:
    """Compose a tag string from keyword options."""
    tokens = []
    if skip:
        tokens.append("-")
    if lenprefix:
        tokens.append(f"lenprefix={lenprefix}")
    if endian:
        tokens.append(f"endian={ByteOrder.coerce(endian).value}")
    return ",".join(tokens)


def binfield(tag: str = "", *, lenprefix: Optional[str] = None,
             endian: Optional[ByteOrder | str] = None, skip: bool = False,
             tag_key: str = TAG_KEY, metadata: Optional[dict] = None, **kwargs) -> Any:
    """
    dataclasses.field() with a binpack tag attached.

    Args:
        tag: Raw tag string; keyword options are appended to it
        lenprefix: Length prefix kind for variable-length members
        endian: Byte order override for the member and its descendants
        skip: Exclude the member from the wire
        tag_key: Metadata key the tag is stored under
        metadata: Extra field metadata to merge
        **kwargs: Passed through to dataclasses.field (default, default_factory, ...)
    """
    parts = [p for p in (tag, build_tag(lenprefix, endian, skip)) if p]
    merged = dict(metadata or {})
    merged[tag_key] = ",".join(parts)
    return dataclasses.field(metadata=merged, **kwargs)


__all__ = [
    "Int8", "UInt8", "Int16", "UInt16", "Int32", "UInt32", "Int64", "UInt64",
    "Float32", "Float64",
    "Bytes", "ByteArray",
    "FixedLength", "Array", "FixedBytes",
    "build_tag", "binfield",
]
