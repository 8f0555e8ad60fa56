"""
Field annotation parsing.

A composite field carries its packing options as a comma-separated tag in the
dataclass field metadata, e.g.::

    samples: List[Int16] = field(default_factory=list,
                                 metadata={"binpack": "lenprefix=uint16,endian=big"})

Recognized tokens are ``-`` (skip), ``lenprefix=<kind>`` and
``endian=little|big``. Anything else is ignored so that newer tags never
break older readers.
"""

from __future__ import annotations
import dataclasses
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from .codec.scalar import ByteOrder

TAG_KEY = "binpack"
LEGACY_LENPREFIX_KEY = "lenprefix"


class FieldAnnotation(BaseModel):
    """Parsed packing options for one composite field."""

    skip: bool = False
    lenprefix: Optional[str] = None
    endian: Optional[ByteOrder] = None

    model_config = ConfigDict(frozen=True)


_DEFAULT = FieldAnnotation()


def parse_tag(raw: Optional[str]) -> FieldAnnotation:
    """
    Parse a raw tag string into a FieldAnnotation.

    Never raises. The lenprefix value is kept verbatim; it is validated when
    the engine needs the prefix.
    """
    if not raw:
        return _DEFAULT

    skip = False
    lenprefix = None
    endian = None
    for token in raw.split(","):
        token = token.strip()
        if token == "-":
            skip = True
        elif token.startswith("lenprefix="):
            lenprefix = token[len("lenprefix="):].strip()
        elif token.startswith("endian="):
            value = token[len("endian="):].strip().lower()
            if value in ("little", "big"):
                endian = ByteOrder(value)

    return FieldAnnotation(skip=skip, lenprefix=lenprefix, endian=endian)


def is_placeholder(name: str) -> bool:
    """Names starting with an underscore mark blank/private members."""
    return name.startswith("_")


def field_annotation(f: dataclasses.Field, tag_key: str = TAG_KEY) -> FieldAnnotation:
    """Build the annotation for a dataclass field from its name and metadata."""
    metadata: Any = f.metadata or {}
    opts = parse_tag(metadata.get(tag_key))

    legacy = metadata.get(LEGACY_LENPREFIX_KEY)
    if opts.lenprefix is None and legacy:
        opts = opts.model_copy(update={"lenprefix": str(legacy).strip()})

    if is_placeholder(f.name) and not opts.skip:
        opts = opts.model_copy(update={"skip": True})
    return opts


__all__ = [
    "TAG_KEY",
    "FieldAnnotation",
    "parse_tag",
    "is_placeholder",
    "field_annotation",
]
