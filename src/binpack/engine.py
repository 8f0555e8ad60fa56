"""
Traversal Engine

Recursive depth-first encode/decode over value shapes. Composite members are
visited in declared order; variable-length members are framed by a length
prefix whose kind and byte order come from the member's annotation.
"""

from __future__ import annotations
from typing import Any, Optional

from .codec.reader import BinaryReader
from .codec.scalar import MAX_LENGTH, ByteOrder, ScalarKind, read_scalar, write_scalar
from .codec.writer import BinaryWriter
from .errors import (
    FixedLengthMismatchError,
    InsufficientCapacityError,
    MissingLengthPrefixError,
    NegativeLengthError,
    SequenceTooLargeError,
    UnknownLengthPrefixKindError,
    UnsupportedShapeError,
)
from .shapes import (
    ByteSequenceShape,
    CompositeShape,
    FieldLayout,
    FixedSequenceShape,
    ScalarShape,
    Shape,
    VariableSequenceShape,
    infer_shape,
    is_variable,
    layout_for,
    new_instance,
    zero_value,
)
from .tags import TAG_KEY


def _prefix_kind(owner: type, fl: FieldLayout) -> ScalarKind:
    if not fl.annotation.lenprefix:
        raise MissingLengthPrefixError(fl.name, owner.__qualname__)
    kind = ScalarKind.integer_kind(fl.annotation.lenprefix)
    if kind is None:
        raise UnknownLengthPrefixKindError(fl.annotation.lenprefix, f"{owner.__qualname__}.{fl.name}")
    return kind


def _as_bytes(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise UnsupportedShapeError(type(value), "expected a bytes-like value")


# ---------------------------------------------------------------------------
# Encode
# ---------------------------------------------------------------------------

def encode_value(writer: BinaryWriter, order: ByteOrder, shape: Optional[Shape], value: Any,
                 tag_key: str = TAG_KEY) -> None:
    """
    Encode ``value`` of the given shape.

    A None shape means a top-level list/tuple whose elements are classified
    from their runtime values.
    """
    if shape is None:
        for item in value:
            encode_value(writer, order, infer_shape(item), item, tag_key)

    elif isinstance(shape, ScalarShape):
        write_scalar(writer, order, shape.kind, value)

    elif isinstance(shape, ByteSequenceShape):
        data = _as_bytes(value)
        if shape.length is not None and len(data) != shape.length:
            raise FixedLengthMismatchError(shape.length, len(data))
        writer.write(data)

    elif isinstance(shape, FixedSequenceShape):
        if len(value) != shape.length:
            raise FixedLengthMismatchError(shape.length, len(value))
        for item in value:
            encode_value(writer, order, shape.element, item, tag_key)

    elif isinstance(shape, VariableSequenceShape):
        for item in value:
            encode_value(writer, order, shape.element, item, tag_key)

    elif isinstance(shape, CompositeShape):
        _encode_composite(writer, order, shape.cls, value, tag_key)

    else:
        raise UnsupportedShapeError(shape)


def _encode_composite(writer: BinaryWriter, order: ByteOrder, cls: type, value: Any,
                      tag_key: str) -> None:
    for fl in layout_for(cls, tag_key):
        if fl.annotation.skip:
            continue

        field_order = fl.annotation.endian or order
        member = getattr(value, fl.name)

        if is_variable(fl.shape):
            kind = _prefix_kind(cls, fl)
            count = len(member)
            if count > MAX_LENGTH[kind]:
                raise SequenceTooLargeError(count, kind.value, MAX_LENGTH[kind],
                                            f"{cls.__qualname__}.{fl.name}")
            write_scalar(writer, field_order, kind, count)

        encode_value(writer, field_order, fl.shape, member, tag_key)


# ---------------------------------------------------------------------------
# Decode
# ---------------------------------------------------------------------------

def decode_value(reader: BinaryReader, order: ByteOrder, shape: Optional[Shape], current: Any = None,
                 tag_key: str = TAG_KEY, count: Optional[int] = None) -> Any:
    """
    Decode one value of the given shape and return it.

    Args:
        reader: Byte source
        order: Byte order in effect
        shape: Shape to decode, or None for a top-level list classified element-wise
        current: Existing value; mutable containers and composites are filled in place
        tag_key: Metadata key holding field tags
        count: Element count for variable-length shapes; defaults to len(current)

    Returns:
        The decoded value, which is ``current`` itself whenever it was reused
    """
    if shape is None:
        for i, item in enumerate(current):
            current[i] = decode_value(reader, order, infer_shape(item), item, tag_key)
        return current

    if isinstance(shape, ScalarShape):
        return read_scalar(reader, order, shape.kind)

    if isinstance(shape, ByteSequenceShape):
        if shape.length is not None:
            count = shape.length
        elif count is None:
            count = len(current) if current is not None else 0
        data = reader.read_exact(count)
        if isinstance(current, bytearray) and len(current) == count:
            current[:] = data
            return current
        return bytearray(data) if shape.mutable else data

    if isinstance(shape, FixedSequenceShape):
        if not isinstance(current, list) or len(current) != shape.length:
            current = zero_value(shape, tag_key)
        return _decode_elements(reader, order, shape.element, current, tag_key)

    if isinstance(shape, VariableSequenceShape):
        if current is None:
            current = []
        if count is not None and count != len(current):
            # append as decoded; a short source fails before count elements exist
            items = []
            for _ in range(count):
                items.append(decode_value(reader, order, shape.element, None, tag_key))
            return items
        return _decode_elements(reader, order, shape.element, current, tag_key)

    if isinstance(shape, CompositeShape):
        if shape.cls.__dataclass_params__.frozen:
            raise UnsupportedShapeError(shape.cls, "frozen dataclasses cannot be decoded into")
        target = current if current is not None else new_instance(shape.cls, tag_key)
        _decode_composite(reader, order, shape.cls, target, tag_key)
        return target

    raise UnsupportedShapeError(shape)


def _decode_elements(reader: BinaryReader, order: ByteOrder, element: Shape, items: list,
                     tag_key: str) -> list:
    for i in range(len(items)):
        items[i] = decode_value(reader, order, element, items[i], tag_key)
    return items


def _reuse_container(current: Any, count: int, field: str) -> Any:
    """
    Fit an existing mutable sequence to ``count`` elements, or return None.

    Non-empty lists and bytearrays are truncated in place; one shorter than
    ``count`` cannot hold the decoded elements.
    """
    if not isinstance(current, (list, bytearray)) or len(current) == 0:
        return None
    if len(current) < count:
        raise InsufficientCapacityError(len(current), count, field)
    del current[count:]
    return current


def _decode_composite(reader: BinaryReader, order: ByteOrder, cls: type, target: Any,
                      tag_key: str) -> None:
    for fl in layout_for(cls, tag_key):
        if fl.annotation.skip:
            continue

        field_order = fl.annotation.endian or order
        current = getattr(target, fl.name, None)
        count = None

        if is_variable(fl.shape):
            kind = _prefix_kind(cls, fl)
            where = f"{cls.__qualname__}.{fl.name}"
            count = read_scalar(reader, field_order, kind)
            if count < 0:
                raise NegativeLengthError(count, where)
            current = _reuse_container(current, count, where)

        setattr(target, fl.name, decode_value(reader, field_order, fl.shape, current, tag_key, count))


__all__ = ["encode_value", "decode_value"]
