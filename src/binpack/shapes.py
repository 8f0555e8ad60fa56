"""
Value shapes and composite layouts.

Every value the engine touches is classified once into one of five shapes.
Composite layouts (field order, shape, parsed annotation) are derived from a
dataclass's type hints on first use and cached per class.
"""

from __future__ import annotations
import collections.abc
import dataclasses
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated, Any, Optional, Tuple, Union, get_args, get_origin, get_type_hints

from .codec.scalar import ScalarKind
from .errors import UnsupportedShapeError
from .tags import TAG_KEY, FieldAnnotation, field_annotation
from .types import FixedLength

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScalarShape:
    kind: ScalarKind


@dataclass(frozen=True)
class ByteSequenceShape:
    """Raw bytes; ``length`` is None for variable-length byte sequences."""

    length: Optional[int] = None
    mutable: bool = False


@dataclass(frozen=True)
class FixedSequenceShape:
    element: "Shape"
    length: int


@dataclass(frozen=True)
class VariableSequenceShape:
    element: "Shape"


@dataclass(frozen=True)
class CompositeShape:
    cls: type


Shape = Union[ScalarShape, ByteSequenceShape, FixedSequenceShape, VariableSequenceShape, CompositeShape]

_SEQUENCE_ORIGINS = (list, collections.abc.Sequence, collections.abc.MutableSequence)


def is_variable(shape: Shape) -> bool:
    """True for shapes whose length travels in the stream."""
    if isinstance(shape, VariableSequenceShape):
        return True
    return isinstance(shape, ByteSequenceShape) and shape.length is None


def shape_of(hint: Any) -> Shape:
    """
    Resolve a type hint to a shape.

    Raises:
        UnsupportedShapeError: If the hint names no supported shape
    """
    origin = get_origin(hint)

    if origin is Annotated:
        base = get_args(hint)[0]
        metadata = hint.__metadata__
        kind = next((m for m in metadata if isinstance(m, ScalarKind)), None)
        fixed = next((m for m in metadata if isinstance(m, FixedLength)), None)

        if kind is not None:
            if base is not (float if kind.is_float else int):
                raise UnsupportedShapeError(hint, f"{kind.value} cannot annotate {base!r}")
            return ScalarShape(kind)

        inner = shape_of(base)
        if fixed is None:
            return inner
        if isinstance(inner, ByteSequenceShape):
            return ByteSequenceShape(fixed.length, inner.mutable)
        if isinstance(inner, VariableSequenceShape):
            return FixedSequenceShape(inner.element, fixed.length)
        raise UnsupportedShapeError(hint, "fixed length applies only to sequences")

    if hint is float:
        return ScalarShape(ScalarKind.FLOAT64)
    if hint is bytes:
        return ByteSequenceShape()
    if hint is bytearray:
        return ByteSequenceShape(mutable=True)

    if origin in _SEQUENCE_ORIGINS:
        args = get_args(hint)
        if not args:
            raise UnsupportedShapeError(hint, "sequence element type is required")
        element = shape_of(args[0])
        if is_variable(element):
            raise UnsupportedShapeError(
                hint, "nested variable-length sequences need a wrapping dataclass")
        return VariableSequenceShape(element)

    if isinstance(hint, type) and dataclasses.is_dataclass(hint):
        return CompositeShape(hint)

    if hint is int:
        raise UnsupportedShapeError(hint, "int has no fixed width, use Int8..UInt64")
    raise UnsupportedShapeError(hint)


def infer_shape(value: Any) -> Optional[Shape]:
    """
    Classify a top-level runtime value.

    Returns None for list/tuple values, whose elements are classified one by
    one by the caller.
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return CompositeShape(type(value))
    if isinstance(value, bool):
        raise UnsupportedShapeError(type(value))
    if isinstance(value, float):
        return ScalarShape(ScalarKind.FLOAT64)
    if isinstance(value, (bytes, memoryview)):
        return ByteSequenceShape()
    if isinstance(value, bytearray):
        return ByteSequenceShape(mutable=True)
    if isinstance(value, (list, tuple)):
        return None
    if isinstance(value, int):
        raise UnsupportedShapeError(type(value), "int has no fixed width, pass as_type")
    raise UnsupportedShapeError(type(value))


@dataclass(frozen=True)
class FieldLayout:
    """One member of a composite: shape is None for skipped members."""

    name: str
    shape: Optional[Shape]
    annotation: FieldAnnotation
    has_default: bool
    init: bool


@lru_cache(maxsize=None)
def layout_for(cls: type, tag_key: str = TAG_KEY) -> Tuple[FieldLayout, ...]:
    """Return the cached member layout of a dataclass in declared order."""
    try:
        hints = get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as e:
        raise UnsupportedShapeError(cls, f"cannot resolve type hints: {e}") from e

    layout = []
    for f in dataclasses.fields(cls):
        annotation = field_annotation(f, tag_key)
        shape = None if annotation.skip else shape_of(hints[f.name])
        has_default = (f.default is not dataclasses.MISSING
                       or f.default_factory is not dataclasses.MISSING)
        layout.append(FieldLayout(f.name, shape, annotation, has_default, f.init))

    logger.debug("built layout for %s: %d fields, %d on the wire",
                 cls.__qualname__, len(layout), sum(1 for f in layout if f.shape is not None))
    return tuple(layout)


def zero_value(shape: Shape, tag_key: str = TAG_KEY) -> Any:
    """Return the empty value for a shape (0, empty/zeroed sequences, new composite)."""
    if isinstance(shape, ScalarShape):
        return 0.0 if shape.kind.is_float else 0
    if isinstance(shape, ByteSequenceShape):
        size = shape.length or 0
        return bytearray(size) if shape.mutable else bytes(size)
    if isinstance(shape, FixedSequenceShape):
        return [zero_value(shape.element, tag_key) for _ in range(shape.length)]
    if isinstance(shape, VariableSequenceShape):
        return []
    if isinstance(shape, CompositeShape):
        return new_instance(shape.cls, tag_key)
    raise UnsupportedShapeError(shape)


def new_instance(cls: type, tag_key: str = TAG_KEY) -> Any:
    """Construct a dataclass with every required field set to its zero value."""
    kwargs = {}
    for fl in layout_for(cls, tag_key):
        if not fl.init or fl.has_default:
            continue
        kwargs[fl.name] = None if fl.shape is None else zero_value(fl.shape, tag_key)
    return cls(**kwargs)


__all__ = [
    "ScalarShape",
    "ByteSequenceShape",
    "FixedSequenceShape",
    "VariableSequenceShape",
    "CompositeShape",
    "Shape",
    "FieldLayout",
    "is_variable",
    "shape_of",
    "infer_shape",
    "layout_for",
    "zero_value",
    "new_instance",
]
