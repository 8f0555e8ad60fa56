"""
Public encode/decode entry points.

Byte order is resolved at three levels: the call's ``byte_order`` argument,
then the order bound to the BinaryWriter/BinaryReader, then the codec's
configured default. Per-field ``endian=`` tags override it further down.
"""

from __future__ import annotations
import logging
from typing import Any, Optional, Tuple, Union, get_origin

from .codec.reader import BinaryReader
from .codec.scalar import ByteOrder
from .codec.writer import BinaryWriter
from .engine import decode_value, encode_value
from .errors import TrailingDataError
from .options import DEFAULT_OPTIONS, CodecOptions
from .shapes import Shape, infer_shape, shape_of

logger = logging.getLogger(__name__)

ByteOrderLike = Union[ByteOrder, str, None]


def _is_hint(target: Any) -> bool:
    return isinstance(target, type) or get_origin(target) is not None


class Codec:
    """
    Encoder/decoder bound to a set of CodecOptions.

    Holds no per-call state, so one instance may serve independent streams
    concurrently.
    """

    def __init__(self, options: Optional[CodecOptions] = None, **overrides: Any):
        """
        Initialize codec.

        Args:
            options: Codec options, defaults to CodecOptions()
            **overrides: Individual option fields to override
        """
        options = options or DEFAULT_OPTIONS
        if overrides:
            options = CodecOptions(**{**options.model_dump(), **overrides})
        self.options = options

    def _order(self, byte_order: ByteOrderLike, bound: Optional[ByteOrder]) -> ByteOrder:
        return ByteOrder.coerce(byte_order) or bound or self.options.byte_order

    @staticmethod
    def _writer(sink: Any) -> BinaryWriter:
        if isinstance(sink, BinaryWriter):
            return sink
        if hasattr(sink, "write"):
            return BinaryWriter(sink)
        raise TypeError(f"sink must be a BinaryWriter or have write(), got {type(sink).__name__}")

    @staticmethod
    def _reader(source: Any) -> BinaryReader:
        if isinstance(source, BinaryReader):
            return source
        if isinstance(source, (bytes, bytearray, memoryview)) or hasattr(source, "read"):
            return BinaryReader(source)
        raise TypeError(f"source must be a BinaryReader, bytes or have read(), got {type(source).__name__}")

    @staticmethod
    def _target(target: Any, as_type: Any) -> Tuple[Optional[Shape], Any]:
        if as_type is not None:
            return shape_of(as_type), target
        if _is_hint(target):
            return shape_of(target), None
        return infer_shape(target), target

    def encode(self, sink: Any, byte_order: ByteOrderLike, value: Any, *, as_type: Any = None) -> None:
        """
        Write the binary representation of ``value`` to ``sink``.

        Args:
            sink: BinaryWriter or object with write(bytes)
            byte_order: Byte order, or None for the writer's/configured order
            value: Dataclass instance, bytes, float, list/tuple, or any value with as_type
            as_type: Type hint describing ``value`` (required for bare ints)

        Raises:
            BinpackError: Any error from the taxonomy in binpack.errors
        """
        writer = self._writer(sink)
        order = self._order(byte_order, writer.byte_order)
        shape = shape_of(as_type) if as_type is not None else infer_shape(value)
        if self.options.debug:
            logger.debug("encode %s order=%s", type(value).__name__, order.value)
        encode_value(writer, order, shape, value, self.options.tag_key)

    def decode(self, source: Any, byte_order: ByteOrderLike, target: Any, *, as_type: Any = None) -> Any:
        """
        Read a value from ``source``.

        Args:
            source: BinaryReader, bytes-like buffer, or object with read(n)
            byte_order: Byte order, or None for the reader's/configured order
            target: Instance to populate in place, or a type hint to build
            as_type: Type hint describing ``target`` when it is an instance

        Returns:
            The decoded value; ``target`` itself when it was populated in place
        """
        reader = self._reader(source)
        order = self._order(byte_order, reader.byte_order)
        shape, current = self._target(target, as_type)
        if self.options.debug:
            logger.debug("decode %r order=%s", shape, order.value)
        return decode_value(reader, order, shape, current, self.options.tag_key)

    def pack(self, value: Any, byte_order: ByteOrderLike = None, *, as_type: Any = None) -> bytes:
        """Encode ``value`` into a new bytes object."""
        writer = BinaryWriter()
        self.encode(writer, byte_order, value, as_type=as_type)
        return writer.to_bytes()

    def unpack(self, data: Any, target: Any, byte_order: ByteOrderLike = None, *,
               as_type: Any = None, strict: Optional[bool] = None) -> Any:
        """
        Decode ``target`` from a bytes-like buffer.

        Raises:
            TrailingDataError: In strict mode, if bytes remain after decoding
        """
        reader = BinaryReader(data)
        result = self.decode(reader, byte_order, target, as_type=as_type)
        if (self.options.strict if strict is None else strict) and not reader.eof:
            raise TrailingDataError(reader.remaining)
        return result


default_codec = Codec()


def encode(sink: Any, byte_order: ByteOrderLike, value: Any, *, as_type: Any = None) -> None:
    """Write the binary representation of ``value`` to ``sink``."""
    default_codec.encode(sink, byte_order, value, as_type=as_type)


def decode(source: Any, byte_order: ByteOrderLike, target: Any, *, as_type: Any = None) -> Any:
    """Read structured binary data from ``source`` into ``target``."""
    return default_codec.decode(source, byte_order, target, as_type=as_type)


def pack(value: Any, byte_order: ByteOrderLike = None, *, as_type: Any = None) -> bytes:
    """Encode ``value`` into bytes."""
    return default_codec.pack(value, byte_order, as_type=as_type)


def unpack(data: Any, target: Any, byte_order: ByteOrderLike = None, *,
           as_type: Any = None, strict: Optional[bool] = None) -> Any:
    """Decode ``target`` from bytes."""
    return default_codec.unpack(data, target, byte_order, as_type=as_type, strict=strict)


__all__ = ["Codec", "default_codec", "encode", "decode", "pack", "unpack"]
