"""
Binary Writer

Sequential byte sink used by the traversal engine. Either accumulates bytes
in memory or forwards them to a binary stream with a ``write`` method.
"""

from __future__ import annotations
from typing import Any, Optional, Union

from ..errors import BinpackError, IOWriteError
from .scalar import ByteOrder, ScalarKind, write_scalar


class BinaryWriter:
    """
    Byte sink with an optional stream-level byte order.

    The byte order bound here is used when an encode call does not name one.
    """

    def __init__(self, stream: Any = None, byte_order: Union[ByteOrder, str, None] = None):
        """
        Initialize writer.

        Args:
            stream: Object with ``write(bytes)``; None keeps bytes in memory
            byte_order: Stream-level byte order, or None to defer to the caller
        """
        self._stream = stream
        self._bb = bytearray()
        self._written = 0
        self.byte_order = ByteOrder.coerce(byte_order)

    @property
    def written(self) -> int:
        """Number of bytes accepted so far."""
        return self._written

    def write(self, data: Union[bytes, bytearray, memoryview]) -> None:
        """
        Write raw bytes without any framing.

        Raises:
            IOWriteError: If the underlying stream fails or accepts fewer bytes
        """
        if self._stream is None:
            self._bb.extend(data)
            self._written += len(data)
            return

        try:
            n = self._stream.write(data)
        except (OSError, ValueError) as e:
            raise IOWriteError(f"write of {len(data)} bytes failed", cause=e) from e
        if n is not None and n != len(data):
            raise IOWriteError(f"short write: {n} of {len(data)} bytes",
                               details={"requested": len(data), "written": n})
        self._written += len(data)

    def scalar(self, kind: ScalarKind, value, byte_order: Optional[ByteOrder] = None) -> None:
        """Write one scalar in the given or stream-level byte order."""
        order = byte_order or self.byte_order
        if order is None:
            raise BinpackError("no byte order given and none bound to the writer")
        write_scalar(self, order, kind, value)

    def to_bytes(self) -> bytes:
        """Return the bytes accumulated in memory."""
        if self._stream is not None:
            raise IOWriteError("writer forwards to a stream and holds no bytes")
        return bytes(self._bb)

    def __len__(self) -> int:
        return self._written


__all__ = ["BinaryWriter"]
