"""
Binary Reader

Sequential byte source used by the traversal engine. Reads from an in-memory
buffer or from a binary stream with a ``read`` method.
"""

from __future__ import annotations
from typing import Any, Optional, Union

from ..errors import BinpackError, IOReadError, ShortReadError
from .scalar import ByteOrder, ScalarKind, read_scalar


class BinaryReader:
    """
    Byte source with an optional stream-level byte order.

    Every read is exact: a source that ends early raises ShortReadError.
    """

    def __init__(self, source: Any, byte_order: Union[ByteOrder, str, None] = None):
        """
        Initialize reader.

        Args:
            source: bytes-like buffer, or object with ``read(n)``
            byte_order: Stream-level byte order, or None to defer to the caller
        """
        if isinstance(source, (bytes, bytearray, memoryview)):
            self._buf = bytes(source)
            self._stream = None
        else:
            self._buf = None
            self._stream = source
        self._off = 0
        self.byte_order = ByteOrder.coerce(byte_order)

    @property
    def offset(self) -> int:
        """Number of bytes consumed so far."""
        return self._off

    @property
    def remaining(self) -> Optional[int]:
        """Bytes left in an in-memory buffer; None for streams."""
        if self._buf is None:
            return None
        return len(self._buf) - self._off

    @property
    def eof(self) -> bool:
        """Check if the source is exhausted. Consumes nothing for buffers."""
        if self._buf is not None:
            return self._off >= len(self._buf)
        return False

    def read_exact(self, n: int) -> bytes:
        """
        Read exactly n bytes in one request.

        Raises:
            ShortReadError: If fewer than n bytes are available
            IOReadError: If the underlying stream fails
        """
        if n == 0:
            return b""

        if self._buf is not None:
            available = len(self._buf) - self._off
            if available < n:
                self._off = len(self._buf)
                raise ShortReadError(n, available)
            out = self._buf[self._off:self._off + n]
            self._off += n
            return out

        chunks = bytearray()
        while len(chunks) < n:
            try:
                chunk = self._stream.read(n - len(chunks))
            except (OSError, ValueError) as e:
                raise IOReadError(f"read of {n} bytes failed", cause=e) from e
            if not chunk:
                break
            chunks.extend(chunk)
        self._off += len(chunks)
        if len(chunks) < n:
            raise ShortReadError(n, len(chunks))
        return bytes(chunks)

    def at_end(self) -> bool:
        """True when no further byte can be read. May consume one byte from a stream."""
        if self._buf is not None:
            return self.eof
        try:
            peek = self._stream.read(1)
        except (OSError, ValueError) as e:
            raise IOReadError("read failed while checking for end of stream", cause=e) from e
        if peek:
            self._off += len(peek)
            return False
        return True

    def scalar(self, kind: ScalarKind, byte_order: Optional[ByteOrder] = None):
        """Read one scalar in the given or stream-level byte order."""
        order = byte_order or self.byte_order
        if order is None:
            raise BinpackError("no byte order given and none bound to the reader")
        return read_scalar(self, order, kind)


__all__ = ["BinaryReader"]
