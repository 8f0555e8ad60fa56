"""
Byte sink/source tests.
"""

import io

import pytest

from binpack import (
    BinaryReader,
    BinaryWriter,
    BinpackError,
    ByteOrder,
    IOReadError,
    IOWriteError,
    ScalarKind,
    ShortReadError,
)


class FailingStream:
    """Stream whose every operation fails."""

    def write(self, data):
        raise OSError("disk full")

    def read(self, n):
        raise OSError("device gone")


class ShortWriteStream:
    """Stream that accepts at most one byte per write."""

    def write(self, data):
        return min(1, len(data))


class TestBinaryWriter:
    """Test BinaryWriter behavior."""

    def test_memory_accumulates(self, writer):
        writer.write(b"ab")
        writer.write(bytearray(b"cd"))
        assert writer.to_bytes() == b"abcd"
        assert writer.written == 4
        assert len(writer) == 4

    def test_forwards_to_stream(self):
        stream = io.BytesIO()
        w = BinaryWriter(stream)
        w.write(b"\x01\x02")
        assert stream.getvalue() == b"\x01\x02"
        assert w.written == 2

    def test_stream_writer_holds_no_bytes(self):
        w = BinaryWriter(io.BytesIO())
        with pytest.raises(IOWriteError):
            w.to_bytes()

    def test_stream_failure_wrapped(self):
        w = BinaryWriter(FailingStream())
        with pytest.raises(IOWriteError, match="write of 3 bytes failed") as exc:
            w.write(b"abc")
        assert isinstance(exc.value.cause, OSError)

    def test_short_write(self):
        w = BinaryWriter(ShortWriteStream())
        with pytest.raises(IOWriteError, match="short write"):
            w.write(b"abc")

    def test_scalar_uses_bound_order(self):
        w = BinaryWriter(byte_order="big")
        w.scalar(ScalarKind.UINT16, 0x0102)
        w.scalar(ScalarKind.UINT16, 0x0102, ByteOrder.LITTLE)
        assert w.to_bytes() == b"\x01\x02\x02\x01"

    def test_scalar_without_order(self, writer):
        with pytest.raises(BinpackError, match="no byte order"):
            writer.scalar(ScalarKind.UINT8, 1)


class TestBinaryReader:
    """Test BinaryReader behavior."""

    def test_read_exact_from_buffer(self, reader_for):
        r = reader_for(b"abcdef")
        assert r.read_exact(2) == b"ab"
        assert r.read_exact(0) == b""
        assert r.offset == 2
        assert r.remaining == 4
        assert not r.eof

    def test_short_read_from_buffer(self, reader_for):
        r = reader_for(b"abc")
        with pytest.raises(ShortReadError) as exc:
            r.read_exact(5)
        assert exc.value.details == {"requested": 5, "available": 3}
        assert isinstance(exc.value, IOReadError)

    def test_stream_reads_until_filled(self):
        class Trickle(io.RawIOBase):
            def __init__(self, data):
                self._data = data

            def readable(self):
                return True

            def read(self, n=-1):
                chunk, self._data = self._data[:1], self._data[1:]
                return chunk

        r = BinaryReader(Trickle(b"\x01\x02\x03\x04"))
        assert r.read_exact(4) == b"\x01\x02\x03\x04"
        assert r.remaining is None

    def test_short_read_from_stream(self):
        r = BinaryReader(io.BytesIO(b"\x01"))
        with pytest.raises(ShortReadError):
            r.read_exact(2)

    def test_stream_failure_wrapped(self):
        r = BinaryReader(FailingStream())
        with pytest.raises(IOReadError, match="read of 1 bytes failed"):
            r.read_exact(1)

    def test_at_end(self):
        assert BinaryReader(io.BytesIO(b"")).at_end()
        assert not BinaryReader(io.BytesIO(b"x")).at_end()
        assert BinaryReader(b"").at_end()

    def test_scalar_uses_bound_order(self):
        r = BinaryReader(b"\x01\x02\x01\x02", ByteOrder.BIG)
        assert r.scalar(ScalarKind.UINT16) == 0x0102
        assert r.scalar(ScalarKind.UINT16, ByteOrder.LITTLE) == 0x0201
