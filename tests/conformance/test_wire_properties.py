"""
Wire format properties.

Exact byte layouts for representative composites, plus the guarantees every
encoder/decoder pair must keep: round trip, prefix fidelity, overflow
rejection, skip fidelity and byte-order scoping.
"""

import pytest

from binpack import ByteOrder, SequenceTooLargeError, decode, encode, pack, unpack

from helpers import assert_hex_equal
from helpers.layouts import (
    AllScalars,
    Frame,
    Header,
    Int8Slice,
    Point,
    Polyline,
    Row,
    ScopedOrder,
    Skipping,
    Table,
    TinyPrefix,
)


class TestExactLayouts:
    """Byte-exact encodings."""

    def test_field_order_override_is_scoped(self, writer):
        """Little-endian member inside a big-endian stream leaves its sibling big-endian."""
        encode(writer, ByteOrder.BIG, ScopedOrder(a=[0x1122, 0x3344], b=0x11223344))
        assert_hex_equal(writer.to_bytes(), "02 00 22 11 44 33 11 22 33 44", "ScopedOrder")

    def test_legacy_tag_slice(self):
        assert_hex_equal(pack(Int8Slice([0, 1, 2, 3, 4]), "little"),
                         "05 00 00 01 02 03 04", "Int8Slice")

    def test_polyline(self):
        line = Polyline(name=b"ab", points=[Point(1, -1)], weight=0.5, color=[1, 2, 3])
        assert_hex_equal(pack(line, "little"),
                         "02 61 62 01 00 01 00 00 00 ff ff ff ff 00 00 00 3f 01 02 03",
                         "Polyline")

    def test_override_reaches_descendants(self):
        """Override on a composite member applies to the members inside it."""
        frame = Frame(header=Header(magic=b"BPK1", version=0x0102), payload=[1, 2])
        assert_hex_equal(pack(frame, "little"),
                         "42 50 4b 31 01 02 02 00 01 00 02 00", "Frame")

    def test_override_inherited_through_sequences(self):
        """Elements of an overridden sequence inherit its byte order."""
        table = Table(rows=[Row([1, 2]), Row([])])
        assert_hex_equal(pack(table, "little"),
                         "00 00 00 02 02 00 01 00 02 00", "Table")

    def test_no_framing_for_composites(self):
        assert pack(Point(1, 2), "big") == bytes.fromhex("0000000100000002")

    def test_all_scalar_widths(self):
        assert len(pack(AllScalars(), "big")) == 42


class TestRoundTrip:
    """decode(encode(v)) == v for every byte order."""

    @pytest.mark.parametrize("value", [
        ScopedOrder(a=[1, 0xFFFF], b=7),
        Int8Slice([-128, 0, 127]),
        Polyline(name=b"\x00\xff", points=[Point(-5, 5), Point(2**31 - 1, -2**31)],
                 weight=-1.25, color=[255, 0, 9]),
        Table(rows=[Row([-1, 32767]), Row([]), Row([0])]),
        Frame(header=Header(magic=b"\x01\x02\x03\x04", version=9), payload=list(range(300))),
        AllScalars(i8=-128, u8=255, i16=-32768, u16=65535, i32=-2**31, u32=2**32 - 1,
                   i64=-2**63, u64=2**64 - 1, f32=-2.5, f64=3.141592653589793),
        Polyline(),
    ])
    def test_round_trip(self, value, byte_order):
        data = pack(value, byte_order)
        assert unpack(data, type(value), byte_order, strict=True) == value

    def test_round_trip_into_existing_instance(self, byte_order):
        original = Polyline(name=b"xyz", points=[Point(3, 4)], weight=2.0, color=[7, 8, 9])
        target = Polyline()
        result = unpack(pack(original, byte_order), target, byte_order)
        assert result is target
        assert target == original


class TestLengthPrefix:
    """Prefix width and value."""

    @pytest.mark.parametrize("count", [0, 1, 255])
    def test_prefix_precedes_elements(self, count):
        data = pack(TinyPrefix(lead=9, items=[count % 256] * count), "little")
        assert data[0] == 9
        assert data[1] == count
        assert len(data) == 2 + count

    def test_overflow_writes_nothing_for_member(self, writer):
        """256 elements cannot be counted by a uint8 prefix."""
        with pytest.raises(SequenceTooLargeError) as exc:
            encode(writer, "little", TinyPrefix(lead=7, items=[0] * 256))
        assert writer.to_bytes() == b"\x07"
        assert exc.value.details["length"] == 256
        assert exc.value.details["max"] == 255
        assert exc.value.details["field"] == "TinyPrefix.items"


class TestSkip:
    """Skipped members occupy no wire space."""

    def test_skipped_members_absent(self):
        assert pack(Skipping(head=1, ignored=7, _cache="cached", tail=2), "little") == b"\x01\x02"

    def test_skipped_members_untouched_on_decode(self):
        target = Skipping(ignored=55, _cache="keep")
        decode(b"\x01\x02", "little", target)
        assert (target.head, target.ignored, target._cache, target.tail) == (1, 55, "keep", 2)
