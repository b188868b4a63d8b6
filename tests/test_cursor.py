"""Tests for the Cursor read head."""

import struct

from smartview import Cursor


class TestReadFixed:
    """Fixed-width integer reads."""

    def test_little_endian(self) -> None:
        cursor = Cursor(b'\x78\x56\x34\x12')
        assert cursor.read_fixed(4) == (0x12345678, 4)
        assert cursor.offset == 4
        assert cursor.remaining() == 0

    def test_big_endian(self) -> None:
        cursor = Cursor(b'\x12\x34')
        assert cursor.read_fixed(2, 'big') == (0x1234, 2)

    def test_signed(self) -> None:
        cursor = Cursor(b'\xff\xff\xfe\xff\xff\xff')
        assert cursor.read_fixed(2, signed=True) == (-1, 2)
        assert cursor.read_fixed(4, signed=True) == (-2, 4)

    def test_short_read_zero_pads_high_bytes(self) -> None:
        """Only two of four bytes remain: value is built from those two."""
        cursor = Cursor(b'\x34\x12')
        assert cursor.read_fixed(4) == (0x1234, 2)
        assert cursor.offset == 2

    def test_short_big_endian_read(self) -> None:
        cursor = Cursor(b'\x12\x34')
        assert cursor.read_fixed(4, 'big') == (0x1234, 2)

    def test_short_signed_read_is_unsigned(self) -> None:
        cursor = Cursor(b'\xff')
        assert cursor.read_fixed(2, signed=True) == (0xFF, 1)

    def test_short_signed_read_keeps_high_bit(self) -> None:
        cursor = Cursor(b'\x00\x80\xff')
        assert cursor.read_fixed(4, signed=True) == (0xFF8000, 3)

    def test_read_past_end(self) -> None:
        cursor = Cursor(b'\x01')
        cursor.read_fixed(1)
        assert cursor.read_fixed(8) == (0, 0)
        assert cursor.offset == 1


class TestCursorMovement:
    """Offsets, peeking and skipping."""

    def test_initial_offset_is_clamped(self) -> None:
        assert Cursor(b'abc', offset=10).offset == 3
        assert Cursor(b'abc', offset=-5).offset == 0

    def test_peek_does_not_advance(self) -> None:
        cursor = Cursor(b'abcdef')
        assert cursor.peek(3) == b'abc'
        assert cursor.offset == 0

    def test_read_clamps(self) -> None:
        cursor = Cursor(b'abc')
        assert cursor.read(10) == b'abc'
        assert cursor.read(1) == b''

    def test_advance_clamps(self) -> None:
        cursor = Cursor(b'abcdef')
        assert cursor.advance(4) == 4
        assert cursor.advance(4) == 2
        assert cursor.offset == 6

    def test_negative_width_reads_nothing(self) -> None:
        cursor = Cursor(b'abc')
        assert cursor.read(-1) == b''
        assert cursor.advance(-3) == 0
        assert cursor.offset == 0

    def test_size_is_whole_buffer(self) -> None:
        cursor = Cursor(bytearray(b'abcdef'), offset=2)
        assert cursor.size == 6
        assert cursor.remaining() == 4


class TestReadFloat:
    def test_double(self) -> None:
        cursor = Cursor(struct.pack('<d', 1.5))
        assert cursor.read_float(8) == (1.5, 8)

    def test_float(self) -> None:
        cursor = Cursor(struct.pack('<f', -2.0))
        assert cursor.read_float(4) == (-2.0, 4)

    def test_empty(self) -> None:
        assert Cursor(b'').read_float(4) == (0.0, 0)


class TestReadCString:
    """NUL-terminated strings."""

    def test_terminator_consumed(self) -> None:
        cursor = Cursor(b'ab\x00cd')
        assert cursor.read_cstring() == (b'ab', 3)
        assert cursor.offset == 3

    def test_missing_terminator_takes_rest(self) -> None:
        cursor = Cursor(b'ab\x00cd')
        cursor.read_cstring()
        assert cursor.read_cstring() == (b'cd', 2)
        assert cursor.remaining() == 0

    def test_wide_string(self) -> None:
        data = 'hi'.encode('utf-16-le') + b'\x00\x00' + b'\xff'
        cursor = Cursor(data)
        assert cursor.read_cstring(2) == ('hi'.encode('utf-16-le'), 6)
        assert cursor.remaining() == 1

    def test_wide_terminator_must_be_aligned(self) -> None:
        """A zero high byte followed by a zero low byte is not a terminator."""
        data = b'\x41\x00\x00\x42\x00\x00'
        cursor = Cursor(data)
        assert cursor.read_cstring(2) == (b'\x41\x00\x00\x42', 6)

    def test_wide_odd_tail_left_unread(self) -> None:
        cursor = Cursor(b'a\x00b')
        assert cursor.read_cstring(2) == (b'a\x00', 2)
        assert cursor.remaining() == 1
