"""Bounds-checked read head over a borrowed byte buffer.

Every read is clamped to the bytes that remain, so a decoder walking a
truncated buffer never fails; it just gets fewer bytes back and sees the
shortfall in the consumed count.
"""

import struct
from typing import Tuple

_FLOAT_FORMATS = {4: '<f', 8: '<d'}


class Cursor:
    """Sequential reader over a buffer it does not own.

    Usage:
        cursor = Cursor(data)
        value, consumed = cursor.read_fixed(4)
        if cursor.remaining():
            ...
    """

    __slots__ = ('_data', '_offset')

    def __init__(self, data: bytes, offset: int = 0):
        self._data = data
        self._offset = min(max(offset, 0), len(data))

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def size(self) -> int:
        """Length of the whole underlying buffer."""
        return len(self._data)

    def remaining(self) -> int:
        return len(self._data) - self._offset

    def peek(self, width: int) -> bytes:
        """Return up to width bytes without moving the cursor."""
        width = max(width, 0)
        return bytes(self._data[self._offset:self._offset + width])

    def read(self, width: int) -> bytes:
        """Read up to width bytes; the result is shorter at the buffer end."""
        chunk = self.peek(width)
        self._offset += len(chunk)
        return chunk

    def advance(self, width: int) -> int:
        """Skip up to width bytes and return how many were skipped."""
        step = min(max(width, 0), self.remaining())
        self._offset += step
        return step

    def read_fixed(self, width: int, byteorder: str = 'little',
                   signed: bool = False) -> Tuple[int, int]:
        """Read an integer of nominal width bytes.

        Returns:
            Tuple of (value, consumed). When fewer than width bytes remain
            the value is built from what is there, with the missing
            high-order bytes taken as zero. A short read is never sign
            extended, even when signed is set, so it comes back unsigned.
        """
        chunk = self.read(width)
        if not chunk:
            return 0, 0
        if signed and len(chunk) < width:
            # Sign only applies to a complete value.
            return int.from_bytes(chunk, byteorder), len(chunk)
        return int.from_bytes(chunk, byteorder, signed=signed), len(chunk)

    def read_float(self, width: int) -> Tuple[float, int]:
        """Read a little-endian IEEE 754 value of 4 or 8 bytes."""
        chunk = self.read(width)
        padded = chunk.ljust(width, b'\x00')
        return struct.unpack(_FLOAT_FORMATS[width], padded)[0], len(chunk)

    def read_cstring(self, char_width: int = 1) -> Tuple[bytes, int]:
        """Read a NUL-terminated run of char_width-byte units.

        The terminator is consumed when present but not returned. Without a
        terminator the rest of the buffer (whole units only) is taken.

        Returns:
            Tuple of (raw bytes without terminator, consumed).
        """
        start = self._offset
        end = len(self._data)
        pos = start
        terminator = b'\x00' * char_width
        while pos + char_width <= end:
            if self._data[pos:pos + char_width] == terminator:
                raw = bytes(self._data[start:pos])
                self._offset = pos + char_width
                return raw, self._offset - start
            pos += char_width
        raw = bytes(self._data[start:pos])
        self._offset = pos
        return raw, pos - start

    def __repr__(self):
        return f"Cursor(offset={self._offset}, remaining={self.remaining()})"
