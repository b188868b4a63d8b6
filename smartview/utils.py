"""Formatting helpers shared by the decoders and the renderers."""

import re
import uuid
from datetime import datetime, timedelta, timezone
from typing import NamedTuple, Optional

from .exceptions import SmartViewError

# Windows FILETIME epoch: January 1, 1601
_FILETIME_EPOCH = datetime(1601, 1, 1, tzinfo=timezone.utc)
_TICKS_PER_SECOND = 10_000_000  # 100-nanosecond intervals


class FileTime(NamedTuple):
    """A FILETIME split into its two 32-bit words."""
    low: int
    high: int

    @property
    def value(self) -> int:
        return (self.high << 32) | self.low

    @classmethod
    def from_value(cls, ft: int) -> 'FileTime':
        return cls(ft & 0xFFFFFFFF, (ft >> 32) & 0xFFFFFFFF)

    def to_datetime(self) -> Optional[datetime]:
        return filetime_to_datetime(self.value)


def datetime_to_filetime(dt: datetime) -> int:
    """Convert a Python datetime to a Windows FILETIME (64-bit integer).

    FILETIME = number of 100-nanosecond intervals since January 1, 1601 UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    delta = dt - _FILETIME_EPOCH
    return (delta.days * 86400 + delta.seconds) * _TICKS_PER_SECOND + delta.microseconds * 10


def filetime_to_datetime(ft: int) -> Optional[datetime]:
    """Convert a FILETIME to an aware UTC datetime, or None if out of range."""
    try:
        return _FILETIME_EPOCH + timedelta(microseconds=ft // 10)
    except OverflowError:
        return None


def format_filetime(ft: int) -> str:
    """Human-readable UTC time for a FILETIME value."""
    dt = filetime_to_datetime(ft)
    if dt is None:
        return "Invalid systime"
    return dt.strftime('%Y-%m-%d %H:%M:%S.') + f"{dt.microsecond // 1000:03d} UTC"


def format_guid(guid: uuid.UUID) -> str:
    """Registry-style GUID text: {XXXXXXXX-XXXX-XXXX-XXXX-XXXXXXXXXXXX}."""
    return '{' + str(guid).upper() + '}'


def hex_string(data: bytes) -> str:
    """Upper-case contiguous hex, e.g. b'\\x01\\xab' -> '01AB'."""
    return data.hex().upper()


def printable(data: bytes) -> str:
    """ASCII rendering with non-printable bytes shown as '.'."""
    return ''.join(chr(b) if 32 <= b < 127 else '.' for b in data)


_HEX_NOISE = re.compile(r'0x|[\s,:-]', re.IGNORECASE)


def parse_hex(text: str) -> bytes:
    """Parse hex text as typed by a user.

    Whitespace, commas, colons, dashes and 0x prefixes are ignored, so
    '01 02 03', '0x010203' and '01:02:03' all give the same three bytes.
    """
    cleaned = _HEX_NOISE.sub('', text)
    try:
        return bytes.fromhex(cleaned)
    except ValueError as e:
        raise SmartViewError(f"Invalid hex input: {e}", {"input": text[:64]}) from e
