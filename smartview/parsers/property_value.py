"""Decoder for one serialized property value.

Each entry is a 4-byte little-endian property tag followed by a value whose
layout depends on the tag's type:

    PT_I2                 2 bytes
    PT_LONG, PT_R4        4 bytes
    PT_ERROR              4 bytes (SCODE)
    PT_BOOLEAN            2 bytes, non-zero is true
    PT_DOUBLE, PT_APPTIME 8 bytes
    PT_CURRENCY, PT_I8    8 bytes, signed
    PT_SYSTIME            8 bytes, low DWORD then high DWORD
    PT_CLSID              16 bytes, little-endian GUID layout
    PT_STRING8, PT_UNICODE, PT_BINARY
                          2-byte byte count, then the bytes
    PT_MV_BINARY          2-byte count, then per value a 4-byte byte count
                          and the bytes
    PT_MV_STRING8, PT_MV_UNICODE
                          2-byte count, then NUL-terminated strings

Types without a decoder consume the tag only. The named-property and
rule-condition flags change how an entry describes itself, never which bytes
it reads.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional

from ..block import Block
from ..context import DEFAULT_CONTEXT, MAX_BYTES, MAX_ENTRIES_LARGE, ParseContext
from ..cursor import Cursor
from ..mapi.properties import (
    PT_SHORT, PT_LONG, PT_FLOAT, PT_DOUBLE, PT_CURRENCY, PT_APPTIME,
    PT_ERROR, PT_BOOLEAN, PT_LONG_LONG, PT_STRING8, PT_UNICODE,
    PT_SYSTIME, PT_GUID, PT_BINARY, PT_MV_STRING8, PT_MV_UNICODE,
    PT_MV_BINARY,
    prop_id, prop_type, prop_tag_name, prop_type_name, is_named_id,
    error_name,
)
from ..utils import FileTime, format_filetime, format_guid, hex_string, printable

logger = logging.getLogger(__name__)

_APPTIME_EPOCH = datetime(1899, 12, 30)
_STRING8_ENCODING = 'cp1252'


@dataclass
class PropertyValue:
    """One decoded property: its position in the list, tag and value."""
    index: int
    tag: int
    value: Any = None
    named_properties: bool = False
    rule_condition: bool = False

    @property
    def prop_id(self) -> int:
        return prop_id(self.tag)

    @property
    def prop_type(self) -> int:
        return prop_type(self.tag)

    @property
    def name(self) -> Optional[str]:
        if self.named_properties and is_named_id(self.prop_id):
            return None
        return prop_tag_name(self.tag)


def _prop_strings(block: Block, prop_string: str, alt_prop_string: str = '') -> Block:
    return block.describe("PropString = {0}\nAltPropString = {1}",
                          prop_string, alt_prop_string)


def _split_hex(value: int) -> str:
    """64-bit value as 0xHIGH:0xLOW."""
    value &= 0xFFFFFFFFFFFFFFFF
    return f"0x{value >> 32:08X}:0x{value & 0xFFFFFFFF:08X}"


# --- Fixed-size values ---

def _parse_short(cursor: Cursor) -> Block:
    block = Block.read(cursor, 2, signed=True)
    return _prop_strings(block, str(block.value), f"0x{block.value & 0xFFFF:04X}")


def _parse_long(cursor: Cursor) -> Block:
    block = Block.read(cursor, 4, signed=True)
    return _prop_strings(block, str(block.value), f"0x{block.value & 0xFFFFFFFF:08X}")


def _read_float(cursor: Cursor, width: int) -> Block:
    offset = cursor.offset
    value, consumed = cursor.read_float(width)
    return Block(offset=offset, size=consumed, value=value)


def _parse_float(cursor: Cursor) -> Block:
    block = _read_float(cursor, 4)
    return _prop_strings(block, repr(block.value))


def _parse_double(cursor: Cursor) -> Block:
    block = _read_float(cursor, 8)
    return _prop_strings(block, repr(block.value))


def _parse_apptime(cursor: Cursor) -> Block:
    block = _read_float(cursor, 8)
    try:
        when = _APPTIME_EPOCH + timedelta(days=block.value)
        text = when.strftime('%Y-%m-%d %H:%M:%S')
    except (OverflowError, ValueError):
        text = "Invalid apptime"
    return _prop_strings(block, text, repr(block.value))


def _parse_currency(cursor: Cursor) -> Block:
    block = Block.read(cursor, 8, signed=True)
    units, fraction = divmod(abs(block.value), 10000)
    sign = '-' if block.value < 0 else ''
    return _prop_strings(block, f"{sign}{units}.{fraction:04d}", _split_hex(block.value))


def _parse_long_long(cursor: Cursor) -> Block:
    block = Block.read(cursor, 8, signed=True)
    return _prop_strings(block, str(block.value), _split_hex(block.value))


def _parse_boolean(cursor: Cursor) -> Block:
    block = Block.read(cursor, 2)
    raw = block.value
    block.value = bool(raw)
    return _prop_strings(block, str(block.value), f"0x{raw:04X}")


def _parse_error(cursor: Cursor) -> Block:
    block = Block.read(cursor, 4)
    name = error_name(block.value)
    text = f"Err: 0x{block.value:08X}"
    if name:
        text += f"={name}"
    return _prop_strings(block, text)


def _parse_systime(cursor: Cursor) -> Block:
    block = Block.read(cursor, 8)
    filetime = FileTime.from_value(block.value)
    block.value = filetime
    return _prop_strings(
        block, format_filetime(filetime.value),
        f"Low: 0x{filetime.low:08X} High: 0x{filetime.high:08X}")


def _parse_guid(cursor: Cursor) -> Block:
    block = Block.read_bytes(cursor, 16)
    guid = uuid.UUID(bytes_le=block.value.ljust(16, b'\x00'))
    block.value = guid
    return _prop_strings(block, format_guid(guid))


# --- Counted values ---

def _read_counted(cursor: Cursor, count_width: int) -> Block:
    """Byte count followed by that many bytes; value is the raw bytes."""
    counted = Block.empty_at(cursor)
    cb = counted.add_child(Block.read(cursor, count_width), "cb = {0:d}")
    data = counted.add_child(Block.read_bytes(cursor, min(cb.value, MAX_BYTES)))
    counted.value = data.value
    return counted


def _decode_string8(raw: bytes) -> str:
    return raw.decode(_STRING8_ENCODING, errors='replace').rstrip('\x00')


def _decode_unicode(raw: bytes) -> str:
    return raw.decode('utf-16-le', errors='replace').rstrip('\x00')


def _parse_string8(cursor: Cursor) -> Block:
    block = _read_counted(cursor, 2)
    raw = block.value
    block.value = _decode_string8(raw)
    return _prop_strings(block, block.value, hex_string(raw))


def _parse_unicode(cursor: Cursor) -> Block:
    block = _read_counted(cursor, 2)
    raw = block.value
    block.value = _decode_unicode(raw)
    return _prop_strings(block, block.value, hex_string(raw))


def _parse_binary(cursor: Cursor) -> Block:
    block = _read_counted(cursor, 2)
    return _prop_strings(
        block, f"cb: {len(block.value)} lpb: {hex_string(block.value)}",
        printable(block.value))


# --- Multi-valued ---

def _parse_multi(cursor: Cursor, read_one: Callable[[Cursor, int], Block],
                 render: Callable[[Any], str]) -> Block:
    multi = Block.empty_at(cursor)
    count = multi.add_child(Block.read(cursor, 2), "cValues = {0:d}").value
    values = []
    if 0 < count < MAX_ENTRIES_LARGE:
        for i in range(count):
            start = cursor.offset
            element = read_one(cursor, i)
            # Nothing read: the buffer is exhausted or holds half a unit.
            if cursor.offset == start:
                logger.debug("Multi-valued property ended after %d of %d values", i, count)
                break
            values.append(multi.add_child(element).value)
    elif count:
        logger.debug("Skipping %d values (limit %d)", count, MAX_ENTRIES_LARGE)
    multi.value = tuple(values)
    return _prop_strings(
        multi, f"{len(values)}: " + "; ".join(render(v) for v in values))


def _read_mv_binary(cursor: Cursor, index: int) -> Block:
    block = _read_counted(cursor, 4)
    return block.describe("lpbin[{0:d}] = cb: {1:d} lpb: {2}",
                          index, len(block.value), hex_string(block.value))


def _read_mv_string(cursor: Cursor, char_width: int, decode) -> Block:
    offset = cursor.offset
    raw, consumed = cursor.read_cstring(char_width)
    return Block(offset=offset, size=consumed, value=decode(raw))


def _read_mv_string8(cursor: Cursor, index: int) -> Block:
    block = _read_mv_string(cursor, 1, _decode_string8)
    return block.describe("lpszA[{0:d}] = {1}", index, block.value)


def _read_mv_unicode(cursor: Cursor, index: int) -> Block:
    block = _read_mv_string(cursor, 2, _decode_unicode)
    return block.describe("lpszW[{0:d}] = {1}", index, block.value)


def _parse_mv_binary(cursor: Cursor) -> Block:
    return _parse_multi(cursor, _read_mv_binary, hex_string)


def _parse_mv_string8(cursor: Cursor) -> Block:
    return _parse_multi(cursor, _read_mv_string8, str)


def _parse_mv_unicode(cursor: Cursor) -> Block:
    return _parse_multi(cursor, _read_mv_unicode, str)


VALUE_PARSERS: Dict[int, Callable[[Cursor], Block]] = {
    PT_SHORT: _parse_short,
    PT_LONG: _parse_long,
    PT_FLOAT: _parse_float,
    PT_DOUBLE: _parse_double,
    PT_CURRENCY: _parse_currency,
    PT_APPTIME: _parse_apptime,
    PT_ERROR: _parse_error,
    PT_BOOLEAN: _parse_boolean,
    PT_LONG_LONG: _parse_long_long,
    PT_STRING8: _parse_string8,
    PT_UNICODE: _parse_unicode,
    PT_SYSTIME: _parse_systime,
    PT_GUID: _parse_guid,
    PT_BINARY: _parse_binary,
    PT_MV_STRING8: _parse_mv_string8,
    PT_MV_UNICODE: _parse_mv_unicode,
    PT_MV_BINARY: _parse_mv_binary,
}


def _describe_tag(tag_block: Block, context: ParseContext) -> Block:
    tag = tag_block.value
    template = "Property = 0x{0:08X}\nType = {1}"
    args = [tag, prop_type_name(prop_type(tag))]
    if context.named_properties and is_named_id(prop_id(tag)):
        template += "\nNamed property ID = 0x{2:04X}"
        args.append(prop_id(tag))
    else:
        name = prop_tag_name(tag)
        if name:
            template += "\nName: {2}"
            args.append(name)
    return tag_block.describe(template, *args)


def parse_property_value(cursor: Cursor, index: int = 0,
                         context: Optional[ParseContext] = None) -> Block:
    """Decode one property entry at the cursor.

    The returned block's value is a PropertyValue. A tag cut short by the end
    of the buffer is kept but no value is read after it.
    """
    context = context or DEFAULT_CONTEXT
    entry = Block.empty_at(cursor)

    tag_block = entry.add_child(Block.read(cursor, 4))
    _describe_tag(tag_block, context)
    tag = tag_block.value

    value = None
    parser = VALUE_PARSERS.get(prop_type(tag)) if tag_block.size == 4 else None
    if parser:
        value = entry.add_child(parser(cursor)).value

    entry.value = PropertyValue(
        index=index,
        tag=tag,
        value=value,
        named_properties=context.named_properties,
        rule_condition=context.rule_condition,
    )

    header = "Property[{0:d}]"
    if context.named_properties:
        header += " (named property)"
    if context.rule_condition:
        header += " (rule condition)"
    return entry.describe(header, index)
