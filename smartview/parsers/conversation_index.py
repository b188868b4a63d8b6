"""PR_CONVERSATION_INDEX decoder.

A conversation index is a 22-byte header followed by 5-byte response levels,
one per reply in the thread. All multi-byte fields are big-endian.

Header layout:
    byte 0       reserved, shown as-is
    bytes 1-3    FILETIME high word, bits 0-23 (bits 24-31 are always 0x01
                 and not stored)
    bytes 4-5    FILETIME low word, bits 16-31 (bits 0-15 are not stored)
    bytes 6-21   GUID: Data1 (4), Data2 (2), Data3 (2), Data4 (8)

Response level layout:
    bytes 0-3    bit 31: delta code; bits 0-30: time delta
    byte 4       high nibble: random; low nibble: level

See [MS-OXOMSG] 2.2.1.3.
"""

import logging
import uuid
from typing import NamedTuple, Optional, Tuple

from ..block import Block
from ..context import MAX_ENTRIES_SMALL, ParseContext
from ..cursor import Cursor
from ..utils import FileTime, format_filetime, format_guid

logger = logging.getLogger(__name__)

HEADER_SIZE = 22
RESPONSE_LEVEL_SIZE = 5

_FILETIME_HIGH_BYTE = 0x01
_DELTA_CODE_BIT = 0x80000000


class ResponseLevel(NamedTuple):
    delta_code: bool
    time_delta: int
    random: int
    level: int


class ConversationIndex(NamedTuple):
    unnamed_byte: int
    filetime: FileTime
    guid: uuid.UUID
    response_levels: Tuple[ResponseLevel, ...]


def _read_be(cursor: Cursor, width: int) -> Block:
    """Big-endian leaf; bytes missing at the end contribute zero."""
    offset = cursor.offset
    raw = cursor.read(width)
    value = int.from_bytes(raw.ljust(width, b'\x00'), 'big')
    return Block(offset=offset, size=len(raw), value=value)


def parse_response_level(cursor: Cursor, index: int = 0) -> Block:
    """Decode one 5-byte response level (fewer if the buffer runs out)."""
    level = Block.empty_at(cursor)

    delta = _read_be(cursor, 4)
    delta_code = bool(delta.value & _DELTA_CODE_BIT)
    time_delta = delta.value & ~_DELTA_CODE_BIT
    delta.value = (delta_code, time_delta)
    level.add_child(
        delta,
        "DeltaCode = {0:d}\nTimeDelta = 0x{1:08X} = {1:d}",
        delta_code, time_delta)

    nibbles = _read_be(cursor, 1)
    random, level_nibble = nibbles.value >> 4, nibbles.value & 0x0F
    nibbles.value = (random, level_nibble)
    level.add_child(
        nibbles,
        "Random = 0x{0:02X} = {0:d}\nResponseLevel = 0x{1:02X} = {1:d}",
        random, level_nibble)

    level.value = ResponseLevel(delta_code, time_delta, random, level_nibble)
    return level.describe("ResponseLevel[{0:d}]", index)


def parse_conversation_index(cursor: Cursor,
                             context: Optional[ParseContext] = None) -> Block:
    """Decode a conversation index starting at the cursor.

    Trailing bytes that do not make up a whole response level are left
    unread for the caller.
    """
    root = Block.empty_at(cursor).describe("Conversation Index")

    unnamed = root.add_child(Block.read(cursor, 1), "Unnamed byte = 0x{0:02X} = {0:d}")

    # The encoding drops the high byte of the FILETIME, which is always 1.
    high = _read_be(cursor, 3)
    low = _read_be(cursor, 2)
    filetime = FileTime(low=low.value << 16,
                        high=(_FILETIME_HIGH_BYTE << 24) | high.value)
    current = Block(offset=high.offset, size=high.size + low.size, value=filetime)
    root.add_child(
        current,
        "Current FILETIME: (Low = 0x{0:08X}, High = 0x{1:08X}) = {2}",
        filetime.low, filetime.high, format_filetime(filetime.value))

    # Data1-3 are stored big-endian, which is the uuid module's own byte order.
    guid_offset = cursor.offset
    raw_guid = cursor.read(16)
    guid = uuid.UUID(bytes=raw_guid.ljust(16, b'\x00'))
    guid_block = Block(offset=guid_offset, size=len(raw_guid), value=guid)
    root.add_child(guid_block, "GUID = {0}", format_guid(guid))

    levels = []
    remaining = cursor.remaining()
    count = remaining // RESPONSE_LEVEL_SIZE if remaining > 0 else 0
    if 0 < count < MAX_ENTRIES_SMALL:
        for i in range(count):
            level = root.add_child(parse_response_level(cursor, i))
            levels.append(level.value)
    elif count:
        logger.debug("Skipping %d response levels (limit %d)", count, MAX_ENTRIES_SMALL)

    root.value = ConversationIndex(unnamed.value, filetime, guid, tuple(levels))
    return root
