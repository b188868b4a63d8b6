"""Tests for the PR_CONVERSATION_INDEX decoder."""

import uuid

import pytest

from smartview import ConversationIndex, Cursor, ResponseLevel, parse_conversation_index
from smartview.context import MAX_ENTRIES_SMALL
from smartview.parsers.conversation_index import parse_response_level
from smartview.render import render_text
from smartview.utils import FileTime


def decode(data):
    cursor = Cursor(data)
    return parse_conversation_index(cursor), cursor


class TestHeader:
    """The fixed 22-byte header."""

    def test_header_only(self, conversation_header, well_formed) -> None:
        block, cursor = decode(conversation_header)
        index = block.value
        assert isinstance(index, ConversationIndex)
        assert block.offset == 0
        assert block.size == 22
        assert cursor.offset == 22
        assert index.unnamed_byte == 0x01
        assert index.response_levels == ()
        well_formed(block, len(conversation_header))

    def test_filetime_restores_dropped_bits(self, conversation_header) -> None:
        block, _ = decode(conversation_header)
        filetime = block.value.filetime
        assert filetime == FileTime(low=0x04050000, high=0x01010203)
        assert filetime.value == 0x0101020304050000

    def test_guid_is_big_endian(self, conversation_header) -> None:
        block, _ = decode(conversation_header)
        assert block.value.guid == uuid.UUID('10111213-1415-1617-1819-1a1b1c1d1e1f')
        assert block.children[2].text == "GUID = {10111213-1415-1617-1819-1A1B1C1D1E1F}"

    def test_field_positions(self, conversation_header) -> None:
        block, _ = decode(conversation_header)
        spans = [(child.offset, child.size) for child in block.children]
        assert spans == [(0, 1), (1, 5), (6, 16)]

    def test_rendered_header(self, conversation_header) -> None:
        block, _ = decode(conversation_header)
        lines = render_text(block).splitlines()
        assert lines[0] == "Conversation Index"
        assert lines[1] == "  Unnamed byte = 0x01 = 1"
        assert lines[2].startswith(
            "  Current FILETIME: (Low = 0x04050000, High = 0x01010203) = ")
        assert lines[2].endswith(" UTC")
        assert lines[3] == "  GUID = {10111213-1415-1617-1819-1A1B1C1D1E1F}"


class TestResponseLevels:
    def test_single_level(self, conversation_header, response_level, well_formed) -> None:
        data = conversation_header + response_level
        block, cursor = decode(data)
        assert block.size == 27
        assert cursor.remaining() == 0
        assert block.value.response_levels == (ResponseLevel(True, 1, 2, 3),)
        level = block.children[3]
        assert (level.offset, level.size) == (22, 5)
        assert level.lines() == ["ResponseLevel[0]"]
        assert level.children[0].lines() == [
            "DeltaCode = 1", "TimeDelta = 0x00000001 = 1"]
        assert level.children[1].lines() == [
            "Random = 0x02 = 2", "ResponseLevel = 0x03 = 3"]
        well_formed(block, len(data))

    def test_partial_level_left_unread(self, conversation_header) -> None:
        block, cursor = decode(conversation_header + b'\x01\x02\x03')
        assert block.value.response_levels == ()
        assert block.size == 22
        assert cursor.offset == 22
        assert cursor.remaining() == 3

    def test_several_levels(self, conversation_header, well_formed) -> None:
        levels = bytes([0x00, 0x00, 0x00, 0x10, 0x11,
                        0x7F, 0xFF, 0xFF, 0xFF, 0xF0,
                        0x80, 0x00, 0x00, 0x00, 0x0F])
        data = conversation_header + levels + b'\xee'
        block, cursor = decode(data)
        assert block.value.response_levels == (
            ResponseLevel(False, 0x10, 1, 1),
            ResponseLevel(False, 0x7FFFFFFF, 0xF, 0),
            ResponseLevel(True, 0, 0, 0xF),
        )
        assert block.size == 37
        assert cursor.remaining() == 1
        assert [child.lines()[0] for child in block.children[3:]] == [
            "ResponseLevel[0]", "ResponseLevel[1]", "ResponseLevel[2]"]
        well_formed(block, len(data))

    def test_too_many_levels_skipped(self, conversation_header, response_level) -> None:
        data = conversation_header + response_level * MAX_ENTRIES_SMALL
        block, cursor = decode(data)
        assert block.value.response_levels == ()
        assert len(block.children) == 3
        assert block.size == 22
        assert cursor.offset == 22

    def test_just_under_limit(self, conversation_header, response_level) -> None:
        count = MAX_ENTRIES_SMALL - 1
        block, cursor = decode(conversation_header + response_level * count)
        assert len(block.value.response_levels) == count
        assert cursor.remaining() == 0

    def test_truncated_level(self) -> None:
        block = parse_response_level(Cursor(bytes([0x80, 0x00, 0x01])))
        assert block.size == 3
        assert block.value == ResponseLevel(True, 0x100, 0, 0)
        assert block.children[1].size == 0

    def test_level_index_in_label(self, response_level) -> None:
        block = parse_response_level(Cursor(response_level), 7)
        assert block.lines() == ["ResponseLevel[7]"]


class TestTruncation:
    """Short buffers shrink the tree and never raise."""

    @pytest.mark.parametrize('length', range(0, 33))
    def test_any_prefix(self, conversation_header, response_level, well_formed, length) -> None:
        data = (conversation_header + response_level * 2)[:length]
        block, cursor = decode(data)
        well_formed(block, len(data))
        assert block.size == cursor.offset
        assert block.size <= len(data)

    def test_empty_buffer(self) -> None:
        block, cursor = decode(b'')
        assert block.size == 0
        assert cursor.offset == 0
        assert block.value.unnamed_byte == 0
        assert block.value.guid == uuid.UUID(int=0)
        assert block.value.response_levels == ()

    def test_short_filetime(self) -> None:
        block, _ = decode(bytes([0x00, 0x12, 0x34]))
        current = block.children[1]
        assert (current.offset, current.size) == (1, 2)
        # Missing low-order bytes of the big-endian field read as zero.
        assert block.value.filetime.high == 0x01123400

    def test_short_guid(self, conversation_header) -> None:
        block, _ = decode(conversation_header[:10])
        guid = block.children[2]
        assert (guid.offset, guid.size) == (6, 4)
        assert block.value.guid == uuid.UUID('10111213-0000-0000-0000-000000000000')


def test_decode_is_repeatable(conversation_header, response_level) -> None:
    data = conversation_header + response_level
    first, _ = decode(data)
    second, _ = decode(data)
    assert first.value == second.value
    assert render_text(first) == render_text(second)
    assert first.to_dict() == second.to_dict()
