"""
Shared test configuration and fixtures.

Provides sample conversation-index buffers and a checker for the structural
rules every decoded block tree must follow.
"""

import pytest

from smartview import Block

# 0x01 unnamed byte, FILETIME high bytes 01 02 03, low bytes 04 05, then GUID.
CONVERSATION_HEADER = bytes([0x01, 0x01, 0x02, 0x03, 0x04, 0x05]) + bytes(range(0x10, 0x20))

RESPONSE_LEVEL = bytes([0x80, 0x00, 0x00, 0x01, 0x23])


def check_tree(block: Block, length: int):
    """Assert the offset/size rules for block and everything under it."""
    for _, node in block.walk():
        assert node.offset >= 0
        assert node.size >= 0
        assert node.offset + node.size <= length
        if node.children:
            assert node.size == sum(child.size for child in node.children)
            assert node.offset == node.children[0].offset
            for prev, nxt in zip(node.children, node.children[1:]):
                assert prev.offset <= nxt.offset
                assert prev.offset + prev.size <= nxt.offset


@pytest.fixture
def conversation_header() -> bytes:
    return CONVERSATION_HEADER


@pytest.fixture
def response_level() -> bytes:
    return RESPONSE_LEVEL


@pytest.fixture
def well_formed():
    """Checker asserting a block tree respects offsets, sizes and ordering."""
    return check_tree
