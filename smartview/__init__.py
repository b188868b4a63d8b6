"""smartview - decode opaque binary MAPI property values into block trees.

Each decoder walks a Cursor over the raw bytes and returns a Block tree: every
node knows its offset and size in the source buffer, its decoded value, and
how to describe itself as text.
"""

from .block import Block
from .context import MAX_ENTRIES_LARGE, MAX_ENTRIES_SMALL, ParseContext
from .cursor import Cursor
from .exceptions import DuplicateParserError, SmartViewError, UnknownParserError
from .parsers import (
    ConversationIndex,
    PropertyValue,
    ResponseLevel,
    parse_conversation_index,
    parse_property_list,
    parse_property_value,
)
from .registry import SmartViewRegistry, default_registry
from .render import block_ranges, hexdump, render_text

__version__ = '0.1.0'

__all__ = [
    'Block',
    'Cursor',
    'ParseContext',
    'MAX_ENTRIES_SMALL',
    'MAX_ENTRIES_LARGE',
    'SmartViewError',
    'UnknownParserError',
    'DuplicateParserError',
    'ConversationIndex',
    'ResponseLevel',
    'PropertyValue',
    'parse_conversation_index',
    'parse_property_list',
    'parse_property_value',
    'SmartViewRegistry',
    'default_registry',
    'render_text',
    'block_ranges',
    'hexdump',
]
