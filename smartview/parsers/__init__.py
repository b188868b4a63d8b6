"""Format decoders.

Every decoder takes a Cursor and an optional ParseContext and returns the
root Block of what it decoded.
"""

from .conversation_index import (
    ConversationIndex, ResponseLevel, parse_conversation_index, parse_response_level,
)
from .property_list import parse_property_list
from .property_value import PropertyValue, VALUE_PARSERS, parse_property_value

__all__ = [
    'ConversationIndex',
    'ResponseLevel',
    'PropertyValue',
    'VALUE_PARSERS',
    'parse_conversation_index',
    'parse_response_level',
    'parse_property_list',
    'parse_property_value',
]
