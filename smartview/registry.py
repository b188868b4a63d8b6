"""Maps property tags to the decoders that understand their binary values.

Tags can be registered either in full (ID and type) or by ID alone, keyed as
prop_tag(id, PT_UNSPECIFIED). A full-tag registration wins over an ID-only
one, so a decoder can claim every type of an ID and still be overridden for
one specific tag.
"""

import logging
from typing import Callable, Dict, Iterable, Optional, Tuple

from .block import Block
from .context import DEFAULT_CONTEXT, ParseContext
from .cursor import Cursor
from .exceptions import DuplicateParserError, UnknownParserError
from .mapi.properties import PR_CONVERSATION_INDEX, prop_id, prop_tag, PT_UNSPECIFIED
from .parsers import parse_conversation_index, parse_property_list
from .utils import hex_string

logger = logging.getLogger(__name__)

Parser = Callable[[Cursor, ParseContext], Block]


def unparsed_block(cursor: Cursor) -> Block:
    """Claim whatever the decoder left behind so it still shows up."""
    block = Block.read_bytes(cursor, cursor.remaining())
    return block.describe("Unparsed data size = 0x{0:08X}\n{1}",
                          block.size, hex_string(block.value))


class SmartViewRegistry:
    """Named decoders plus the tag table that selects among them.

    Usage:
        registry = SmartViewRegistry()
        registry.register_parser('conversation-index', parse_conversation_index)
        registry.register_tag(PR_CONVERSATION_INDEX, 'conversation-index')
        block = registry.parse_property(PR_CONVERSATION_INDEX, data)
    """

    def __init__(self):
        self._parsers: Dict[str, Parser] = {}
        self._tags: Dict[int, str] = {}

    def register_parser(self, name: str, parser: Parser, replace: bool = False):
        if name in self._parsers and not replace:
            existing = self._parsers[name]
            raise DuplicateParserError(name, getattr(existing, '__name__', repr(existing)))
        self._parsers[name] = parser

    def register_tag(self, tag: int, name: str, replace: bool = False):
        """Route tag to the parser called name.

        Pass prop_tag(id, PT_UNSPECIFIED) to route every type of an ID.
        """
        if name not in self._parsers:
            raise UnknownParserError(name)
        existing = self._tags.get(tag)
        if existing is not None and existing != name and not replace:
            raise DuplicateParserError(tag, existing)
        self._tags[tag] = name

    @property
    def parser_names(self) -> Tuple[str, ...]:
        return tuple(sorted(self._parsers))

    def tags(self) -> Iterable[Tuple[int, str]]:
        return sorted(self._tags.items())

    def parser_for_tag(self, tag: int) -> Optional[str]:
        name = self._tags.get(tag)
        if name is None:
            name = self._tags.get(prop_tag(prop_id(tag), PT_UNSPECIFIED))
        return name

    def get(self, name: str) -> Parser:
        try:
            return self._parsers[name]
        except KeyError:
            raise UnknownParserError(name) from None

    def parse(self, name: str, data: bytes,
              context: Optional[ParseContext] = None) -> Block:
        """Run the named decoder over data.

        Bytes the decoder leaves unread are appended to its root block as an
        unparsed data block. A root that is a single leaf is first wrapped
        in an untitled block so the two sit side by side.
        """
        parser = self.get(name)
        cursor = Cursor(data)
        root = parser(cursor, context or DEFAULT_CONTEXT)
        if cursor.remaining():
            logger.debug("%s left %d of %d bytes unparsed",
                         name, cursor.remaining(), cursor.size)
            if root.size and not root.children:
                leaf, root = root, Block(value=root.value)
                root.add_child(leaf)
            root.add_child(unparsed_block(cursor))
        return root

    def parse_property(self, tag: int, data: bytes,
                       context: Optional[ParseContext] = None) -> Optional[Block]:
        """Decode a property value, or return None if no decoder claims tag."""
        name = self.parser_for_tag(tag)
        if name is None:
            logger.debug("No parser registered for tag 0x%08X", tag)
            return None
        return self.parse(name, data, context)


def build_default_registry() -> SmartViewRegistry:
    registry = SmartViewRegistry()
    registry.register_parser('conversation-index', parse_conversation_index)
    registry.register_parser('property-list', parse_property_list)
    registry.register_tag(PR_CONVERSATION_INDEX, 'conversation-index')
    return registry


default_registry = build_default_registry()
