"""Decoder for a run of serialized property values.

Entries are decoded back to back until the configured maximum is reached or
an entry consumes nothing, which happens once the buffer is exhausted.
"""

import logging
from typing import Optional

from ..block import Block
from ..context import DEFAULT_CONTEXT, MAX_ENTRIES_SMALL, ParseContext
from ..cursor import Cursor
from .property_value import parse_property_value

logger = logging.getLogger(__name__)


def parse_property_list(cursor: Cursor, context: Optional[ParseContext] = None) -> Block:
    """Decode up to context.max_entries property values.

    A maximum above MAX_ENTRIES_SMALL is refused outright and yields an
    empty list without reading anything. The returned block's value is a
    tuple of PropertyValue.
    """
    context = context or DEFAULT_CONTEXT
    props = Block.empty_at(cursor, value=())

    if context.max_entries > MAX_ENTRIES_SMALL:
        logger.debug("Refusing property list of %d entries (limit %d)",
                     context.max_entries, MAX_ENTRIES_SMALL)
        return props

    values = []
    while len(values) < context.max_entries:
        start = cursor.offset
        entry = parse_property_value(cursor, len(values), context)
        # Nothing read: the buffer is exhausted. The empty entry is dropped.
        if cursor.offset == start:
            break
        values.append(props.add_child(entry).value)

    props.value = tuple(values)
    return props
