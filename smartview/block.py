"""Block tree produced by the smartview decoders.

A Block is one decoded field or sub-structure: where it sits in the source
buffer (offset, size), the value it decoded to, and the children it owns.
Leaves come from a single Cursor read. Composites start empty at a cursor
position and grow through add_child(), which keeps

    composite.offset == children[0].offset
    composite.size == sum(child.size for child in children)

Each block also carries a str.format template bound to its own arguments.
The template is only used to describe the block; parsing never reads it.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Tuple

from .cursor import Cursor


@dataclass
class Block:
    offset: int = 0
    size: int = 0
    value: Any = None
    template: str = ''
    args: tuple = ()
    children: List['Block'] = field(default_factory=list)

    @property
    def end(self) -> int:
        return self.offset + self.size

    # --- Construction ---

    @classmethod
    def read(cls, cursor: Cursor, width: int, byteorder: str = 'little',
             signed: bool = False) -> 'Block':
        """Read an integer leaf of nominal width bytes."""
        offset = cursor.offset
        value, consumed = cursor.read_fixed(width, byteorder, signed)
        return cls(offset=offset, size=consumed, value=value)

    @classmethod
    def read_bytes(cls, cursor: Cursor, width: int) -> 'Block':
        """Read a raw byte leaf of up to width bytes."""
        offset = cursor.offset
        data = cursor.read(width)
        return cls(offset=offset, size=len(data), value=data)

    @classmethod
    def empty_at(cls, cursor: Cursor, value: Any = None) -> 'Block':
        """An empty block at the cursor position, ready to take children."""
        return cls(offset=cursor.offset, value=value)

    def add_child(self, child: 'Block', template: str = None, *args) -> 'Block':
        """Append child, describe it with template if given, and return it."""
        if template is not None:
            child.describe(template, *args)
        if not self.children:
            self.offset = child.offset
        self.children.append(child)
        self.size += child.size
        return child

    def describe(self, template: str, *args) -> 'Block':
        """Bind a text template; with no args the value fills {0}."""
        self.template = template
        self.args = args
        return self

    # --- Describing ---

    def lines(self) -> List[str]:
        """Rendered text of this block alone, one entry per line."""
        if not self.template:
            return []
        args = self.args if self.args else (self.value,)
        return self.template.format(*args).splitlines()

    @property
    def text(self) -> str:
        return '\n'.join(self.lines())

    def walk(self, depth: int = 0) -> Iterator[Tuple[int, 'Block']]:
        """Yield (depth, block) for this block and all descendants."""
        yield depth, self
        for child in self.children:
            yield from child.walk(depth + 1)

    def to_dict(self) -> dict:
        return {
            'offset': self.offset,
            'size': self.size,
            'text': self.lines(),
            'children': [child.to_dict() for child in self.children],
        }
