"""Text rendering for block trees.

render_text() walks a tree and lays out each block's own lines, indenting a
block's children one level deeper when the block itself printed something.
hexdump() produces the paired byte view; given an (offset, size) range it
marks the highlighted bytes with a caret line under each affected row.
"""

from typing import Iterator, List, Optional, Tuple

from .block import Block

INDENT = '  '
HEX_WIDTH = 16
# Width of the '00000000  ' address column in hexdump rows.
ADDRESS_WIDTH = 10


def _render_lines(block: Block, depth: int, out: List[str], indent: str):
    own = block.lines()
    for line in own:
        out.append(indent * depth + line)
    child_depth = depth + 1 if own else depth
    for child in block.children:
        _render_lines(child, child_depth, out, indent)


def render_text(block: Block, indent: str = INDENT) -> str:
    lines = []
    _render_lines(block, 0, lines, indent)
    return '\n'.join(lines)


def block_ranges(block: Block) -> Iterator[Tuple[int, int, int, str]]:
    """Yield (depth, offset, size, label) for every block in the tree.

    The label is the block's first rendered line, or '' for blocks that
    only group their children.
    """
    for depth, node in block.walk():
        own = node.lines()
        yield depth, node.offset, node.size, own[0] if own else ''


def hexdump(data: bytes, highlight: Optional[Tuple[int, int]] = None,
            width: int = HEX_WIDTH) -> str:
    lines = []
    start, end = (highlight[0], highlight[0] + highlight[1]) if highlight else (0, 0)
    for i in range(0, len(data), width):
        chunk = data[i:i + width]
        hex_part = ' '.join(f'{b:02x}' for b in chunk)
        ascii_part = ''.join(chr(b) if 32 <= b < 127 else '.' for b in chunk)
        lines.append(f'{i:08x}  {hex_part:<{width * 3}}  {ascii_part}')
        if start < end and i < end and start < i + len(chunk):
            marks = ''.join('^^ ' if start <= i + j < end else '   '
                            for j in range(len(chunk)))
            lines.append((' ' * ADDRESS_WIDTH + marks).rstrip())
    return '\n'.join(lines)
