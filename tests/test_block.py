"""Tests for Block construction and description."""

from smartview import Block, Cursor


class TestLeaves:
    def test_read_records_position(self) -> None:
        cursor = Cursor(b'\x00\x01\x02\x03')
        cursor.advance(1)
        block = Block.read(cursor, 2)
        assert (block.offset, block.size, block.value) == (1, 2, 0x0201)
        assert block.end == 3

    def test_read_truncated(self) -> None:
        cursor = Cursor(b'\xaa')
        block = Block.read(cursor, 4)
        assert (block.offset, block.size, block.value) == (0, 1, 0xAA)

    def test_read_bytes(self) -> None:
        cursor = Cursor(b'abcdef')
        block = Block.read_bytes(cursor, 10)
        assert block.value == b'abcdef'
        assert block.size == 6

    def test_empty_at(self) -> None:
        cursor = Cursor(b'abc', offset=2)
        block = Block.empty_at(cursor, value=())
        assert (block.offset, block.size, block.value) == (2, 0, ())
        assert block.children == []


class TestComposite:
    """Composites track the span of their children."""

    def test_first_child_sets_offset(self) -> None:
        cursor = Cursor(b'\x00' * 8)
        parent = Block(offset=99)
        cursor.advance(2)
        parent.add_child(Block.read(cursor, 2))
        parent.add_child(Block.read(cursor, 4))
        assert parent.offset == 2
        assert parent.size == 6
        assert parent.end == 8

    def test_add_child_returns_child(self) -> None:
        cursor = Cursor(b'\x05')
        parent = Block.empty_at(cursor)
        child = parent.add_child(Block.read(cursor, 1), "n = {0:d}")
        assert child is parent.children[0]
        assert child.text == "n = 5"

    def test_zero_size_child(self) -> None:
        cursor = Cursor(b'\x01')
        parent = Block.empty_at(cursor)
        parent.add_child(Block.read(cursor, 1))
        parent.add_child(Block.read(cursor, 4))
        assert parent.size == 1
        assert parent.children[1].offset == 1
        assert parent.children[1].size == 0


class TestDescribe:
    def test_value_fills_template_without_args(self) -> None:
        block = Block(value=0x2A).describe("Value = 0x{0:02X}")
        assert block.lines() == ["Value = 0x2A"]

    def test_args_take_precedence(self) -> None:
        block = Block(value=1).describe("{0} and {1}", 'a', 'b')
        assert block.text == "a and b"

    def test_multi_line(self) -> None:
        block = Block().describe("A = {0}\nB = {1}", 1, 2)
        assert block.lines() == ["A = 1", "B = 2"]

    def test_no_template_no_lines(self) -> None:
        assert Block(value=3).lines() == []
        assert Block().text == ''

    def test_describe_is_stable(self) -> None:
        block = Block(value=7).describe("v = {0}")
        assert block.text == block.text


class TestWalk:
    def test_walk_depths(self) -> None:
        root = Block().describe("root")
        child = root.add_child(Block(offset=0, size=1), "child")
        child.add_child(Block(offset=0, size=1), "leaf")
        depths = [(depth, node.text) for depth, node in root.walk()]
        assert depths == [(0, "root"), (1, "child"), (2, "leaf")]

    def test_to_dict(self) -> None:
        root = Block().describe("root")
        root.add_child(Block(offset=3, size=2, value=9), "v = {0}")
        assert root.to_dict() == {
            'offset': 3,
            'size': 2,
            'text': ["root"],
            'children': [
                {'offset': 3, 'size': 2, 'text': ["v = 9"], 'children': []},
            ],
        }
