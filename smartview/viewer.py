"""SmartView block viewer.

GUI with the decoded block tree on the left and a hex dump of the source
buffer on the right. Selecting a block highlights the bytes it came from.
Read-only: nothing here writes values back anywhere.
"""

import logging
import sys
from pathlib import Path

from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QFileDialog, QTreeWidget, QTreeWidgetItem,
    QSplitter, QTextEdit, QPlainTextEdit, QComboBox, QMessageBox,
)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QColor, QFont, QTextCharFormat, QTextCursor

from .block import Block
from .exceptions import SmartViewError
from .registry import default_registry
from .render import ADDRESS_WIDTH, HEX_WIDTH, hexdump
from .utils import parse_hex

logger = logging.getLogger(__name__)

_RANGE_ROLE = Qt.ItemDataRole.UserRole
_HIGHLIGHT_COLOR = '#ffe08a'


class MainWindow(QMainWindow):
    def __init__(self, registry=None):
        super().__init__()
        self.setWindowTitle("SmartView Block Viewer")
        self.setMinimumSize(1000, 700)

        self.registry = registry or default_registry
        self.data = b''
        self.root = None
        self.highlighted = None  # (offset, size) of the selected block

        self._setup_ui()
        self._setup_menu()

    def _setup_menu(self):
        menubar = self.menuBar()

        file_menu = menubar.addMenu("&File")

        open_action = QAction("&Open Binary...", self)
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(self._on_browse)
        file_menu.addAction(open_action)

        file_menu.addSeparator()

        exit_action = QAction("E&xit", self)
        exit_action.setShortcut("Ctrl+Q")
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

    def _setup_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)

        top_widget = QWidget()
        top_layout = QHBoxLayout(top_widget)
        top_layout.setContentsMargins(2, 0, 2, 0)

        top_layout.addWidget(QLabel("Parser:"))
        self.parser_combo = QComboBox()
        self.parser_combo.addItems(self.registry.parser_names)
        self.parser_combo.setMinimumWidth(180)
        top_layout.addWidget(self.parser_combo)

        self.parse_btn = QPushButton("Parse")
        self.parse_btn.clicked.connect(self._on_parse)
        top_layout.addWidget(self.parse_btn)
        top_layout.addStretch()
        layout.addWidget(top_widget)

        self.input_edit = QPlainTextEdit()
        self.input_edit.setPlaceholderText("Hex bytes, e.g. 01 01 02 03 ...")
        self.input_edit.setFixedHeight(60)
        self.input_edit.setFont(QFont("Consolas", 9))
        layout.addWidget(self.input_edit)

        splitter = QSplitter(Qt.Orientation.Horizontal)

        self.tree = QTreeWidget()
        self.tree.setHeaderLabels(["Block", "Offset", "Size"])
        self.tree.setColumnWidth(0, 420)
        self.tree.currentItemChanged.connect(self._on_block_selected)
        splitter.addWidget(self.tree)

        self.hex_view = QTextEdit()
        self.hex_view.setReadOnly(True)
        self.hex_view.setFont(QFont("Consolas", 9))
        self.hex_view.setLineWrapMode(QTextEdit.LineWrapMode.NoWrap)
        splitter.addWidget(self.hex_view)

        splitter.setSizes([550, 450])
        layout.addWidget(splitter)

        self.statusBar().showMessage("Ready")

    def load(self, data: bytes, parser_name: str, context=None) -> Block:
        """Decode data with the named parser and show the result."""
        self.data = data
        self.root = self.registry.parse(parser_name, data, context)
        self.highlighted = None

        self.hex_view.setPlainText(hexdump(data))
        self.hex_view.setExtraSelections([])

        self.tree.clear()
        self.tree.addTopLevelItem(self._make_item(self.root))
        self.tree.expandAll()

        index = self.parser_combo.findText(parser_name)
        if index >= 0:
            self.parser_combo.setCurrentIndex(index)
        self.statusBar().showMessage(f"{parser_name}: {len(data)} bytes")
        return self.root

    def open_file(self, path: Path):
        data = Path(path).read_bytes()
        self.input_edit.setPlainText(data.hex(' '))
        return self.load(data, self.parser_combo.currentText())

    def _make_item(self, block: Block) -> QTreeWidgetItem:
        lines = block.lines()
        label = lines[0] if lines else ''
        item = QTreeWidgetItem([label, f"0x{block.offset:x}", str(block.size)])
        if len(lines) > 1:
            item.setToolTip(0, '\n'.join(lines))
            # Extra lines of a multi-line block sit under it as plain rows.
            for line in lines[1:]:
                extra = QTreeWidgetItem([line, '', ''])
                extra.setData(0, _RANGE_ROLE, (block.offset, block.size))
                item.addChild(extra)
        item.setData(0, _RANGE_ROLE, (block.offset, block.size))
        for child in block.children:
            item.addChild(self._make_item(child))
        return item

    def _on_block_selected(self, current, previous):
        if current is None:
            return
        offset, size = current.data(0, _RANGE_ROLE)
        self.highlight(offset, size)

    def highlight(self, offset: int, size: int):
        """Shade the hex pairs for bytes [offset, offset + size)."""
        self.highlighted = (offset, size)
        fmt = QTextCharFormat()
        fmt.setBackground(QColor(_HIGHLIGHT_COLOR))

        doc = self.hex_view.document()
        selections = []
        for pos in range(offset, min(offset + size, len(self.data))):
            row, col = divmod(pos, HEX_WIDTH)
            start = doc.findBlockByNumber(row).position() + ADDRESS_WIDTH + col * 3
            cursor = QTextCursor(doc)
            cursor.setPosition(start)
            cursor.setPosition(start + 2, QTextCursor.MoveMode.KeepAnchor)
            selection = QTextEdit.ExtraSelection()
            selection.cursor = cursor
            selection.format = fmt
            selections.append(selection)
        self.hex_view.setExtraSelections(selections)
        self.statusBar().showMessage(f"Offset 0x{offset:x}, {size} bytes")

    def _on_parse(self):
        try:
            data = parse_hex(self.input_edit.toPlainText())
            self.load(data, self.parser_combo.currentText())
        except SmartViewError as e:
            QMessageBox.warning(self, "Parse", str(e))

    def _on_browse(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open Binary", "", "All Files (*)")
        if not path:
            return
        try:
            self.open_file(Path(path))
        except OSError as e:
            logger.warning("Could not open %s: %s", path, e)
            QMessageBox.critical(self, "Open", f"Could not open {path}:\n{e}")


def main():
    app = QApplication(sys.argv)
    app.setStyle("Fusion")
    window = MainWindow()
    if len(sys.argv) > 1:
        window.open_file(Path(sys.argv[1]))
    window.show()
    sys.exit(app.exec())


if __name__ == '__main__':
    main()
