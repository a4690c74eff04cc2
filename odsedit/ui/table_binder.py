from PyQt5.QtWidgets import QTableWidget, QTableWidgetItem
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QColor
from openpyxl.utils import get_column_letter

from ..domain.types import Sheet
from ..shared.constants import ERROR_DOCUMENT, ERROR_TABLE, ERROR_ROW, ERROR_CELL, MIN_COL_WIDTH


ERROR_BG = QColor("#FFC7CE")
PAD_BG = QColor("#F5F5F5")
_ERROR_VALUES = {ERROR_DOCUMENT, ERROR_TABLE, ERROR_ROW, ERROR_CELL}


class TableBinder:
    """Показывает один лист модели в QTableWidget и сообщает о правках."""

    def __init__(self, table: QTableWidget, on_edit):
        self.table = table
        self.on_edit = on_edit  # (cell_id "s:r:c", text)
        self.sheet_index = 0
        table.itemChanged.connect(self._item_changed)

    def bind_sheet(self, sheet_index: int, sheet: Sheet):
        t = self.table
        self.sheet_index = sheet_index
        cols = sheet.width
        t.blockSignals(True)
        try:
            t.clear()
            t.setRowCount(len(sheet.rows))
            t.setColumnCount(cols)
            t.setHorizontalHeaderLabels([get_column_letter(c + 1) for c in range(cols)])
            t.setVerticalHeaderLabels([str(r + 1) for r in range(len(sheet.rows))])
            for r, row in enumerate(sheet.rows):
                for c in range(cols):
                    it = QTableWidgetItem("")
                    if c < len(row.cells):
                        cell = row.cells[c]
                        it.setText(cell.value)
                        it.setToolTip(_tooltip(cell))
                        if cell.value in _ERROR_VALUES:
                            it.setBackground(ERROR_BG)
                    else:
                        # за пределами строки узла нет, править нечего
                        it.setFlags(it.flags() & ~Qt.ItemIsEditable)
                        it.setBackground(PAD_BG)
                    t.setItem(r, c, it)
            for c in range(cols):
                if t.columnWidth(c) < MIN_COL_WIDTH:
                    t.setColumnWidth(c, MIN_COL_WIDTH)
        finally:
            t.blockSignals(False)

    def _item_changed(self, item: QTableWidgetItem):
        cell_id = f"{self.sheet_index}:{item.row()}:{item.column()}"
        self.on_edit(cell_id, item.text())


def _tooltip(cell) -> str:
    parts = [f"тип: {cell.type}"]
    if cell.formula:
        parts.append(f"формула: {cell.formula}")
    if cell.style:
        parts.append(f"стиль: {cell.style}")
    return "\n".join(parts)
