import os

from PyQt5.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QLabel, QTableWidget, QTabBar
from PyQt5.QtCore import QUrl, QTimer
from PyQt5.QtGui import QDesktopServices, QFont
from ..shared.constants import UI_FONT_PT
from .table_binder import TableBinder
from . import dialogs


class MainWindow(QWidget):
    def __init__(self, presenter_cls):
        super().__init__()
        self.setWindowTitle("ODS редактор")
        f = QFont(self.font()); f.setPointSizeF(UI_FONT_PT); self.setFont(f)
        root = QVBoxLayout(self)
        bar = QHBoxLayout()
        btn_open_ods = QPushButton("Открыть .ods"); btn_open_ods.clicked.connect(self._open_ods)
        bar.addWidget(btn_open_ods)
        bar.addStretch(1)
        root.addLayout(bar)

        self.table = QTableWidget(0, 0, self)
        root.addWidget(self.table, 1)
        self.tabs = QTabBar(self)
        self.tabs.currentChanged.connect(self._switch_sheet)
        root.addWidget(self.tabs)
        self.status_label = QLabel("")
        root.addWidget(self.status_label)

        self._model = None
        self._presenter = presenter_cls(self)
        self.binder = TableBinder(self.table, self._presenter.edit_cell)

    # API для Presenter
    def show_model(self, model, path: str = ""):
        self._model = model
        self.setWindowTitle(f"ODS редактор - {os.path.basename(path)}" if path else "ODS редактор")
        self.tabs.blockSignals(True)
        try:
            while self.tabs.count():
                self.tabs.removeTab(0)
            for s in model.sheets:
                self.tabs.addTab(s.name)
            self.tabs.setCurrentIndex(0)
        finally:
            self.tabs.blockSignals(False)
        self._switch_sheet(0)

    def show_error(self, text: str):
        self.status_label.setText(text)
        dialogs.show_error(self, text)

    def show_status(self, text: str):
        self.status_label.setText(text)

    def refresh_sheet(self):
        # после сигнала itemChanged, не внутри него
        QTimer.singleShot(0, lambda: self._switch_sheet(self.tabs.currentIndex()))

    def open_external(self, path: str):
        QDesktopServices.openUrl(QUrl.fromLocalFile(path))

    # slots -> presenter
    def _switch_sheet(self, index: int):
        if self._model is None or not 0 <= index < len(self._model.sheets):
            return
        self.binder.bind_sheet(index, self._model.sheets[index])

    def _open_ods(self):
        p = dialogs.ask_open_ods(self)
        if p:
            self.open_path(p)

    def open_path(self, path: str):
        self._presenter.open_ods(path)

    def closeEvent(self, event):
        self._presenter.close()
        super().closeEvent(event)
