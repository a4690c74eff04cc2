from PyQt5.QtWidgets import QFileDialog, QMessageBox


def ask_open_ods(parent):
    return QFileDialog.getOpenFileName(parent, "Открыть ODS", "", "ODS (*.ods)")[0]


def show_error(parent, text: str):
    QMessageBox.critical(parent, "Ошибка", text)
