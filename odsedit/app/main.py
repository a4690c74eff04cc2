import logging
import sys
from PyQt5.QtWidgets import QApplication
from ..ui.main_window import MainWindow
from ..ui.presenter import Presenter
from ..shared.constants import WINDOW_SIZE
from .logging_setup import setup_logging


def main():
    setup_logging()
    logging.getLogger(__name__).debug("Starting, argv=%r", sys.argv)
    app = QApplication(sys.argv)
    w = MainWindow(Presenter)
    w.resize(*WINDOW_SIZE)
    w.show()
    # odsedit file.ods
    paths = [a for a in app.arguments()[1:] if a.lower().endswith(".ods")]
    if paths:
        w.open_path(paths[0])
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
