import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from ..shared.constants import DEBUG, LOG_DIR, LOG_FILE_NAME


_FMT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(debug: bool | None = None, log_path: str | None = None) -> None:
    """Лог в файл с ротацией; в отладке ещё и в консоль. Повторный вызов ничего не делает."""
    if debug is None:
        debug = DEBUG
    level = logging.DEBUG if debug else logging.INFO

    root = logging.getLogger()
    root.setLevel(level)
    if getattr(root, "_odsedit_configured", False):
        return

    if log_path is None:
        log_dir = Path(LOG_DIR) if LOG_DIR else Path.cwd() / "logs"
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
        except OSError:
            log_dir = Path.home() / ".odsedit" / "logs"
            log_dir.mkdir(parents=True, exist_ok=True)
        log_path = str(log_dir / LOG_FILE_NAME)

    fmt = logging.Formatter(fmt=_FMT, datefmt="%Y-%m-%d %H:%M:%S")

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    if debug:
        console = logging.StreamHandler()
        console.setLevel(level)
        console.setFormatter(fmt)
        root.addHandler(console)

    root._odsedit_configured = True
