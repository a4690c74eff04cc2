import logging
import os
import shutil
import tempfile
import zipfile

from odf.opendocument import load
from odf.table import Table

from ..shared.constants import (
    CONTENT_XML, MIMETYPE_ENTRY, ODS_MIMETYPE, TEMP_PREFIX, VERIFY_ON_SAVE,
)
from ..shared.errors import ArchiveError


log = logging.getLogger(__name__)




def extract(path: str, target_dir: str | None = None) -> str:
    if not os.path.isfile(path):
        raise ArchiveError(f"Файл не найден: {path}")
    if not zipfile.is_zipfile(path):
        raise ArchiveError(f"Не ODS (не zip): {path}")
    if target_dir is None:
        target_dir = tempfile.mkdtemp(prefix=TEMP_PREFIX)
    os.makedirs(target_dir, exist_ok=True)
    try:
        with zipfile.ZipFile(path) as z:
            z.extractall(target_dir)
    except (zipfile.BadZipFile, OSError) as e:
        raise ArchiveError(f"Не удалось распаковать {path}: {e}") from e
    log.debug("Extracted %s -> %s", path, target_dir)
    return target_dir




def read_content(directory: str) -> str:
    p = os.path.join(directory, CONTENT_XML)
    if not os.path.isfile(p):
        raise ArchiveError("В пакете нет content.xml")
    try:
        with open(p, encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ArchiveError(f"Не удалось прочитать content.xml: {e}") from e




def write_content(directory: str, xml_text: str) -> None:
    p = os.path.join(directory, CONTENT_XML)
    try:
        with open(p, "w", encoding="utf-8", newline="") as f:
            f.write(xml_text)
    except (OSError, UnicodeEncodeError) as e:
        raise ArchiveError(f"Не удалось записать content.xml: {e}") from e




def _package_entries(directory: str):
    # mimetype первым, остальное по алфавиту
    out = []
    for root, dirs, files in os.walk(directory):
        dirs.sort()
        for name in sorted(files):
            full = os.path.join(root, name)
            arc = os.path.relpath(full, directory).replace(os.sep, "/")
            if arc != MIMETYPE_ENTRY:
                out.append((full, arc))
    return out




def pack(directory: str, target_path: str) -> str:
    target_dir = os.path.dirname(os.path.abspath(target_path))
    try:
        fd, tmp = tempfile.mkstemp(prefix=TEMP_PREFIX, suffix=".ods", dir=target_dir)
    except OSError as e:
        raise ArchiveError(f"Нет доступа к папке {target_dir}: {e}") from e
    os.close(fd)
    try:
        with zipfile.ZipFile(tmp, "w", zipfile.ZIP_DEFLATED) as z:
            mt = os.path.join(directory, MIMETYPE_ENTRY)
            if os.path.isfile(mt):
                z.write(mt, MIMETYPE_ENTRY, compress_type=zipfile.ZIP_STORED)
            else:
                z.writestr(MIMETYPE_ENTRY, ODS_MIMETYPE, compress_type=zipfile.ZIP_STORED)
            for full, arc in _package_entries(directory):
                z.write(full, arc)
        if VERIFY_ON_SAVE:
            verify_package(tmp)
        os.replace(tmp, target_path)
    except ArchiveError:
        _silent_remove(tmp)
        raise
    except OSError as e:
        _silent_remove(tmp)
        raise ArchiveError(f"Не удалось записать {target_path}: {e}") from e
    log.info("Packed %s -> %s", directory, target_path)
    return target_path




def verify_package(path: str) -> None:
    """Открыть пакет через odfpy: должен быть лист электронной таблицы."""
    try:
        doc = load(path)
    except Exception as e:
        raise ArchiveError(f"Собранный пакет не читается: {e}") from e
    spreadsheet = getattr(doc, "spreadsheet", None)
    if spreadsheet is None:
        raise ArchiveError("Собранный пакет не является электронной таблицей")
    log.debug("Verified %s: %d table(s)", path, len(spreadsheet.getElementsByType(Table)))




def _silent_remove(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass




class OdsArchive:
    """Пакет .ods, распакованный во временную папку на время правки."""

    def __init__(self, path: str):
        self.path = os.path.abspath(path)
        self.workdir: str | None = None

    def open(self) -> str:
        base = os.path.basename(self.path)
        try:
            self.workdir = tempfile.mkdtemp(prefix=f"{TEMP_PREFIX}{base}-")
        except OSError as e:
            raise ArchiveError(f"Не удалось создать временную папку: {e}") from e
        try:
            extract(self.path, self.workdir)
            return read_content(self.workdir)
        except ArchiveError:
            self.close()
            raise

    def save(self, xml_text: str) -> str:
        if self.workdir is None:
            raise ArchiveError("Пакет не открыт")
        write_content(self.workdir, xml_text)
        return pack(self.workdir, self.path)

    def close(self) -> None:
        if self.workdir and os.path.isdir(self.workdir):
            shutil.rmtree(self.workdir, ignore_errors=True)
            log.debug("Removed temp dir %s", self.workdir)
        self.workdir = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
