import logging
from dataclasses import dataclass

from ..domain.types import CellAddress
from ..infra.ods_io import OdsArchive
from ..shared.constants import OPEN_AFTER_SAVE
from ..shared.errors import ArchiveError, EditResolutionError, SerializationError
from ..usecases.edit_session import EditSession


log = logging.getLogger(__name__)


@dataclass
class Model:
    archive: OdsArchive
    session: EditSession


class Presenter:
    def __init__(self, view):
        self.view = view
        self.model: Model | None = None

    # Загрузка
    def open_ods(self, path: str):
        self.close()
        archive = OdsArchive(path)
        try:
            content = archive.open()
        except ArchiveError as e:
            log.exception("Failed to open %s", path)
            self.view.show_error(f"Не удалось открыть ODS: {e}")
            return
        session = EditSession(content)
        self.model = Model(archive, session)
        log.info("Opened %s (%d sheet(s))", path, len(session.model.sheets))
        self.view.show_model(session.model, path)
        if not session.editable:
            self.view.show_status("Документ не разобран, правка недоступна")

    # Правка ячейки
    def edit_cell(self, cell_id: str, value: str):
        if self.model is None:
            return
        session = self.model.session
        try:
            address = CellAddress.parse(cell_id)
            current = session.model.cell(address)
            if current is not None and current.value == value:
                return
            xml = session.apply_edit(address, value)
        except (EditResolutionError, SerializationError) as e:
            log.warning("Edit %s rejected: %s", cell_id, e)
            self.view.show_error(f"Не удалось изменить ячейку: {e}")
            self.view.refresh_sheet()
            return
        # тип и подсказка ячейки изменились
        self.view.refresh_sheet()
        self.save_changes(xml)

    # Сохранение
    def save_changes(self, xml: str):
        try:
            path = self.model.archive.save(xml)
        except ArchiveError as e:
            # текущий текст сессии остаётся, следующая правка пойдёт от него
            log.exception("Failed to save %s", self.model.archive.path)
            self.view.show_error(f"Не удалось сохранить: {e}")
            return
        self.view.show_status("Сохранено")
        if OPEN_AFTER_SAVE:
            self.view.open_external(path)

    def close(self):
        if self.model is not None:
            self.model.archive.close()
            self.model = None
