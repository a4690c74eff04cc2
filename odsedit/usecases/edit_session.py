import logging

from ..domain.types import Cell, CellAddress, SpreadsheetModel
from ..shared.errors import EditResolutionError, SerializationError
from .apply_edit import apply_edit
from .parse_content import load_tree, build_model, error_model


log = logging.getLogger(__name__)


class EditSession:
    """Один открытый документ: текущий content.xml, его дерево и модель.

    Дерево принадлежит только сессии; каждая правка читает, меняет и заново
    сериализует именно его, поэтому вторая правка видит результат первой.
    """

    def __init__(self, xml_text: str):
        self.current_content = xml_text
        self._tree = None
        try:
            self._tree = load_tree(xml_text)
        except Exception:
            log.exception("Document opened read-only: content.xml did not load")
            self.model: SpreadsheetModel = error_model()
        else:
            self.model = build_model(self._tree)

    @property
    def editable(self) -> bool:
        return self._tree is not None

    def apply_edit(self, cell_id, value: str) -> str:
        address = cell_id if isinstance(cell_id, CellAddress) else CellAddress.parse(cell_id)
        if self._tree is None:
            raise EditResolutionError("Документ не загружен, правка невозможна")
        try:
            text = apply_edit(self._tree, address, value)
        except SerializationError:
            # откат: дерево снова из последнего удачного текста
            self._tree = load_tree(self.current_content)
            raise
        self.current_content = text
        self._refresh_cell(address, value)
        return text

    def _refresh_cell(self, address: CellAddress, value: str) -> None:
        old = self.model.cell(address)
        if old is None:
            return
        cells = self.model.sheets[address.sheet].rows[address.row].cells
        cells[address.column] = Cell(value=value, type="string", formula=old.formula, style=old.style)
