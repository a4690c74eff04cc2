from dataclasses import dataclass, field, asdict
from typing import List

from ..shared.constants import DEFAULT_VALUE_TYPE
from ..shared.errors import EditResolutionError
from ..shared.utils import try_parse_int


@dataclass
class Cell:
    value: str = ""
    type: str = DEFAULT_VALUE_TYPE
    formula: str = ""
    style: str = ""


@dataclass
class Row:
    cells: List[Cell] = field(default_factory=list)


@dataclass
class Sheet:
    name: str
    rows: List[Row] = field(default_factory=list)

    @property
    def width(self) -> int:
        return max((len(r.cells) for r in self.rows), default=0)


@dataclass
class SpreadsheetModel:
    sheets: List[Sheet] = field(default_factory=list)

    def cell(self, address: "CellAddress"):
        # None, если адрес вне модели
        if not 0 <= address.sheet < len(self.sheets):
            return None
        rows = self.sheets[address.sheet].rows
        if not 0 <= address.row < len(rows):
            return None
        cells = rows[address.row].cells
        if not 0 <= address.column < len(cells):
            return None
        return cells[address.column]

    def to_dict(self) -> dict:
        return {
            "sheets": [
                {"name": s.name, "rows": [[asdict(c) for c in r.cells] for r in s.rows]}
                for s in self.sheets
            ]
        }


@dataclass(frozen=True)
class CellAddress:
    """Адрес ячейки: лист, строка, колонка (0-based, колонка после раскрытия повторов)."""
    sheet: int
    row: int
    column: int

    @classmethod
    def parse(cls, cell_id: str) -> "CellAddress":
        parts = (cell_id or "").split(":")
        nums = [try_parse_int(p) for p in parts]
        if len(nums) != 3 or any(n is None or n < 0 for n in nums):
            raise EditResolutionError(f"Некорректный адрес ячейки: {cell_id!r}")
        return cls(*nums)

    def __str__(self) -> str:
        return f"{self.sheet}:{self.row}:{self.column}"
