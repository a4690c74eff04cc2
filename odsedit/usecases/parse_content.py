import logging
from dataclasses import replace
from typing import List

from lxml import etree

from ..domain.types import Cell, Row, Sheet, SpreadsheetModel
from ..domain import odf_tree as odf
from ..shared.constants import (
    DEFAULT_SHEET_NAME, DEFAULT_VALUE_TYPE, MAX_COLUMNS,
    ERROR_DOCUMENT, ERROR_TABLE, ERROR_ROW, ERROR_CELL,
)
from ..shared.errors import ParseError


log = logging.getLogger(__name__)


def _xml_parser():
    # сущности не раскрываем, большие листы разрешаем
    return etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)


def load_tree(xml_text: str):
    if not xml_text or not xml_text.strip():
        raise ParseError("Пустой content.xml")
    try:
        root = etree.fromstring(xml_text.encode("utf-8"), _xml_parser())
    except etree.XMLSyntaxError as e:
        raise ParseError(f"Некорректный XML: {e}") from e
    return root.getroottree()


def error_model(message: str = ERROR_DOCUMENT) -> SpreadsheetModel:
    return SpreadsheetModel(sheets=[Sheet(name=DEFAULT_SHEET_NAME.format(1), rows=[Row([Cell(value=message)])])])


def parse(xml_text: str) -> SpreadsheetModel:
    """content.xml -> модель. Не бросает: при любой ошибке лист-заглушка."""
    try:
        tree = load_tree(xml_text)
    except Exception:
        log.exception("Failed to load content.xml")
        return error_model()
    return build_model(tree)


def build_model(tree) -> SpreadsheetModel:
    try:
        tables = odf.spreadsheet_tables(tree)
        if not tables:
            raise ParseError("В документе нет листов")
        sheets = [_convert_table(t, i) for i, t in enumerate(tables)]
    except Exception:
        log.exception("Failed to parse spreadsheet content")
        return error_model()
    log.debug("Parsed %d sheet(s)", len(sheets))
    return SpreadsheetModel(sheets=sheets)


def _convert_table(table, index: int) -> Sheet:
    name = table.get(odf.NAME) or DEFAULT_SHEET_NAME.format(index + 1)
    try:
        rows = [_convert_row(r) for r in odf.table_rows(table)]
        return Sheet(name=name, rows=rows)
    except Exception:
        log.exception("Failed to convert table %r", name)
        return Sheet(name=name, rows=[Row([Cell(value=ERROR_TABLE)])])


def _convert_row(row) -> Row:
    try:
        raw_cells = odf.row_cells(row)
        if not raw_cells:
            return Row([Cell()])
        cells: List[Cell] = []
        for raw in raw_cells:
            n = min(odf.repeat_count(raw), MAX_COLUMNS - len(cells))
            proto = _convert_cell(raw)
            # копии независимы
            cells.extend(replace(proto) for _ in range(n))
            if len(cells) >= MAX_COLUMNS:
                break
        return Row(cells)
    except Exception:
        log.exception("Failed to convert row")
        return Row([Cell(value=ERROR_ROW)])


def _convert_cell(cell) -> Cell:
    try:
        return Cell(
            value=odf.cell_text(cell),
            type=cell.get(odf.VALUE_TYPE) or DEFAULT_VALUE_TYPE,
            formula=cell.get(odf.FORMULA) or "",
            style=cell.get(odf.STYLE) or "",
        )
    except Exception:
        log.exception("Failed to convert cell")
        return Cell(value=ERROR_CELL)
