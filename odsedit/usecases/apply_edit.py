import copy
import logging
import re
from dataclasses import dataclass

from lxml import etree

from ..domain import odf_tree as odf
from ..domain.types import CellAddress
from ..shared.errors import EditResolutionError, ParseError, SerializationError


log = logging.getLogger(__name__)


@dataclass
class CellTarget:
    row: object
    cell: object  # None: в строке нет ни одной ячейки
    offset: int   # позиция внутри повторённой ячейки


def locate_cell(tree, address: CellAddress) -> CellTarget:
    """Найти узел, которому принадлежит колонка адреса. Дерево не меняется."""
    try:
        tables = odf.spreadsheet_tables(tree)
    except ParseError as e:
        raise EditResolutionError(f"В документе нет листов: {e}") from e
    if not 0 <= address.sheet < len(tables):
        raise EditResolutionError(f"Нет листа {address.sheet}")
    rows = odf.table_rows(tables[address.sheet])
    if not 0 <= address.row < len(rows):
        raise EditResolutionError(f"Нет строки {address.row} на листе {address.sheet}")
    row = rows[address.row]
    cells = odf.row_cells(row)
    if not cells:
        if address.column == 0:
            return CellTarget(row, None, 0)
        raise EditResolutionError(f"Нет ячейки {address}")
    start = 0
    for cell in cells:
        span = odf.repeat_count(cell)
        if address.column < start + span:
            return CellTarget(row, cell, address.column - start)
        start += span
    raise EditResolutionError(f"Нет ячейки {address}")


def split_repeated(cell, offset: int):
    """Разрезать ячейку с повтором N на [offset] + целевая + [N-offset-1].

    Возвращает целевую ячейку; остальные копии сохраняют все атрибуты.
    """
    span = odf.repeat_count(cell)
    if span <= 1:
        return cell
    parent = cell.getparent()
    idx = parent.index(cell)
    before, after = offset, span - offset - 1
    pieces = []
    if before:
        pieces.append(_copy_with_repeat(cell, before))
    target = _copy_with_repeat(cell, 1)
    pieces.append(target)
    if after:
        pieces.append(_copy_with_repeat(cell, after))
    for i, piece in enumerate(pieces):
        parent.insert(idx + i, piece)
    parent.remove(cell)
    log.debug("Split repeated cell (%d) at offset %d", span, offset)
    return target


def _copy_with_repeat(cell, n: int):
    el = copy.deepcopy(cell)
    odf.set_repeat(el, n)
    return el


# пробелы и табуляции в ODF схлопываются: пишем их узлами text:s / text:tab
_WHITESPACE = re.compile(r" +|\t")


def _append_text(p, text: str) -> None:
    if not text:
        return
    if len(p):
        p[-1].tail = (p[-1].tail or "") + text
    else:
        p.text = (p.text or "") + text


def _append_line(p, line: str) -> None:
    pos = 0
    for m in _WHITESPACE.finditer(line):
        _append_text(p, line[pos:m.start()])
        run = m.group()
        if run == "\t":
            etree.SubElement(p, odf.TAB)
        elif len(run) == 1 and 0 < m.start() and m.end() < len(line):
            _append_text(p, run)
        else:
            s = etree.SubElement(p, odf.S)
            if len(run) > 1:
                s.set(odf.SPACE_COUNT, str(len(run)))
        pos = m.end()
    _append_text(p, line[pos:])


def make_paragraph(value: str):
    # обратное к odf_tree.cell_text: \n -> text:line-break
    p = etree.Element(odf.P, nsmap={"text": odf.TEXT_NS})
    lines = (value or "").split("\n")
    try:
        _append_line(p, lines[0])
        for line in lines[1:]:
            etree.SubElement(p, odf.LINE_BREAK)
            _append_line(p, line)
    except ValueError as e:
        raise SerializationError(f"Недопустимые символы в значении: {e}") from e
    return p


def overwrite_cell(cell, paragraph) -> None:
    cell.set(odf.VALUE_TYPE, "string")
    if odf.CALC_VALUE_TYPE in cell.attrib:
        cell.set(odf.CALC_VALUE_TYPE, "string")
    old = odf.children(cell, odf.P)
    pos = cell.index(old[0]) if old else len(cell)
    for p in old:
        cell.remove(p)
    cell.insert(pos, paragraph)


def serialize(tree) -> str:
    try:
        data = etree.tostring(tree, xml_declaration=True, encoding="UTF-8")
    except Exception as e:
        raise SerializationError(f"Не удалось собрать content.xml: {e}") from e
    return data.decode("utf-8")


def apply_edit(tree, address: CellAddress, new_value: str) -> str:
    """Записать строку в одну ячейку дерева и вернуть новый content.xml.

    Меняется только целевая ячейка (и, если она была повторённой, её узел
    режется на части). Ошибка адреса -> EditResolutionError без изменений.
    """
    target = locate_cell(tree, address)
    paragraph = make_paragraph(new_value)
    if target.cell is None:
        cell = etree.SubElement(target.row, odf.CELL)
    else:
        cell = split_repeated(target.cell, target.offset)
    overwrite_cell(cell, paragraph)
    log.info("Cell %s set (%d chars)", address, len(new_value or ""))
    return serialize(tree)
