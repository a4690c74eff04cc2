"""Навигация по дереву content.xml.

Одни и те же функции определяют, что такое лист, строка и колонка, и для
разбора, и для правки: иначе адрес из модели не совпадёт с узлом в дереве.
"""
from typing import List

from lxml import etree

from ..shared.errors import ParseError


OFFICE_NS = "urn:oasis:names:tc:opendocument:xmlns:office:1.0"
TABLE_NS = "urn:oasis:names:tc:opendocument:xmlns:table:1.0"
TEXT_NS = "urn:oasis:names:tc:opendocument:xmlns:text:1.0"
CALCEXT_NS = "urn:org:documentfoundation:names:experimental:calc:xmlns:calcext:1.0"

NS = {"office": OFFICE_NS, "table": TABLE_NS, "text": TEXT_NS, "calcext": CALCEXT_NS}


def q(prefixed: str) -> str:
    """'table:name' -> '{urn:...table:1.0}name'"""
    prefix, local = prefixed.split(":", 1)
    return f"{{{NS[prefix]}}}{local}"


# Узлы
DOCUMENT_CONTENT = q("office:document-content")
BODY = q("office:body")
SPREADSHEET = q("office:spreadsheet")
TABLE = q("table:table")
ROW = q("table:table-row")
CELL = q("table:table-cell")
COVERED_CELL = q("table:covered-table-cell")
ROW_GROUPS = (q("table:table-header-rows"), q("table:table-rows"), q("table:table-row-group"))
P = q("text:p")
S = q("text:s")
TAB = q("text:tab")
LINE_BREAK = q("text:line-break")

# Атрибуты
NAME = q("table:name")
REPEAT = q("table:number-columns-repeated")
VALUE_TYPE = q("office:value-type")
CALC_VALUE_TYPE = q("calcext:value-type")
FORMULA = q("table:formula")
STYLE = q("table:style-name")
SPACE_COUNT = q("text:c")


def children(parent, *tags) -> List[etree._Element]:
    """Дочерние узлы с нужными тегами, всегда списком: 0, 1 или N штук."""
    if parent is None:
        return []
    return [el for el in parent if el.tag in tags]


def child(parent, tag):
    found = children(parent, tag)
    if not found:
        where = parent.tag if parent is not None else "документ"
        raise ParseError(f"Нет узла {tag} в {where}")
    return found[0]


def spreadsheet_tables(tree) -> List[etree._Element]:
    root = tree.getroot() if hasattr(tree, "getroot") else tree
    if root.tag != DOCUMENT_CONTENT:
        raise ParseError(f"Корень не office:document-content: {root.tag}")
    spreadsheet = child(child(root, BODY), SPREADSHEET)
    return children(spreadsheet, TABLE)


def table_rows(table) -> List[etree._Element]:
    # строки внутри header-rows / row-group идут в общем порядке документа
    rows = []
    for el in table:
        if el.tag == ROW:
            rows.append(el)
        elif el.tag in ROW_GROUPS:
            rows.extend(table_rows(el))
    return rows


def row_cells(row) -> List[etree._Element]:
    return children(row, CELL, COVERED_CELL)


def repeat_count(cell) -> int:
    raw = cell.get(REPEAT)
    if raw is None:
        return 1
    try:
        n = int(str(raw).strip())
    except ValueError:
        return 1
    return max(1, n)


def set_repeat(cell, n: int) -> None:
    if n > 1:
        cell.set(REPEAT, str(n))
    elif REPEAT in cell.attrib:
        del cell.attrib[REPEAT]


def _inline_text(el) -> str:
    parts = [el.text or ""]
    for sub in el:
        if sub.tag == S:
            try:
                n = int(sub.get(SPACE_COUNT) or 1)
            except ValueError:
                n = 1
            parts.append(" " * max(1, n))
        elif sub.tag == TAB:
            parts.append("\t")
        elif sub.tag == LINE_BREAK:
            parts.append("\n")
        elif isinstance(sub.tag, str):
            parts.append(_inline_text(sub))
        parts.append(sub.tail or "")
    return "".join(parts)


def cell_text(cell) -> str:
    return " ".join(_inline_text(p) for p in children(cell, P))
