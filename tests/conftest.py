from pathlib import Path

import pytest
from odf.opendocument import OpenDocumentSpreadsheet
from odf.table import Table, TableRow, TableCell
from odf.text import P


NS_DECL = (
    'xmlns:office="urn:oasis:names:tc:opendocument:xmlns:office:1.0" '
    'xmlns:table="urn:oasis:names:tc:opendocument:xmlns:table:1.0" '
    'xmlns:text="urn:oasis:names:tc:opendocument:xmlns:text:1.0" '
    'xmlns:calcext="urn:org:documentfoundation:names:experimental:calc:xmlns:calcext:1.0"'
)


def build_content(tables: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<office:document-content {NS_DECL} office:version="1.2">'
        "<office:body><office:spreadsheet>"
        f"{tables}"
        "</office:spreadsheet></office:body></office:document-content>"
    )


@pytest.fixture
def content_xml():
    """Builder: markup of table:table elements -> full content.xml text."""
    return build_content


@pytest.fixture
def grid_xml(content_xml):
    # лист "Data": 2 строки по 3 ячейки
    return content_xml(
        '<table:table table:name="Data">'
        "<table:table-row>"
        '<table:table-cell office:value-type="string" table:style-name="ce1"><text:p>a</text:p></table:table-cell>'
        '<table:table-cell office:value-type="float" office:value="2"><text:p>2</text:p></table:table-cell>'
        '<table:table-cell table:formula="of:=[.B1]*2" office:value-type="float" office:value="4"><text:p>4</text:p></table:table-cell>'
        "</table:table-row>"
        "<table:table-row>"
        '<table:table-cell office:value-type="string"><text:p>b</text:p></table:table-cell>'
        '<table:table-cell office:value-type="percentage" table:style-name="ce2"><text:p>5%</text:p></table:table-cell>'
        '<table:table-cell office:value-type="string"><text:p>c</text:p></table:table-cell>'
        "</table:table-row>"
        "</table:table>"
    )


@pytest.fixture
def ods_file(tmp_path: Path) -> Path:
    """Real .ods package written by odfpy: sheet 'Sheet1', rows [a, 1] and [b, 2]."""
    doc = OpenDocumentSpreadsheet()
    table = Table(name="Sheet1")
    for text, num in (("a", 1), ("b", 2)):
        tr = TableRow()
        tc = TableCell(valuetype="string")
        tc.addElement(P(text=text))
        tr.addElement(tc)
        tc = TableCell(valuetype="float", value=num)
        tc.addElement(P(text=str(num)))
        tr.addElement(tc)
        table.addElement(tr)
    doc.spreadsheet.addElement(table)
    path = tmp_path / "book.ods"
    doc.save(str(path))
    return path
