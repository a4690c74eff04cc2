import shutil
import zipfile

from odsedit.ui import presenter as presenter_mod
from odsedit.ui.presenter import Presenter
from odsedit.usecases.parse_content import parse
from odsedit.infra.ods_io import extract, read_content
from odsedit.shared.errors import ArchiveError


class FakeView:
    def __init__(self):
        self.models = []
        self.errors = []
        self.statuses = []
        self.opened = []
        self.refreshed = 0

    def show_model(self, model, path=""):
        self.models.append((model, path))

    def show_error(self, text):
        self.errors.append(text)

    def show_status(self, text):
        self.statuses.append(text)

    def refresh_sheet(self):
        self.refreshed += 1

    def open_external(self, path):
        self.opened.append(path)


def _saved_model(path, tmp_path):
    return parse(read_content(extract(str(path), str(tmp_path / "check"))))


def test_open_shows_model(ods_file):
    view = FakeView()
    p = Presenter(view)
    p.open_ods(str(ods_file))
    model, path = view.models[-1]
    assert path == str(ods_file)
    assert model.sheets[0].name == "Sheet1"
    assert not view.errors
    p.close()


def test_open_failure_reports_one_message(tmp_path):
    bad = tmp_path / "bad.ods"
    bad.write_text("nope")
    view = FakeView()
    p = Presenter(view)
    p.open_ods(str(bad))
    assert len(view.errors) == 1
    assert p.model is None


def test_edit_persists_to_file(ods_file, tmp_path):
    view = FakeView()
    p = Presenter(view)
    p.open_ods(str(ods_file))
    p.edit_cell("0:0:1", "100")
    assert view.statuses[-1] == "Сохранено"
    p.close()
    assert _saved_model(ods_file, tmp_path).sheets[0].rows[0].cells[1].value == "100"


def test_unchanged_value_is_skipped(ods_file):
    view = FakeView()
    p = Presenter(view)
    p.open_ods(str(ods_file))
    before = p.model.session.current_content
    p.edit_cell("0:0:0", "a")
    assert p.model.session.current_content == before
    assert not view.statuses
    p.close()


def test_rejected_edit_reports_and_refreshes(ods_file):
    view = FakeView()
    p = Presenter(view)
    p.open_ods(str(ods_file))
    p.edit_cell("0:9:0", "x")
    assert len(view.errors) == 1
    assert view.refreshed == 1
    p.close()


def test_failed_save_keeps_session_content(ods_file, tmp_path, monkeypatch):
    view = FakeView()
    p = Presenter(view)
    p.open_ods(str(ods_file))
    archive = p.model.archive
    real_save = archive.save

    def failing_save(xml):
        raise ArchiveError("disk full")

    monkeypatch.setattr(archive, "save", failing_save)
    p.edit_cell("0:0:0", "first")
    assert view.errors and "disk full" in view.errors[-1]
    assert "first" in p.model.session.current_content

    monkeypatch.setattr(archive, "save", real_save)
    p.edit_cell("0:1:0", "second")
    p.close()
    rows = _saved_model(ods_file, tmp_path).sheets[0].rows
    assert rows[0].cells[0].value == "first"
    assert rows[1].cells[0].value == "second"


def test_open_after_save(ods_file, monkeypatch):
    monkeypatch.setattr(presenter_mod, "OPEN_AFTER_SAVE", True)
    view = FakeView()
    p = Presenter(view)
    p.open_ods(str(ods_file))
    p.edit_cell("0:0:0", "z")
    assert view.opened == [p.model.archive.path]
    p.close()


def test_non_utf8_package_reports_one_message(tmp_path):
    bad = tmp_path / "latin.ods"
    with zipfile.ZipFile(bad, "w") as z:
        z.writestr("mimetype", "application/vnd.oasis.opendocument.spreadsheet")
        z.writestr("content.xml", "<x>café</x>".encode("latin-1"))
    view = FakeView()
    p = Presenter(view)
    p.open_ods(str(bad))
    assert len(view.errors) == 1
    assert p.model is None


def test_lost_workdir_reports_save_error(ods_file):
    view = FakeView()
    p = Presenter(view)
    p.open_ods(str(ods_file))
    shutil.rmtree(p.model.archive.workdir)
    p.edit_cell("0:0:0", "x")
    assert len(view.errors) == 1
    assert "сохранить" in view.errors[0]
    p.close()


def test_accepted_edit_refreshes_sheet(ods_file):
    view = FakeView()
    p = Presenter(view)
    p.open_ods(str(ods_file))
    p.edit_cell("0:0:1", "text")
    assert view.refreshed == 1
    assert p.model.session.model.sheets[0].rows[0].cells[1].type == "string"
    p.close()
