from pathlib import Path

import pytest

from jot.config import Config
from jot.editor import Editor
from jot.errors import EditorNotFound, PathNotFound
from jot.items import Note


class _FakeProcess:
    launched: list[list[str]] = []

    def __init__(self, command: list[str]):
        type(self).launched.append(command)
        self.waited = False

    def wait(self) -> int:
        self.waited = True
        return 0


@pytest.fixture
def fake_popen(monkeypatch: pytest.MonkeyPatch) -> type[_FakeProcess]:
    _FakeProcess.launched = []
    monkeypatch.setattr("jot.editor.subprocess.Popen", _FakeProcess)
    return _FakeProcess


def test_open_note_waits_when_conflicting(tmp_path: Path, fake_popen) -> None:
    note = Note.create(tmp_path / "n.md")

    result = Editor("vim", conflict=True).open_note(note)

    assert fake_popen.launched == [["vim", str(tmp_path / "n.md")]]
    assert result.blocked
    assert result.returncode == 0
    assert result.ok


def test_open_note_detaches_without_conflict(tmp_path: Path, fake_popen) -> None:
    note = Note.create(tmp_path / "n.md")

    result = Editor("code", conflict=False).open_note(note)

    assert not result.blocked
    assert result.returncode is None
    assert result.ok


def test_missing_editor(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def _missing(command):
        raise FileNotFoundError(command[0])

    monkeypatch.setattr("jot.editor.subprocess.Popen", _missing)
    note = Note.create(tmp_path / "n.md")

    with pytest.raises(EditorNotFound):
        Editor("no-such-editor").open_note(note)


def test_note_deleted_behind_our_back(tmp_path: Path, fake_popen) -> None:
    note = Note.create(tmp_path / "n.md")
    note.location.unlink()

    with pytest.raises(PathNotFound):
        Editor("vim").open_note(note)
    assert fake_popen.launched == []


def test_from_config(tmp_path: Path) -> None:
    config = Config(path=tmp_path / "config.toml", editor="hx", conflict=False)
    assert Editor.from_config(config) == Editor("hx", conflict=False)
