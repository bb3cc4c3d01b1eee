from pathlib import Path

import pytest

from jot.config import Config, ConfigKey, get_app_dir, parse_bool, parse_color
from jot.errors import FileSystemError


def test_defaults_when_missing(tmp_path: Path) -> None:
    config = Config.load(tmp_path / "config.toml")

    assert config.editor == "nvim"
    assert config.conflict is True
    assert (config.vault_color, config.folder_color, config.note_color) == ("blue", "cyan", "white")
    assert not config.path.exists()


def test_load_overrides_from_toml(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text('editor = "code"\nconflict = false\nfolder_color = "green"\n', encoding="utf-8")

    config = Config.load(path)

    assert config.editor == "code"
    assert config.conflict is False
    assert config.folder_color == "green"
    assert config.note_color == "white"


def test_invalid_values_are_ignored(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text('note_color = "not-a-color"\nconflict = "maybe"\neditor = "vim"\n', encoding="utf-8")

    config = Config.load(path)

    assert config.note_color == "white"
    assert config.conflict is True
    assert config.editor == "vim"


def test_malformed_toml(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("editor = ", encoding="utf-8")

    with pytest.raises(FileSystemError):
        Config.load(path)


def test_set_persists(tmp_path: Path) -> None:
    config = Config.load(tmp_path / "home" / "config.toml")

    config.set(ConfigKey.EDITOR, "hx")
    config.set(ConfigKey.CONFLICT, "no")

    reloaded = Config.load(config.path)
    assert reloaded.editor == "hx"
    assert reloaded.conflict is False
    assert reloaded.get(ConfigKey.CONFLICT) == "false"


def test_set_rejects_bad_values(tmp_path: Path) -> None:
    config = Config.load(tmp_path / "config.toml")

    with pytest.raises(ValueError):
        config.set(ConfigKey.VAULT_COLOR, "ultraviolet")
    with pytest.raises(ValueError):
        config.set(ConfigKey.EDITOR, "  ")
    assert not config.path.exists()


@pytest.mark.parametrize(("raw", "expected"), [("true", True), ("Yes", True), ("1", True), ("off", False), ("FALSE", False)])
def test_parse_bool(raw: str, expected: bool) -> None:
    assert parse_bool(raw) is expected


def test_parse_color_accepts_hex() -> None:
    assert parse_color("#ff8800") == "#ff8800"


def test_app_dir_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JOT_HOME", str(tmp_path / "jot-home"))
    assert get_app_dir() == tmp_path / "jot-home"


def test_app_dir_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("JOT_HOME", raising=False)
    assert get_app_dir().name.lower() == "jot"
