import json
from pathlib import Path

import pytest

from jot.errors import FileSystemError, VaultAlreadyExists, VaultNotFound
from jot.registry import Registry


def _stored(registry: Registry) -> dict:
    return json.loads(registry.path.read_text(encoding="utf-8"))


def test_missing_file_is_empty_registry(tmp_path: Path) -> None:
    registry = Registry.load(tmp_path / "vaults.json")

    assert registry.vaults == {}
    assert registry.current_vault is None
    assert not registry.path.exists()


def test_add_vault_persists(tmp_path: Path) -> None:
    registry = Registry.load(tmp_path / "vaults.json")
    registry.add_vault("notes", tmp_path / "docs")

    assert _stored(registry) == {"vaults": {"notes": str(tmp_path / "docs")}, "currentVault": None}
    assert registry.vault_path("notes") == tmp_path / "docs" / "notes"
    assert registry.vault_location("notes") == tmp_path / "docs"


def test_add_duplicate_vault(tmp_path: Path) -> None:
    registry = Registry.load(tmp_path / "vaults.json")
    registry.add_vault("notes", tmp_path)

    with pytest.raises(VaultAlreadyExists):
        registry.add_vault("notes", tmp_path / "elsewhere")


def test_unknown_vault_lookups(tmp_path: Path) -> None:
    registry = Registry.load(tmp_path / "vaults.json")

    assert registry.vault_location("nope") is None
    assert not registry.vault_exists("nope")
    with pytest.raises(VaultNotFound):
        registry.vault_path("nope")
    with pytest.raises(VaultNotFound):
        registry.set_current_vault("nope")
    with pytest.raises(VaultNotFound):
        registry.remove_vault("nope")


def test_current_vault_round_trip(tmp_path: Path) -> None:
    registry = Registry.load(tmp_path / "vaults.json")
    registry.add_vault("notes", tmp_path)
    registry.set_current_vault("notes")

    reloaded = Registry.load(registry.path)
    assert reloaded.current_vault == "notes"
    assert reloaded.is_current("notes")
    assert not reloaded.is_current("other")


def test_remove_current_vault_clears_pointer(tmp_path: Path) -> None:
    registry = Registry.load(tmp_path / "vaults.json")
    registry.add_vault("notes", tmp_path)
    registry.set_current_vault("notes")

    registry.remove_vault("notes")

    assert _stored(registry) == {"vaults": {}, "currentVault": None}


def test_rename_vault_moves_current_pointer(tmp_path: Path) -> None:
    registry = Registry.load(tmp_path / "vaults.json")
    registry.add_vault("old", tmp_path)
    registry.set_current_vault("old")

    registry.rename_vault("old", "new")

    assert registry.vaults == {"new": tmp_path}
    assert registry.current_vault == "new"


def test_rename_vault_checks_target_first(tmp_path: Path) -> None:
    registry = Registry.load(tmp_path / "vaults.json")
    registry.add_vault("taken", tmp_path)

    with pytest.raises(VaultAlreadyExists):
        registry.rename_vault("missing", "taken")
    with pytest.raises(VaultNotFound):
        registry.rename_vault("missing", "free")


def test_set_vault_location(tmp_path: Path) -> None:
    registry = Registry.load(tmp_path / "vaults.json")
    registry.add_vault("notes", tmp_path / "a")

    registry.set_vault_location("notes", tmp_path / "b")

    assert Registry.load(registry.path).vault_location("notes") == tmp_path / "b"


def test_dangling_current_vault_is_cleared(tmp_path: Path) -> None:
    path = tmp_path / "vaults.json"
    path.write_text(json.dumps({"vaults": {}, "currentVault": "ghost"}), encoding="utf-8")

    assert Registry.load(path).current_vault is None


def test_malformed_registry(tmp_path: Path) -> None:
    path = tmp_path / "vaults.json"
    path.write_text("[", encoding="utf-8")

    with pytest.raises(FileSystemError):
        Registry.load(path)
