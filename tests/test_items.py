from pathlib import Path

import pytest

from jot.errors import InvalidName, ItemAlreadyExists, ItemNotFound, PathNotFound
from jot.items import Folder, Note
from jot.models import ItemKind


def _write_note(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def _build_tree(root: Path) -> Path:
    """root/{b/inner.md, a/, z.md, y.md, .jot/data, readme.txt}"""
    _write_note(root / "b" / "inner.md")
    (root / "a").mkdir(parents=True)
    _write_note(root / "z.md")
    _write_note(root / "y.md")
    _write_note(root / ".jot" / "data", "{}")
    _write_note(root / "readme.txt", "not a note")
    return root


def test_note_create_and_names(tmp_path: Path) -> None:
    note = Note.create(tmp_path / "groceries.md")

    assert (tmp_path / "groceries.md").is_file()
    assert note.name == "groceries"
    assert note.full_name == "groceries.md"
    assert note.parent == tmp_path


def test_note_requires_markdown_extension(tmp_path: Path) -> None:
    with pytest.raises(InvalidName):
        Note.create(tmp_path / "groceries.txt")
    with pytest.raises(InvalidName):
        Note.create(tmp_path / "groceries")


def test_note_directory_is_not_a_note(tmp_path: Path) -> None:
    (tmp_path / "odd.md").mkdir()
    assert not Note.is_valid_path(tmp_path / "odd.md")


def test_note_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(PathNotFound):
        Note.load(tmp_path / "missing.md")


def test_note_create_keeps_existing_content(tmp_path: Path) -> None:
    _write_note(tmp_path / "kept.md", "# Kept")
    Note.create(tmp_path / "kept.md")
    assert (tmp_path / "kept.md").read_text(encoding="utf-8") == "# Kept"


def test_note_rename(tmp_path: Path) -> None:
    note = Note.create(tmp_path / "old.md")
    note.rename("new")

    assert note.location == tmp_path / "new.md"
    assert (tmp_path / "new.md").is_file()
    assert not (tmp_path / "old.md").exists()


def test_note_rename_refuses_to_overwrite(tmp_path: Path) -> None:
    note = Note.create(tmp_path / "one.md")
    _write_note(tmp_path / "two.md", "keep me")

    with pytest.raises(ItemAlreadyExists):
        note.rename("two")
    assert (tmp_path / "two.md").read_text(encoding="utf-8") == "keep me"
    assert note.location == tmp_path / "one.md"


def test_note_relocate_and_delete(tmp_path: Path) -> None:
    (tmp_path / "elsewhere").mkdir()
    note = Note.create(tmp_path / "n.md")

    note.relocate(tmp_path / "elsewhere" / "n.md")
    assert note.location == tmp_path / "elsewhere" / "n.md"
    assert note.location.is_file()

    note.delete()
    assert not note.location.exists()


def test_generate_child_path(tmp_path: Path) -> None:
    assert Note.generate_child_path(tmp_path, "n") == tmp_path / "n.md"
    assert Folder.generate_child_path(tmp_path, "f") == tmp_path / "f"
    with pytest.raises(InvalidName):
        Folder.generate_child_path(tmp_path, "a/b")


def test_folder_rejects_metadata_dir(tmp_path: Path) -> None:
    with pytest.raises(InvalidName):
        Folder.create(tmp_path / ".jot")


def test_folder_name_keeps_dots(tmp_path: Path) -> None:
    folder = Folder.create(tmp_path / "v1.2")
    assert folder.name == "v1.2"


def test_folder_load_classifies_children(tmp_path: Path) -> None:
    folder = Folder.load(_build_tree(tmp_path / "root"))

    assert [f.name for f in folder.sorted_folders()] == ["a", "b"]
    assert [n.name for n in folder.sorted_notes()] == ["y", "z"]
    assert [n.name for n in folder.folder_named("b").notes] == ["inner"]


def test_folder_load_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(PathNotFound):
        Folder.load(tmp_path / "missing")


def test_lookup_is_exact_and_case_sensitive(tmp_path: Path) -> None:
    folder = Folder.load(_build_tree(tmp_path / "root"))

    assert folder.note_named("y").location == tmp_path / "root" / "y.md"
    with pytest.raises(ItemNotFound):
        folder.note_named("Y")
    with pytest.raises(ItemNotFound):
        folder.note_named("y.md")
    with pytest.raises(ItemNotFound):
        folder.folder_named("inner")


def test_sorted_notes_ignore_creation_order(tmp_path: Path) -> None:
    folder = Folder.create(tmp_path / "f")
    for name in ["b", "a", "c"]:
        folder.notes.append(Note.create(tmp_path / "f" / f"{name}.md"))

    assert [n.name for n in folder.notes] == ["b", "a", "c"]
    assert [n.name for n in folder.sorted_notes()] == ["a", "b", "c"]


def test_render_tree_folders_first_then_notes(tmp_path: Path) -> None:
    folder = Folder.load(_build_tree(tmp_path / "root"))

    lines = folder.render_tree()

    assert [line.text for line in lines] == [
        "├── a",
        "├── b",
        "│   └── inner",
        "├── y",
        "└── z",
    ]
    assert [line.kind for line in lines] == [
        ItemKind.FOLDER,
        ItemKind.FOLDER,
        ItemKind.NOTE,
        ItemKind.NOTE,
        ItemKind.NOTE,
    ]


def test_render_tree_last_folder_uses_blank_indent(tmp_path: Path) -> None:
    _write_note(tmp_path / "root" / "only" / "deep" / "n.md")
    folder = Folder.load(tmp_path / "root")

    assert [line.text for line in folder.render_tree("> ")] == [
        "> └── only",
        ">     └── deep",
        ">         └── n",
    ]


def test_folder_relocate_moves_children(tmp_path: Path) -> None:
    _write_note(tmp_path / "src" / "sub" / "n.md")
    (tmp_path / "dst").mkdir()
    folder = Folder.load(tmp_path / "src")

    folder.relocate(tmp_path / "dst" / "moved")

    assert folder.location == tmp_path / "dst" / "moved"
    assert folder.folder_named("sub").note_named("n").location == tmp_path / "dst" / "moved" / "sub" / "n.md"
    assert not (tmp_path / "src").exists()


def test_folder_delete_removes_subtree(tmp_path: Path) -> None:
    _write_note(tmp_path / "gone" / "deep" / "n.md")
    Folder.load(tmp_path / "gone").delete()
    assert not (tmp_path / "gone").exists()
