"""Lookup, ordering and tree rendering for items that hold other items."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..errors import ItemNotFound
from ..models import ItemKind

if TYPE_CHECKING:
    from .folder import Folder
    from .note import Note

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "


@dataclass(frozen=True)
class TreeLine:
    """One rendered row of a tree listing."""

    prefix: str
    name: str
    kind: ItemKind

    @property
    def text(self) -> str:
        return f"{self.prefix}{self.name}"


class Collection:
    """Mixin for Folder and Vault; both keep `folders` and `notes` lists."""

    folders: list["Folder"]
    notes: list["Note"]

    def note_named(self, name: str) -> "Note":
        for note in self.notes:
            if note.name == name:
                return note
        raise ItemNotFound(ItemKind.NOTE, name)

    def folder_named(self, name: str) -> "Folder":
        for folder in self.folders:
            if folder.name == name:
                return folder
        raise ItemNotFound(ItemKind.FOLDER, name)

    def has_item(self, kind: ItemKind, name: str) -> bool:
        items = self.notes if kind is ItemKind.NOTE else self.folders
        return any(item.name == name for item in items)

    def sorted_notes(self) -> list["Note"]:
        return sorted(self.notes, key=lambda note: note.name)

    def sorted_folders(self) -> list["Folder"]:
        return sorted(self.folders, key=lambda folder: folder.name)

    def render_tree(self, prefix: str = "") -> list[TreeLine]:
        """Render children recursively: folders first, then notes, each sorted."""
        lines: list[TreeLine] = []
        folders = self.sorted_folders()
        notes = self.sorted_notes()
        total = len(folders) + len(notes)

        for index, folder in enumerate(folders):
            is_last = index == total - 1
            lines.append(TreeLine(prefix + (LAST_BRANCH if is_last else BRANCH), folder.name, ItemKind.FOLDER))
            lines.extend(folder.render_tree(prefix + (SPACE if is_last else PIPE)))

        for index, note in enumerate(notes, start=len(folders)):
            is_last = index == total - 1
            lines.append(TreeLine(prefix + (LAST_BRANCH if is_last else BRANCH), note.name, ItemKind.NOTE))

        return lines
