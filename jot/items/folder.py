"""Folders: directories inside a vault, loaded eagerly."""

from __future__ import annotations

import shutil
from pathlib import Path

from ..errors import PathNotFound, translate_os_errors
from ..models import METADATA_DIR_NAME, ItemKind
from .base import Item, require_valid
from .collection import Collection
from .note import Note


class Folder(Collection, Item):
    """A directory owning its sub-folders and notes."""

    kind = ItemKind.FOLDER

    def __init__(
        self,
        location: Path,
        folders: list["Folder"] | None = None,
        notes: list[Note] | None = None,
    ):
        super().__init__(location)
        self.folders = folders or []
        self.notes = notes or []

    @classmethod
    def is_valid_path(cls, path: Path) -> bool:
        path = Path(path)
        return not path.is_file() and path.name != METADATA_DIR_NAME

    @classmethod
    def create(cls, path: Path) -> "Folder":
        path = require_valid(cls, path)
        with translate_os_errors(f"create folder {path.name}"):
            path.mkdir(exist_ok=True)
        return cls(path)

    @classmethod
    def load(cls, path: Path) -> "Folder":
        path = require_valid(cls, path)
        if not path.is_dir():
            raise PathNotFound(f"folder {path} does not exist")
        folders, notes = scan_directory(path)
        return cls(path, folders, notes)

    def delete(self) -> None:
        """Delete the folder and everything inside it."""
        with translate_os_errors(f"remove folder {self.name}"):
            shutil.rmtree(self.location)

    def _moved_to(self, new_location: Path) -> None:
        super()._moved_to(new_location)
        # children hold absolute paths, so they have to be rebuilt under the new root
        self.folders, self.notes = scan_directory(new_location)


def scan_directory(directory: Path) -> tuple[list[Folder], list[Note]]:
    """Classify the immediate children of `directory` into folders and notes.

    Sub-folders are loaded recursively. The metadata directory and any file
    that is not a note are skipped.
    """
    folders: list[Folder] = []
    notes: list[Note] = []

    with translate_os_errors(f"read directory {directory}"):
        entries = sorted(directory.iterdir())

    for entry in entries:
        if entry.is_dir():
            if Folder.is_valid_path(entry):
                folders.append(Folder.load(entry))
        elif Note.is_valid_path(entry):
            notes.append(Note.load(entry))

    return folders, notes
