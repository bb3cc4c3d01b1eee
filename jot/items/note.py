"""Notes: single markdown files."""

from __future__ import annotations

from pathlib import Path

from ..errors import PathNotFound, translate_os_errors
from ..models import NOTE_EXTENSION, ItemKind
from .base import Item, require_valid


class Note(Item):
    """A leaf item backed by one `.md` file."""

    kind = ItemKind.NOTE
    extension = NOTE_EXTENSION

    @property
    def name(self) -> str:
        return self.location.stem

    @classmethod
    def is_valid_path(cls, path: Path) -> bool:
        path = Path(path)
        return path.suffix == NOTE_EXTENSION and not path.is_dir()

    @classmethod
    def create(cls, path: Path) -> "Note":
        path = require_valid(cls, path)
        with translate_os_errors(f"create note {path.stem}"):
            path.touch()
        return cls(path)

    @classmethod
    def load(cls, path: Path) -> "Note":
        path = require_valid(cls, path)
        if not path.is_file():
            raise PathNotFound(f"note {path} does not exist")
        return cls(path)

    def delete(self) -> None:
        with translate_os_errors(f"remove note {self.name}"):
            self.location.unlink()
