"""The contract shared by notes, folders and vaults."""

from __future__ import annotations

import logging
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar

from ..errors import InvalidName, ItemAlreadyExists, translate_os_errors
from ..models import ItemKind
from ..paths import join, validate_name

logger = logging.getLogger(__name__)


class Item(ABC):
    """Something with an absolute location on disk that can be moved or deleted."""

    kind: ClassVar[ItemKind]
    extension: ClassVar[str] = ""

    def __init__(self, location: Path):
        self._location = Path(location)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self._location)!r})"

    @property
    def location(self) -> Path:
        return self._location

    @property
    def name(self) -> str:
        """Display name; notes strip their extension."""
        return self._location.name

    @property
    def full_name(self) -> str:
        """Base name on disk, extension included."""
        return self._location.name

    @property
    def parent(self) -> Path:
        return self._location.parent

    @classmethod
    def generate_child_path(cls, parent_dir: Path, name: str) -> Path:
        """Where an item of this kind called `name` lives inside `parent_dir`."""
        validate_name(name)
        return join(parent_dir, f"{name}{cls.extension}")

    @classmethod
    @abstractmethod
    def is_valid_path(cls, path: Path) -> bool:
        """Whether `path` can hold an item of this kind."""

    @classmethod
    @abstractmethod
    def create(cls, path: Path) -> "Item":
        """Create the item on disk and return it."""

    @classmethod
    @abstractmethod
    def load(cls, path: Path) -> "Item":
        """Build the item from what is already on disk."""

    @abstractmethod
    def delete(self) -> None:
        """Remove the item from disk. Irreversible."""

    def rename(self, new_name: str) -> None:
        """Rename in place, keeping the same parent directory."""
        self.relocate(self.generate_child_path(self.parent, new_name))

    def relocate(self, new_location: Path) -> None:
        """Move the item to an arbitrary absolute path.

        Refuses to overwrite anything already at `new_location`.
        """
        new_location = Path(new_location)
        if not self.is_valid_path(new_location):
            raise InvalidName()
        if new_location.exists():
            raise ItemAlreadyExists(self.kind, _display_name(self, new_location))

        with translate_os_errors(f"move {self.kind.value} {self.name}"):
            shutil.move(str(self._location), str(new_location))

        logger.debug("moved %s %s -> %s", self.kind.value, self._location, new_location)
        self._moved_to(new_location)

    def _moved_to(self, new_location: Path) -> None:
        """Update in-memory state after the item was moved on disk."""
        self._location = new_location


def _display_name(item: Item, location: Path) -> str:
    return location.stem if item.extension else location.name


def require_valid(cls: type[Item], path: Path) -> Path:
    """Return `path` if it is valid for `cls`, else raise InvalidName."""
    path = Path(path)
    if not cls.is_valid_path(path):
        raise InvalidName(f"invalid {cls.kind.value} path {path}")
    return path
