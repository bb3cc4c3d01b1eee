"""
Vaults: registered root directories holding a note/folder tree.

A vault looks like a Folder at its root and additionally owns a VaultStore
(active folder pointer and aliases). The active folder makes navigation
cd-like: every relative path a command receives is resolved against it.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath

from ..errors import (
    InvalidName,
    ItemAlreadyExists,
    ItemNotFound,
    OutOfBounds,
    PathNotFound,
    SameLocation,
    translate_os_errors,
)
from ..models import METADATA_DIR_NAME, ItemKind
from ..paths import is_contained_in, join, normalize, relative_to_root, validate_name
from .base import Item, require_valid
from .collection import Collection, TreeLine
from .folder import Folder, scan_directory
from .note import Note
from .store import VaultStore

logger = logging.getLogger(__name__)


class Scope(str, Enum):
    """Where the commands of the current invocation operate."""

    VAULT_ROOT = "vault_root"
    ACTIVE_FOLDER = "active_folder"


@dataclass(frozen=True)
class ActiveCollection:
    """The vault root or the active folder, resolved once per command."""

    scope: Scope
    collection: Collection

    @property
    def location(self) -> Path:
        return self.collection.location  # type: ignore[attr-defined]

    @property
    def notes(self) -> list[Note]:
        return self.collection.notes

    @property
    def folders(self) -> list[Folder]:
        return self.collection.folders

    def items(self, kind: ItemKind) -> list:
        return self.collection.notes if kind is ItemKind.NOTE else self.collection.folders

    def note_named(self, name: str) -> Note:
        return self.collection.note_named(name)

    def folder_named(self, name: str) -> Folder:
        return self.collection.folder_named(name)

    def item_named(self, kind: ItemKind, name: str) -> Note | Folder:
        if kind is ItemKind.NOTE:
            return self.note_named(name)
        return self.folder_named(name)

    def has_item(self, kind: ItemKind, name: str) -> bool:
        return self.collection.has_item(kind, name)

    def sorted_notes(self) -> list[Note]:
        return self.collection.sorted_notes()

    def sorted_folders(self) -> list[Folder]:
        return self.collection.sorted_folders()

    def render_tree(self, prefix: str = "") -> list[TreeLine]:
        return self.collection.render_tree(prefix)


class Vault(Collection, Item):
    """Aggregate root: the tree under one registered directory plus its store."""

    kind = ItemKind.VAULT

    def __init__(
        self,
        location: Path,
        folders: list[Folder] | None = None,
        notes: list[Note] | None = None,
        store: VaultStore | None = None,
    ):
        super().__init__(location)
        self.folders = folders or []
        self.notes = notes or []
        self.store = store or VaultStore.load(VaultStore.path_for(self.location))

    @property
    def data_path(self) -> Path:
        """Backing file of this vault's store."""
        return self.store.location

    @classmethod
    def is_valid_path(cls, path: Path) -> bool:
        path = Path(path)
        return not path.is_file() and path.name != METADATA_DIR_NAME

    @classmethod
    def create(cls, path: Path) -> "Vault":
        path = require_valid(cls, path)
        with translate_os_errors(f"create vault {path.name}"):
            path.mkdir(parents=True, exist_ok=True)
        store = VaultStore.load(VaultStore.path_for(path))
        store.store()
        return cls(path, store=store)

    @classmethod
    def load(cls, path: Path) -> "Vault":
        path = require_valid(cls, path)
        if not path.is_dir():
            raise PathNotFound(f"vault directory {path} does not exist")
        folders, notes = scan_directory(path)
        return cls(path, folders, notes, VaultStore.load(VaultStore.path_for(path)))

    def delete(self) -> None:
        """Delete the vault directory, its data store included."""
        with translate_os_errors(f"remove vault {self.name}"):
            shutil.rmtree(self.location)

    def _moved_to(self, new_location: Path) -> None:
        super()._moved_to(new_location)
        self.folders, self.notes = scan_directory(new_location)
        self.store.set_backing_location(new_location)

    # -------------------------------------------------------------------------
    # Active location
    # -------------------------------------------------------------------------

    def active_location(self) -> Path:
        """Absolute path of the active folder, or the vault root."""
        folder_path = self.store.get_active_folder_path()
        if folder_path is None:
            return self.location
        return join(self.location, folder_path)

    def active_folder(self) -> Folder | None:
        """The in-memory Folder the active pointer names, if any."""
        folder_path = self.store.get_active_folder_path()
        if folder_path is None:
            return None

        collection: Collection = self
        for part in Path(folder_path).parts:
            collection = collection.folder_named(part)
        return collection  # type: ignore[return-value]

    def active_collection(self) -> ActiveCollection:
        folder = self.active_folder()
        if folder is None:
            return ActiveCollection(Scope.VAULT_ROOT, self)
        return ActiveCollection(Scope.ACTIVE_FOLDER, folder)

    def root_collection(self) -> ActiveCollection:
        return ActiveCollection(Scope.VAULT_ROOT, self)

    def note_in_active_folder(self, name: str) -> Note:
        folder = self.active_folder()
        if folder is not None:
            return folder.note_named(name)
        return self.note_named(name)

    def change_folder(self, relative_path: str | Path) -> Path:
        """Move the active pointer, relative to the current active location.

        The stored value is always re-anchored at the vault root. The pointer is
        left untouched when any check fails.
        """
        target = self._resolve_folder_path(relative_path)
        relative = relative_to_root(target, self.location)
        self.store.set_active_folder_path(None if relative == Path(".") else relative)
        logger.debug("active folder of %s is now %s", self.name, self.store.active_folder)
        return target

    def _resolve_folder_path(self, relative_path: str | Path) -> Path:
        """Absolute, normalized folder path inside this vault (or its root)."""
        target = normalize(join(self.active_location(), relative_path))
        if not target.exists():
            raise PathNotFound()
        if not is_contained_in(target, self.location):
            raise OutOfBounds()
        if not target.is_dir():
            raise PathNotFound(f"{relative_path} is not a folder")
        if METADATA_DIR_NAME in relative_to_root(target, self.location).parts:
            raise InvalidName(f"{METADATA_DIR_NAME} is reserved")
        return target

    def collection_at(self, path: Path) -> Collection:
        """In-memory collection (vault or folder) located at `path`."""
        collection: Collection = self
        for part in relative_to_root(path, self.location).parts:
            collection = collection.folder_named(part)
        return collection

    # -------------------------------------------------------------------------
    # Items inside the vault
    # -------------------------------------------------------------------------

    def note_key(self, location: Path) -> str:
        """Alias key of the note at `location`: its vault-relative path sans extension."""
        return relative_to_root(location, self.location).with_suffix("").as_posix()

    def folder_key(self, location: Path) -> str:
        return relative_to_root(location, self.location).as_posix()

    def note_at_key(self, key: str) -> Note:
        """The in-memory note an alias key points at."""
        *folders, name = PurePosixPath(key).parts
        collection: Collection = self
        for part in folders:
            collection = collection.folder_named(part)
        return collection.note_named(name)

    def resolve_note(self, name: str) -> Note:
        """Look a note up in the active location by name, then anywhere by alias."""
        try:
            return self.note_in_active_folder(name)
        except ItemNotFound:
            key = self.store.note_for_alias(name)
            if key is None:
                raise
            return self.note_at_key(key)

    def create_note(self, name: str) -> Note:
        return self._create_item(Note, name)  # type: ignore[return-value]

    def create_folder(self, name: str) -> Folder:
        return self._create_item(Folder, name)  # type: ignore[return-value]

    def _create_item(self, cls: type[Note] | type[Folder], name: str) -> Item:
        active = self.active_collection()
        path = cls.generate_child_path(active.location, name)
        if active.has_item(cls.kind, name) or path.exists():
            raise ItemAlreadyExists(cls.kind, name)

        item = cls.create(path)
        active.items(cls.kind).append(item)
        logger.debug("created %s %s", cls.kind.value, path)
        return item

    def remove_item(self, kind: ItemKind, name: str) -> Item:
        active = self.active_collection()
        item = active.item_named(kind, name)
        item.delete()
        active.items(kind).remove(item)
        self._drop_aliases(item.kind, item.location)
        return item

    def rename_item(self, kind: ItemKind, name: str, new_name: str) -> Item:
        active = self.active_collection()
        item = active.item_named(kind, name)
        validate_name(new_name)
        if new_name == name:
            raise SameLocation("new name is same as old name")
        if active.has_item(kind, new_name):
            raise ItemAlreadyExists(kind, new_name)

        old_location = item.location
        item.rename(new_name)
        self._rekey_aliases(kind, old_location, item.location)
        return item

    def move_item(self, kind: ItemKind, name: str, destination: str | Path) -> Path:
        """Move a note or folder of the active location to another folder of this vault.

        `destination` is resolved like `change_folder`. Returns the new location.
        """
        active = self.active_collection()
        item = active.item_named(kind, name)
        target_dir = self._resolve_folder_path(destination)

        if kind is ItemKind.FOLDER and is_contained_in(target_dir, item.location):
            raise InvalidName(f"cannot move folder {name} into itself")
        if normalize(target_dir) == normalize(item.parent):
            raise SameLocation()

        destination_collection = self.collection_at(target_dir)
        if destination_collection.has_item(kind, name):
            raise ItemAlreadyExists(kind, name)

        old_location = item.location
        new_location = join(target_dir, item.full_name)
        item.relocate(new_location)
        active.items(kind).remove(item)
        _items_of(destination_collection, kind).append(item)
        self._rekey_aliases(kind, old_location, new_location)
        return new_location

    def release_item(self, collection: ActiveCollection, item: Note | Folder) -> dict[str, str]:
        """Forget an item that was moved out of this vault.

        Returns the aliases that went with it, keyed relative to the item's old
        parent. A folder that contained the active folder sends the pointer
        back to the root.
        """
        old_location = join(collection.location, item.full_name)
        collection.items(item.kind).remove(item)
        dropped = self._drop_aliases(item.kind, old_location)

        if item.kind is ItemKind.FOLDER and self.store.active_folder is not None:
            active_path = join(self.location, self.store.active_folder)
            if is_contained_in(active_path, old_location):
                self.store.set_active_folder_path(None)

        parent_key = self.folder_key(collection.location)
        prefix = "" if parent_key == "." else f"{parent_key}/"
        return {key[len(prefix):]: alias for key, alias in dropped.items()}

    def _drop_aliases(self, kind: ItemKind, location: Path) -> dict[str, str]:
        """Forget the aliases of a note, or of every note below a folder."""
        if kind is ItemKind.NOTE:
            key = self.note_key(location)
            alias = self.store.drop_alias(key)
            return {} if alias is None else {key: alias}
        return self.store.drop_alias_tree(self.folder_key(location))

    def _rekey_aliases(self, kind: ItemKind, old_location: Path, new_location: Path) -> None:
        if kind is ItemKind.NOTE:
            self.store.rekey_alias(self.note_key(old_location), self.note_key(new_location))
        else:
            self.store.rekey_alias_tree(self.folder_key(old_location), self.folder_key(new_location))

    # -------------------------------------------------------------------------
    # Aliases
    # -------------------------------------------------------------------------

    def alias_for(self, note_name: str) -> str | None:
        """Alias of the note called `note_name` in the active location."""
        note = self.note_in_active_folder(note_name)
        return self.store.alias_for(self.note_key(note.location))

    def set_alias(self, note_name: str, alias: str) -> None:
        validate_name(alias)
        active = self.active_collection()
        key = self.note_key(active.note_named(note_name).location)

        if active.has_item(ItemKind.NOTE, alias):
            raise ItemAlreadyExists(ItemKind.NOTE, alias)
        owner = self.store.note_for_alias(alias)
        if owner is not None and owner != key:
            raise ItemAlreadyExists(ItemKind.NOTE, alias)

        self.store.set_alias(key, alias)

    def remove_alias(self, note_name: str) -> str:
        note = self.note_in_active_folder(note_name)
        return self.store.remove_alias(self.note_key(note.location))


def _items_of(collection: Collection, kind: ItemKind) -> list:
    return collection.notes if kind is ItemKind.NOTE else collection.folders
