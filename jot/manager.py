"""
Vault lifecycle orchestration.

The manager keeps the registry and the in-memory current vault in step:
creating, entering, renaming, moving and removing vaults, and moving items
from the current vault into another one.

Each operation is a single attempt. When a filesystem step succeeds and a
later persist fails, the error propagates and nothing is rolled back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .errors import (
    AlreadyInVault,
    ItemAlreadyExists,
    NotInsideVault,
    PathNotFound,
    SameLocation,
    VaultAlreadyExists,
    VaultNotFound,
)
from .items import Folder, Note, Vault, VaultStore
from .models import ItemKind
from .paths import absolute, join, validate_name
from .registry import Registry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VaultListing:
    """One row of `list_vaults`."""

    name: str
    parent: Path
    is_current: bool


class VaultManager:
    """Registry plus the one vault held in memory."""

    def __init__(self, registry: Registry):
        self.registry = registry
        self.current: Vault | None = None

    @classmethod
    def load(cls, registry: Registry) -> "VaultManager":
        """Build a manager and load the registry's current vault, if any."""
        manager = cls(registry)
        manager._load_current_vault()
        return manager

    def _load_current_vault(self) -> None:
        name = self.registry.current_vault
        if name is None:
            self.current = None
            return

        path = self.registry.vault_path(name)
        if not path.is_dir():
            logger.warning("current vault %s is missing from %s", name, path)
            self.current = None
            return
        self.current = Vault.load(path)

    # -- queries -------------------------------------------------------------

    def require_current(self) -> Vault:
        if self.current is None:
            raise NotInsideVault()
        return self.current

    def get_vault_path(self, name: str) -> Path:
        return self.registry.vault_path(name)

    def get_vault(self, name: str) -> Vault:
        return Vault.load(self.get_vault_path(name))

    def list_vaults(self) -> list[VaultListing]:
        return [
            VaultListing(name, parent, self.registry.is_current(name))
            for name, parent in sorted(self.registry.vaults.items())
        ]

    # -- vault lifecycle ---------------------------------------------------------

    def create_vault(self, name: str, parent_dir: str | Path) -> Vault:
        """Create and register a vault. The current vault does not change."""
        validate_name(name)
        if self.registry.vault_exists(name):
            raise VaultAlreadyExists(name)

        parent_dir = absolute(parent_dir)
        path = Vault.generate_child_path(parent_dir, name)
        if path.exists():
            raise VaultAlreadyExists(name)

        vault = Vault.create(path)
        self.registry.add_vault(name, parent_dir)
        logger.debug("created vault %s at %s", name, path)
        return vault

    def enter_vault(self, name: str) -> Vault:
        if not self.registry.vault_exists(name):
            raise VaultNotFound(name)
        if self.registry.is_current(name):
            raise AlreadyInVault(name)

        vault = self.get_vault(name)
        self.current = vault
        self.registry.set_current_vault(name)
        return vault

    def remove_vault(self, name: str) -> None:
        """Delete the vault directory and unregister it."""
        path = self.get_vault_path(name)
        if path.exists():
            Vault.load(path).delete()
        else:
            logger.warning("vault %s was already gone from %s", name, path)

        self.registry.remove_vault(name)
        if self.current is not None and self.registry.current_vault is None:
            self.current = None

    def rename_vault(self, name: str, new_name: str) -> Vault:
        if self.registry.vault_exists(new_name):
            raise VaultAlreadyExists(new_name)
        if not self.registry.vault_exists(name):
            raise VaultNotFound(name)
        validate_name(new_name)

        vault = self.get_vault(name)
        vault.rename(new_name)
        self.registry.rename_vault(name, new_name)
        if self.registry.is_current(new_name):
            self.current = vault
        return vault

    def move_vault(self, name: str, new_parent: str | Path) -> Vault:
        """Move a vault under another parent directory."""
        old_parent = self.registry.vault_location(name)
        if old_parent is None:
            raise VaultNotFound(name)

        new_parent = absolute(new_parent)
        if new_parent == absolute(old_parent):
            raise SameLocation()
        if not new_parent.is_dir():
            raise PathNotFound(f"{new_parent} is not a directory")

        vault = self.get_vault(name)
        vault.relocate(join(new_parent, name))
        self.registry.set_vault_location(name, new_parent)
        if self.registry.is_current(name):
            self.current = vault
        return vault

    # -- items across vaults -------------------------------------------------

    def move_item_to_vault(self, kind: ItemKind, name: str, destination: str) -> Path:
        """Move a note or folder of the current vault into the root of `destination`.

        Notes are looked up in the active location, folders at the vault root.
        Same-vault moves and name collisions are rejected. Returns the new path.
        """
        vault = self.require_current()
        if kind is ItemKind.VAULT:
            raise ValueError("vaults cannot be moved into other vaults")
        if not self.registry.vault_exists(destination):
            raise VaultNotFound(destination)
        if destination == vault.name:
            raise SameLocation(f"{kind.value} {name} is already in vault {destination}")

        collection = vault.active_collection() if kind is ItemKind.NOTE else vault.root_collection()
        item: Note | Folder = collection.item_named(kind, name)

        destination_root = self.get_vault_path(destination)
        if not destination_root.is_dir():
            raise PathNotFound(f"vault directory {destination_root} does not exist")
        new_location = join(destination_root, item.full_name)
        if new_location.exists():
            raise ItemAlreadyExists(kind, name)

        item.relocate(new_location)
        aliases = vault.release_item(collection, item)
        if aliases:
            _carry_aliases(destination_root, aliases)

        logger.debug("moved %s %s into vault %s", kind.value, name, destination)
        return new_location


def _carry_aliases(vault_root: Path, aliases: dict[str, str]) -> None:
    """Give moved notes their aliases in the destination vault, where the alias is free."""
    store = VaultStore.load(VaultStore.path_for(vault_root))
    for note_key, alias in aliases.items():
        if store.note_for_alias(alias) is not None or store.alias_for(note_key) is not None:
            logger.warning("alias %s for note %s was dropped: already taken", alias, note_key)
            continue
        store.aliases[note_key] = alias
    store.store()
