"""Vaults, folders and notes."""

from .base import Item
from .collection import Collection, TreeLine
from .folder import Folder, scan_directory
from .note import Note
from .store import VaultStore
from .vault import ActiveCollection, Scope, Vault

__all__ = [
    "ActiveCollection",
    "Collection",
    "Folder",
    "Item",
    "Note",
    "Scope",
    "TreeLine",
    "Vault",
    "VaultStore",
    "scan_directory",
]
