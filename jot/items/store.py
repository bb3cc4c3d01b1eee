"""
Per-vault persisted state.

Stored as JSON at `<vault>/.jot/data`:

    {"activeFolder": "notes/2024" | null, "aliases": {"notes/2024/todo": "<alias>"}}

Aliases are keyed by the note's vault-root relative path without its
extension, so a note at the root is keyed by its bare name. Every mutator
writes the whole file back immediately.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from ..errors import AliasNotFound, FileSystemError, translate_os_errors
from ..models import DATA_FILE_NAME, METADATA_DIR_NAME
from ..paths import join

logger = logging.getLogger(__name__)


@dataclass
class VaultStore:
    """Active folder pointer and note aliases for one vault."""

    location: Path
    active_folder: str | None = None
    aliases: dict[str, str] = field(default_factory=dict)

    @staticmethod
    def path_for(vault_root: Path) -> Path:
        """Backing file for the vault rooted at `vault_root`."""
        return join(vault_root, METADATA_DIR_NAME, DATA_FILE_NAME)

    @classmethod
    def load(cls, backing_path: Path) -> "VaultStore":
        """Read the store at `backing_path`, or defaults if the file is missing."""
        backing_path = Path(backing_path)
        if not backing_path.exists():
            return cls(location=backing_path)

        with translate_os_errors(f"read vault data {backing_path}"):
            raw = backing_path.read_text(encoding="utf-8")
        try:
            data = json.loads(raw) if raw.strip() else {}
        except json.JSONDecodeError as exc:
            raise FileSystemError(f"parse vault data {backing_path}", exc) from exc

        active = data.get("activeFolder")
        aliases = data.get("aliases") or {}
        return cls(
            location=backing_path,
            active_folder=str(active) if active else None,
            aliases={str(k): str(v) for k, v in aliases.items()},
        )

    def to_dict(self) -> dict:
        return {"activeFolder": self.active_folder, "aliases": dict(self.aliases)}

    def store(self) -> None:
        """Rewrite the backing file (temp file, then rename)."""
        with translate_os_errors(f"write vault data {self.location}"):
            self.location.parent.mkdir(parents=True, exist_ok=True)
            temp_path = self.location.with_suffix(".tmp")
            temp_path.write_text(json.dumps(self.to_dict(), indent=2, sort_keys=True), encoding="utf-8")
            temp_path.replace(self.location)
        logger.debug("stored vault data at %s", self.location)

    # -- active folder -------------------------------------------------------

    def get_active_folder_path(self) -> str | None:
        return self.active_folder

    def set_active_folder_path(self, relative_path: str | Path | None) -> None:
        """Point at a vault-root relative folder, or back at the root with None."""
        if relative_path is None or str(relative_path) in {"", "."}:
            self.active_folder = None
        else:
            self.active_folder = PurePosixPath(*Path(relative_path).parts).as_posix()
        self.store()

    def set_backing_location(self, vault_root: Path) -> None:
        """Follow the vault to a new root; the file path is always derived from it."""
        self.location = self.path_for(vault_root)
        self.store()

    # -- aliases -------------------------------------------------------------

    def alias_for(self, note_key: str) -> str | None:
        return self.aliases.get(note_key)

    def note_for_alias(self, alias: str) -> str | None:
        for note_key, note_alias in self.aliases.items():
            if note_alias == alias:
                return note_key
        return None

    def set_alias(self, note_key: str, alias: str) -> None:
        self.aliases[note_key] = alias
        self.store()

    def remove_alias(self, note_key: str) -> str:
        """Drop the alias of the note at `note_key` and return it."""
        if note_key not in self.aliases:
            raise AliasNotFound(note_key)
        alias = self.aliases.pop(note_key)
        self.store()
        return alias

    def drop_alias(self, note_key: str) -> str | None:
        """Like remove_alias, but silent when there is nothing to drop."""
        if note_key not in self.aliases:
            return None
        return self.remove_alias(note_key)

    def rekey_alias(self, old_key: str, new_key: str) -> None:
        """Follow a single note to its new key."""
        if old_key not in self.aliases:
            return
        self.aliases[new_key] = self.aliases.pop(old_key)
        self.store()

    def aliases_under(self, folder_key: str) -> dict[str, str]:
        """Aliases of every note below the folder at `folder_key`."""
        prefix = f"{folder_key}/"
        return {key: alias for key, alias in self.aliases.items() if key.startswith(prefix)}

    def rekey_alias_tree(self, old_folder_key: str, new_folder_key: str) -> None:
        """Follow a renamed or moved folder with the aliases of its notes."""
        moved = self.aliases_under(old_folder_key)
        if not moved:
            return
        for key, alias in moved.items():
            del self.aliases[key]
            self.aliases[new_folder_key + key[len(old_folder_key):]] = alias
        self.store()

    def drop_alias_tree(self, folder_key: str) -> dict[str, str]:
        """Remove and return the aliases of every note below `folder_key`."""
        dropped = self.aliases_under(folder_key)
        if not dropped:
            return {}
        for key in dropped:
            del self.aliases[key]
        self.store()
        return dropped
