"""
The vault index.

One JSON file per installation records which vaults exist, where their
parent directories are, and which vault is current:

    {"vaults": {"notes": "/home/me/documents"}, "currentVault": "notes"}
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from .errors import FileSystemError, VaultAlreadyExists, VaultNotFound, translate_os_errors
from .paths import join

logger = logging.getLogger(__name__)

REGISTRY_FILENAME = "vaults.json"


@dataclass
class Registry:
    """Vault name -> parent directory, plus the current vault name."""

    path: Path
    vaults: dict[str, Path] = field(default_factory=dict)
    current_vault: str | None = None

    @classmethod
    def load(cls, path: Path) -> "Registry":
        """Read the registry at `path`; a missing file is an empty registry."""
        path = Path(path)
        if not path.exists():
            return cls(path=path)

        with translate_os_errors(f"read vault registry {path}"):
            raw = path.read_text(encoding="utf-8")
        try:
            data = json.loads(raw) if raw.strip() else {}
        except json.JSONDecodeError as exc:
            raise FileSystemError(f"parse vault registry {path}", exc) from exc

        vaults = {str(name): Path(parent) for name, parent in (data.get("vaults") or {}).items()}
        current = data.get("currentVault")
        if current is not None and current not in vaults:
            logger.warning("current vault %s is not registered; clearing it", current)
            current = None

        return cls(path=path, vaults=vaults, current_vault=current)

    def to_dict(self) -> dict:
        return {
            "vaults": {name: str(parent) for name, parent in sorted(self.vaults.items())},
            "currentVault": self.current_vault,
        }

    def store(self) -> None:
        """Rewrite the whole registry file."""
        with translate_os_errors(f"write vault registry {self.path}"):
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_path = self.path.with_suffix(".tmp")
            temp_path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
            temp_path.replace(self.path)

    # -- queries -------------------------------------------------------------

    def vault_exists(self, name: str) -> bool:
        return name in self.vaults

    def vault_location(self, name: str) -> Path | None:
        """Parent directory of the vault called `name`."""
        return self.vaults.get(name)

    def vault_path(self, name: str) -> Path:
        """Absolute path of the vault called `name`."""
        parent = self.vaults.get(name)
        if parent is None:
            raise VaultNotFound(name)
        return join(parent, name)

    def is_current(self, name: str) -> bool:
        return self.current_vault is not None and self.current_vault == name

    # -- mutations (each one persists) ----------------------------------------

    def add_vault(self, name: str, parent_dir: Path) -> None:
        if name in self.vaults:
            raise VaultAlreadyExists(name)
        self.vaults[name] = Path(parent_dir)
        self.store()

    def remove_vault(self, name: str) -> None:
        if name not in self.vaults:
            raise VaultNotFound(name)
        del self.vaults[name]
        if self.current_vault == name:
            self.current_vault = None
        self.store()

    def rename_vault(self, name: str, new_name: str) -> None:
        if new_name in self.vaults:
            raise VaultAlreadyExists(new_name)
        if name not in self.vaults:
            raise VaultNotFound(name)
        self.vaults[new_name] = self.vaults.pop(name)
        if self.current_vault == name:
            self.current_vault = new_name
        self.store()

    def set_vault_location(self, name: str, parent_dir: Path) -> None:
        if name not in self.vaults:
            raise VaultNotFound(name)
        self.vaults[name] = Path(parent_dir)
        self.store()

    def set_current_vault(self, name: str | None) -> None:
        if name is not None and name not in self.vaults:
            raise VaultNotFound(name)
        self.current_vault = name
        self.store()
