"""The per-process application context handed to every command."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path

from rich.console import Console

from .config import CONFIG_FILENAME, Config, get_app_dir
from .editor import Editor
from .manager import VaultManager
from .registry import REGISTRY_FILENAME, Registry


@dataclass
class AppContext:
    """Everything a command needs, built once at startup and passed explicitly.

    The registry and the current vault are loaded on first use so that
    commands such as `config` work even when the registry is unreadable.
    """

    app_dir: Path
    console: Console = field(default_factory=Console)
    err_console: Console = field(default_factory=lambda: Console(stderr=True))

    @classmethod
    def create(cls, app_dir: Path | None = None) -> "AppContext":
        return cls(app_dir=Path(app_dir) if app_dir is not None else get_app_dir())

    @cached_property
    def config(self) -> Config:
        return Config.load(self.app_dir / CONFIG_FILENAME)

    @cached_property
    def manager(self) -> VaultManager:
        return VaultManager.load(Registry.load(self.app_dir / REGISTRY_FILENAME))

    @property
    def editor(self) -> Editor:
        return Editor.from_config(self.config)
