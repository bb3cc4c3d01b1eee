"""
Configuration management for jot.

The configuration is a small TOML file in the application directory. It
names the editor used to open notes and the colors used when listing.

The application directory defaults to click's per-user app dir and can be
overridden with the JOT_HOME environment variable.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import click
import tomli_w
from rich.color import Color, ColorParseError

from .errors import FileSystemError, translate_os_errors

logger = logging.getLogger(__name__)

APP_NAME = "jot"
CONFIG_FILENAME = "config.toml"
HOME_ENV_VAR = "JOT_HOME"

_TRUE_VALUES = {"true", "yes", "1", "on"}
_FALSE_VALUES = {"false", "no", "0", "off"}


class ConfigKey(str, Enum):
    EDITOR = "editor"
    CONFLICT = "conflict"
    VAULT_COLOR = "vault_color"
    FOLDER_COLOR = "folder_color"
    NOTE_COLOR = "note_color"


def get_app_dir() -> Path:
    """Directory holding the registry, config and audit log."""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path(click.get_app_dir(APP_NAME))


def parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"expected true or false, got {value!r}")


def parse_color(value: str) -> str:
    """Return `value` if rich understands it as a color."""
    try:
        Color.parse(value)
    except ColorParseError as exc:
        raise ValueError(f"unknown color {value!r}") from exc
    return value


@dataclass
class Config:
    """Editor and display settings."""

    path: Path
    editor: str = "nvim"
    conflict: bool = True
    vault_color: str = "blue"
    folder_color: str = "cyan"
    note_color: str = "white"

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load the config at `path`; missing file or keys fall back to defaults."""
        config = cls(path=Path(path))
        if not config.path.exists():
            return config

        with translate_os_errors(f"read config {config.path}"):
            raw = config.path.read_text(encoding="utf-8")
        try:
            data = tomllib.loads(raw)
        except tomllib.TOMLDecodeError as exc:
            raise FileSystemError(f"parse config {config.path}", exc) from exc

        for key in ConfigKey:
            if key.value not in data:
                continue
            try:
                config._apply(key, _as_text(data[key.value]))
            except ValueError as exc:
                logger.warning("ignoring config %s: %s", key.value, exc)
        return config

    def to_dict(self) -> dict[str, Any]:
        return {
            ConfigKey.EDITOR.value: self.editor,
            ConfigKey.CONFLICT.value: self.conflict,
            ConfigKey.VAULT_COLOR.value: self.vault_color,
            ConfigKey.FOLDER_COLOR.value: self.folder_color,
            ConfigKey.NOTE_COLOR.value: self.note_color,
        }

    def save(self) -> None:
        with translate_os_errors(f"write config {self.path}"):
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(tomli_w.dumps(self.to_dict()), encoding="utf-8")

    def get(self, key: ConfigKey) -> str:
        return _as_text(self.to_dict()[key.value])

    def set(self, key: ConfigKey, value: str) -> None:
        """Validate, apply and persist one setting. Raises ValueError on bad input."""
        self._apply(key, value)
        self.save()

    def _apply(self, key: ConfigKey, value: str) -> None:
        if key is ConfigKey.EDITOR:
            if not value.strip():
                raise ValueError("editor cannot be empty")
            self.editor = value.strip()
        elif key is ConfigKey.CONFLICT:
            self.conflict = parse_bool(value)
        elif key is ConfigKey.VAULT_COLOR:
            self.vault_color = parse_color(value)
        elif key is ConfigKey.FOLDER_COLOR:
            self.folder_color = parse_color(value)
        elif key is ConfigKey.NOTE_COLOR:
            self.note_color = parse_color(value)


def _as_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
