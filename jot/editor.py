"""Launching the user's editor on a note."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass

from .config import Config
from .errors import EditorNotFound, FileSystemError, PathNotFound
from .items import Note

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditorResult:
    """Outcome of one launch. `returncode` is only known when the launch blocked."""

    blocked: bool
    returncode: int | None = None

    @property
    def ok(self) -> bool:
        return self.returncode in (None, 0)


@dataclass(frozen=True)
class Editor:
    """CLI editor command plus whether it takes over the terminal (`conflict`)."""

    name: str
    conflict: bool = True

    @classmethod
    def from_config(cls, config: Config) -> "Editor":
        return cls(name=config.editor, conflict=config.conflict)

    def open_note(self, note: Note) -> EditorResult:
        """Open `note` in the editor; wait for it to exit when `conflict` is set."""
        if not note.location.is_file():
            raise PathNotFound(f"note {note.name} does not exist on disk")

        command = [self.name, str(note.location)]
        logger.debug("launching %s", command)
        try:
            process = subprocess.Popen(command)
        except FileNotFoundError as exc:
            raise EditorNotFound(self.name) from exc
        except OSError as exc:
            raise FileSystemError(f"launch editor {self.name}", exc) from exc

        if not self.conflict:
            return EditorResult(blocked=False)
        return EditorResult(blocked=True, returncode=process.wait())
