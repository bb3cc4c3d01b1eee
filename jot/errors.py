"""
Error kinds raised by jot.

Every error derives directly from JotError; there is no deeper hierarchy.
`str(error)` is the single line shown to the user.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from .models import ItemKind


class JotError(Exception):
    """Base for every error the core raises."""

    message = "error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class InvalidName(JotError):
    message = "invalid name"


class PathNotFound(JotError):
    message = "couldn't find the path specified"


class OutOfBounds(JotError):
    message = "path crosses the bounds of vault"


class SameLocation(JotError):
    message = "new location is same as old location"


class NotInsideVault(JotError):
    message = "not inside a vault"


class ItemAlreadyExists(JotError):
    def __init__(self, kind: ItemKind, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"a {kind.value} named {name} already exists in this location")


class ItemNotFound(JotError):
    def __init__(self, kind: ItemKind, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"{kind.value} {name} not found")


class VaultAlreadyExists(JotError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"vault {name} already exists")


class VaultNotFound(JotError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"vault {name} doesn't exist")


class AlreadyInVault(JotError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"already in vault {name}")


class AliasNotFound(JotError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"alias for note {name} does not exist")


class EditorNotFound(JotError):
    def __init__(self, editor: str):
        self.editor = editor
        super().__init__(f"editor {editor} not found")


class FileSystemError(JotError):
    """A filesystem call failed after validation passed. Nothing is rolled back."""

    def __init__(self, action: str, cause: Exception):
        self.action = action
        self.cause = cause
        super().__init__(f"failed to {action}: {_describe(cause)}")


def _describe(cause: Exception) -> str:
    if isinstance(cause, OSError) and cause.strerror:
        return cause.strerror.lower()
    return str(cause).lower()


@contextmanager
def translate_os_errors(action: str) -> Iterator[None]:
    """Re-raise any OSError from the wrapped block as a FileSystemError."""
    try:
        yield
    except OSError as exc:
        raise FileSystemError(action, exc) from exc
