"""Shared item kinds and on-disk naming conventions."""

from enum import Enum

# Extension every note carries on disk
NOTE_EXTENSION = ".md"

# Reserved directory inside each vault holding its persisted data
METADATA_DIR_NAME = ".jot"
DATA_FILE_NAME = "data"

# Characters that may not appear in an item name
FORBIDDEN_NAME_CHARS = '\\/?%*:|"<>'


class ItemKind(str, Enum):
    """The three kinds of item a vault is built from."""

    VAULT = "vault"
    FOLDER = "folder"
    NOTE = "note"

    @classmethod
    def parse(cls, value: str) -> "ItemKind":
        """Accept the long names and the short `vl`/`fd`/`nt` forms."""
        value = value.strip().lower()
        return _KIND_ALIASES.get(value) or cls(value)


_KIND_ALIASES = {
    "vl": ItemKind.VAULT,
    "fd": ItemKind.FOLDER,
    "nt": ItemKind.NOTE,
}
