"""
Path helpers used by every item.

All functions here are syntactic: nothing touches the filesystem, so
`normalize` can return a path that does not exist.
"""

from __future__ import annotations

import os
from pathlib import Path

from .errors import InvalidName
from .models import FORBIDDEN_NAME_CHARS, METADATA_DIR_NAME

StrPath = str | os.PathLike[str]


def join(*segments: StrPath) -> Path:
    """Concatenate segments with the OS separator."""
    return Path(*segments)


def normalize(path: StrPath) -> Path:
    """Collapse `.` and `..` components without resolving symlinks.

    A `..` pops the last pushed component and never climbs above the anchor.
    """
    path = Path(path)
    anchor = path.anchor
    components = path.parts[1:] if anchor else path.parts

    kept: list[str] = []
    for part in components:
        if part == "..":
            if kept:
                kept.pop()
        elif part != ".":
            kept.append(part)

    if anchor:
        return Path(anchor, *kept)
    return Path(*kept)


def is_contained_in(candidate: StrPath, root: StrPath) -> bool:
    """True when `candidate` is `root` or lies below it, compared per component."""
    candidate_parts = normalize(candidate).parts
    root_parts = normalize(root).parts
    return candidate_parts[: len(root_parts)] == root_parts


def relative_to_root(path: StrPath, root: StrPath) -> Path:
    """`path` expressed relative to `root`; both are normalized first."""
    return normalize(path).relative_to(normalize(root))


def absolute(path: StrPath) -> Path:
    """Expand `~`, anchor at the working directory and normalize."""
    return normalize(Path(path).expanduser().absolute())


def validate_name(name: str) -> str:
    """Return `name` unchanged if it can name an item, else raise InvalidName."""
    if not name or name.strip() != name:
        raise InvalidName()
    if name in {".", "..", METADATA_DIR_NAME}:
        raise InvalidName()
    if any(char in FORBIDDEN_NAME_CHARS for char in name):
        raise InvalidName()
    return name
