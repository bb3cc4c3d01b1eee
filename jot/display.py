"""Console formatting: confirmation lines, vault listings and item trees."""

from __future__ import annotations

from rich.markup import escape
from rich.text import Text

from .config import Config
from .items import TreeLine
from .manager import VaultListing
from .models import ItemKind

CURRENT_MARKER = "👉 "


def message(content: str) -> str:
    """Prefix a confirmation line with the tool's banner."""
    return f"[yellow]ϟ jot ϟ[/yellow] {content}"


def highlight(name: str, color: str = "blue") -> str:
    return f"[{color}]{escape(name)}[/{color}]"


def kind_color(config: Config, kind: ItemKind) -> str:
    if kind is ItemKind.VAULT:
        return config.vault_color
    if kind is ItemKind.FOLDER:
        return config.folder_color
    return config.note_color


def render_tree(title: str, lines: list[TreeLine], config: Config) -> list[Text]:
    """Title row in the vault color followed by one colored row per item."""
    rows = [Text(title, style=config.vault_color)]
    for line in lines:
        row = Text(line.prefix)
        row.append(line.name, style=kind_color(config, line.kind))
        rows.append(row)
    return rows


def render_vault_list(listings: list[VaultListing], config: Config, show_loc: bool = False) -> list[Text]:
    rows = []
    for listing in listings:
        if listing.is_current:
            row = Text(CURRENT_MARKER)
            row.append(listing.name, style=config.vault_color)
        else:
            row = Text("   " + listing.name)
        if show_loc:
            row.append(f" \t {listing.parent}")
        rows.append(row)
    return rows
