"""Vault commands: list, show, create, enter, remove, rename, move."""

from __future__ import annotations

from pathlib import Path

from ..audit_log import log_operation
from ..context import AppContext
from ..display import highlight, message, render_vault_list
from ..errors import VaultNotFound


def run_list_vaults(app: AppContext, *, show_loc: bool = False) -> int:
    listings = app.manager.list_vaults()
    if not listings:
        app.err_console.print("No vaults yet. Create one with: jot vault NAME LOCATION", style="yellow")
        return 0
    for row in render_vault_list(listings, app.config, show_loc=show_loc):
        app.console.print(row)
    return 0


def run_show_vault(app: AppContext, name: str) -> int:
    listing = next((row for row in app.manager.list_vaults() if row.name == name), None)
    if listing is None:
        raise VaultNotFound(name)
    for row in render_vault_list([listing], app.config, show_loc=True):
        app.console.print(row)
    return 0


def run_create_vault(app: AppContext, name: str, location: Path) -> int:
    vault = app.manager.create_vault(name, location)
    log_operation(app.app_dir, "vault-create", {"name": name, "path": vault.location})
    app.console.print(message(f"vault {highlight(name)} created"))
    return 0


def run_enter_vault(app: AppContext, name: str) -> int:
    app.manager.enter_vault(name)
    app.console.print(message(f"entered {highlight(name)}"))
    return 0


def run_remove_vault(app: AppContext, name: str) -> int:
    path = app.manager.get_vault_path(name)
    app.manager.remove_vault(name)
    log_operation(app.app_dir, "vault-remove", {"name": name, "path": path})
    app.console.print(message(f"vault {highlight(name)} removed"))
    return 0


def run_rename_vault(app: AppContext, name: str, new_name: str) -> int:
    vault = app.manager.rename_vault(name, new_name)
    log_operation(app.app_dir, "vault-rename", {"name": name, "new_name": new_name, "path": vault.location})
    app.console.print(message(f"vault {highlight(name)} renamed to {highlight(new_name)}"))
    return 0


def run_move_vault(app: AppContext, name: str, new_parent: Path) -> int:
    vault = app.manager.move_vault(name, new_parent)
    log_operation(app.app_dir, "vault-move", {"name": name, "path": vault.location})
    app.console.print(message(f"vault {highlight(name)} moved"))
    return 0
