"""Commands acting on notes and folders of the current vault."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Callable

from ..audit_log import log_operation
from ..context import AppContext
from ..display import highlight, message, render_tree
from ..errors import ItemNotFound
from ..items import Note, Scope
from ..models import ItemKind

# Receives candidate note names, returns the chosen one or None
Chooser = Callable[[list[str]], str | None]


def daily_note_name(today: date | None = None) -> str:
    """Name of the daily note, e.g. 2024-05-17."""
    return (today or date.today()).isoformat()


def run_create_note(app: AppContext, name: str) -> int:
    note = app.manager.require_current().create_note(name)
    log_operation(app.app_dir, "note-create", {"name": name, "path": note.location})
    app.console.print(message(f"note {highlight(name)} created"))
    return 0


def run_create_folder(app: AppContext, name: str) -> int:
    folder = app.manager.require_current().create_folder(name)
    log_operation(app.app_dir, "folder-create", {"name": name, "path": folder.location})
    app.console.print(message(f"folder {highlight(name)} created"))
    return 0


def find_note(app: AppContext, name: str, choose: Chooser | None = None) -> Note:
    """Resolve a note by name or alias; fall back to `choose` when that fails."""
    vault = app.manager.require_current()
    try:
        return vault.resolve_note(name)
    except ItemNotFound:
        if choose is None:
            raise
        active = vault.active_collection()
        names = [note.name for note in active.sorted_notes()]
        candidates = [n for n in names if name.lower() in n.lower()] or names
        picked = choose(candidates) if candidates else None
        if picked is None:
            raise
        return active.note_named(picked)


def run_open_note(app: AppContext, name: str, *, choose: Chooser | None = None) -> int:
    return _open_in_editor(app, find_note(app, name, choose))


def _open_in_editor(app: AppContext, note: Note) -> int:
    editor = app.editor
    result = editor.open_note(note)
    if not result.ok:
        app.err_console.print(f"{editor.name} exited with status {result.returncode}", style="yellow")
        return 1
    return 0


def run_today(app: AppContext, *, create_if_missing: bool = False) -> int:
    """Open today's note, creating it first when asked to."""
    vault = app.manager.require_current()
    name = daily_note_name()
    try:
        note = vault.note_in_active_folder(name)
    except ItemNotFound:
        if not create_if_missing:
            raise
        note = vault.create_note(name)
        log_operation(app.app_dir, "note-create", {"name": name, "path": note.location})
        app.console.print(message(f"note {highlight(name)} created"))

    return _open_in_editor(app, note)


def run_alias(app: AppContext, name: str, alias: str | None = None, *, remove: bool = False) -> int:
    vault = app.manager.require_current()
    if remove:
        removed = vault.remove_alias(name)
        log_operation(app.app_dir, "alias-remove", {"note": name, "alias": removed})
        app.console.print(message(f"removed alias {highlight(name)} -> {highlight(removed)}"))
        return 0

    if alias is None:
        current = vault.alias_for(name)
        if current is None:
            app.err_console.print(f"note {name} has no alias", style="yellow")
            return 1
        app.console.print(f"{name} -> {current}")
        return 0

    vault.set_alias(name, alias)
    log_operation(app.app_dir, "alias-create", {"note": name, "alias": alias})
    app.console.print(message(f"created alias {highlight(name)} -> {highlight(alias)}"))
    return 0


def run_chdir(app: AppContext, path: Path) -> int:
    vault = app.manager.require_current()
    vault.change_folder(path)
    app.console.print(message(f"changed folder to {highlight(vault.store.active_folder or vault.name)}"))
    return 0


def run_list(app: AppContext) -> int:
    vault = app.manager.require_current()
    active = vault.active_collection()
    title = vault.name
    if active.scope is Scope.ACTIVE_FOLDER:
        title = f"{vault.name}/{vault.store.active_folder}"
    for row in render_tree(title, active.render_tree(), app.config):
        app.console.print(row)
    return 0


def run_remove_item(app: AppContext, kind: ItemKind, name: str) -> int:
    item = app.manager.require_current().remove_item(kind, name)
    log_operation(app.app_dir, f"{kind.value}-remove", {"name": name, "path": item.location})
    app.console.print(message(f"{kind.value} {highlight(name)} removed"))
    return 0


def run_rename_item(app: AppContext, kind: ItemKind, name: str, new_name: str) -> int:
    item = app.manager.require_current().rename_item(kind, name, new_name)
    log_operation(app.app_dir, f"{kind.value}-rename", {"name": name, "new_name": new_name, "path": item.location})
    app.console.print(message(f"{kind.value} {highlight(name)} renamed to {highlight(new_name)}"))
    return 0


def run_move_item(app: AppContext, kind: ItemKind, name: str, destination: Path) -> int:
    new_location = app.manager.require_current().move_item(kind, name, destination)
    log_operation(app.app_dir, f"{kind.value}-move", {"name": name, "path": new_location})
    app.console.print(message(f"{kind.value} {highlight(name)} moved"))
    return 0


def run_vmove(app: AppContext, kind: ItemKind, name: str, vault_name: str) -> int:
    new_location = app.manager.move_item_to_vault(kind, name, vault_name)
    log_operation(app.app_dir, f"{kind.value}-vmove", {"name": name, "vault": vault_name, "path": new_location})
    app.console.print(message(f"{kind.value} {highlight(name)} moved to vault {highlight(vault_name)}"))
    return 0
