"""CLI entrypoint for jot."""

import logging
import sys
from pathlib import Path
from typing import Callable

import click

from . import __version__
from .config import ConfigKey
from .context import AppContext
from .errors import JotError
from .logging_config import configure_logging
from .models import ItemKind

logger = logging.getLogger(__name__)

KIND_CHOICES = ["vault", "vl", "folder", "fd", "note", "nt"]
VAULT_ITEM_CHOICES = ["folder", "fd", "note", "nt"]


def _run(command: Callable[..., int], *args, **kwargs) -> None:
    """Run a command, turning jot errors into a single red line and exit code 1."""
    try:
        exit_code = command(*args, **kwargs)
    except JotError as exc:
        logger.debug("command failed", exc_info=True)
        raise click.ClickException(str(exc)) from exc
    sys.exit(exit_code)


def _removal_prompt(kind: ItemKind, name: str) -> str:
    if kind is ItemKind.NOTE:
        return f"Remove note {name}?"
    return f"Remove {kind.value} {name} and everything in it?"


def _prompt_choice(candidates: list[str]) -> str | None:
    """Let the user pick a note when the exact lookup failed."""
    if not sys.stdin.isatty():
        return None
    return click.prompt("Pick a note", type=click.Choice(candidates), show_choices=True)


@click.group()
@click.version_option(__version__, prog_name="jot")
@click.option(
    "--home",
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Application directory for the vault registry and config (defaults to $JOT_HOME or the per-user app dir)",
)
@click.option("--debug", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx: click.Context, home: Path | None, debug: bool) -> None:
    """jot - vaults, folders and markdown notes.

    Create a vault, enter it, and every other command works inside it:

        jot vault notes ~/documents

        jot enter notes

        jot note groceries
    """
    configure_logging(debug)
    ctx.ensure_object(dict)
    ctx.obj["app"] = AppContext.create(home)


# -----------------------------------------------------------------------------
# Vaults
# -----------------------------------------------------------------------------


@cli.command()
@click.option("--show-loc", "-l", is_flag=True, help="Show the parent directory of each vault")
@click.argument("name", required=False)
@click.argument("location", required=False, type=click.Path(file_okay=False, path_type=Path))
@click.pass_context
def vault(ctx: click.Context, show_loc: bool, name: str | None, location: Path | None) -> None:
    """List vaults, show one, or create one.

    Examples:

        jot vault

        jot vault notes --show-loc

        jot vault notes ~/documents
    """
    from .commands.vaults import run_create_vault, run_list_vaults, run_show_vault

    app = ctx.obj["app"]
    if name is not None and location is not None:
        _run(run_create_vault, app, name, location)
    elif name is not None and show_loc:
        _run(run_show_vault, app, name)
    elif name is not None:
        raise click.UsageError("LOCATION is required to create a vault (or pass --show-loc)")
    else:
        _run(run_list_vaults, app, show_loc=show_loc)


@cli.command()
@click.argument("name")
@click.pass_context
def enter(ctx: click.Context, name: str) -> None:
    """Make NAME the current vault."""
    from .commands.vaults import run_enter_vault

    _run(run_enter_vault, ctx.obj["app"], name)


# -----------------------------------------------------------------------------
# Notes and folders
# -----------------------------------------------------------------------------


@cli.command()
@click.argument("name")
@click.pass_context
def note(ctx: click.Context, name: str) -> None:
    """Create a note in the active folder."""
    from .commands.items import run_create_note

    _run(run_create_note, ctx.obj["app"], name)


@cli.command()
@click.argument("name")
@click.pass_context
def folder(ctx: click.Context, name: str) -> None:
    """Create a folder in the active folder."""
    from .commands.items import run_create_folder

    _run(run_create_folder, ctx.obj["app"], name)


@cli.command("open")
@click.argument("name")
@click.pass_context
def open_note(ctx: click.Context, name: str) -> None:
    """Open a note (by name or alias) in the configured editor."""
    from .commands.items import run_open_note

    _run(run_open_note, ctx.obj["app"], name, choose=_prompt_choice)


@cli.command()
@click.option("--create", "-c", "create_if_missing", is_flag=True, help="Create today's note if it doesn't exist")
@click.pass_context
def today(ctx: click.Context, create_if_missing: bool) -> None:
    """Open the note named after today's date."""
    from .commands.items import run_today

    _run(run_today, ctx.obj["app"], create_if_missing=create_if_missing)


@cli.command()
@click.argument("name")
@click.argument("alias", required=False)
@click.option("--remove", "-r", "remove_alias", is_flag=True, help="Remove the note's alias")
@click.pass_context
def alias(ctx: click.Context, name: str, alias: str | None, remove_alias: bool) -> None:
    """Show, set or remove the alias of note NAME."""
    from .commands.items import run_alias

    _run(run_alias, ctx.obj["app"], name, alias, remove=remove_alias)


@cli.command()
@click.argument("path", type=click.Path(path_type=Path))
@click.pass_context
def chdir(ctx: click.Context, path: Path) -> None:
    """Change the active folder, relative to the current one.

    Examples:

        jot chdir projects

        jot chdir ..
    """
    from .commands.items import run_chdir

    _run(run_chdir, ctx.obj["app"], path)


@cli.command("list")
@click.pass_context
def list_items(ctx: click.Context) -> None:
    """Print the tree under the active folder."""
    from .commands.items import run_list

    _run(run_list, ctx.obj["app"])


# -----------------------------------------------------------------------------
# Remove / rename / move
# -----------------------------------------------------------------------------


@cli.command()
@click.argument("kind", type=click.Choice(KIND_CHOICES, case_sensitive=False))
@click.argument("name")
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Don't ask for confirmation")
@click.pass_context
def remove(ctx: click.Context, kind: str, name: str, assume_yes: bool) -> None:
    """Delete a vault, folder or note. This cannot be undone."""
    from .commands.items import run_remove_item
    from .commands.vaults import run_remove_vault

    item_kind = ItemKind.parse(kind)
    if not assume_yes:
        click.confirm(_removal_prompt(item_kind, name), abort=True)

    if item_kind is ItemKind.VAULT:
        _run(run_remove_vault, ctx.obj["app"], name)
    else:
        _run(run_remove_item, ctx.obj["app"], item_kind, name)


@cli.command()
@click.argument("kind", type=click.Choice(KIND_CHOICES, case_sensitive=False))
@click.argument("name")
@click.argument("new_name")
@click.pass_context
def rename(ctx: click.Context, kind: str, name: str, new_name: str) -> None:
    """Rename a vault, folder or note."""
    from .commands.items import run_rename_item
    from .commands.vaults import run_rename_vault

    item_kind = ItemKind.parse(kind)
    if item_kind is ItemKind.VAULT:
        _run(run_rename_vault, ctx.obj["app"], name, new_name)
    else:
        _run(run_rename_item, ctx.obj["app"], item_kind, name, new_name)


@cli.command()
@click.argument("kind", type=click.Choice(KIND_CHOICES, case_sensitive=False))
@click.argument("name")
@click.argument("location", type=click.Path(path_type=Path))
@click.pass_context
def move(ctx: click.Context, kind: str, name: str, location: Path) -> None:
    """Move an item.

    For a vault LOCATION is its new parent directory; for folders and notes it
    is a folder of the current vault, relative to the active folder.
    """
    from .commands.items import run_move_item
    from .commands.vaults import run_move_vault

    item_kind = ItemKind.parse(kind)
    if item_kind is ItemKind.VAULT:
        _run(run_move_vault, ctx.obj["app"], name, location)
    else:
        _run(run_move_item, ctx.obj["app"], item_kind, name, location)


@cli.command()
@click.argument("kind", type=click.Choice(VAULT_ITEM_CHOICES, case_sensitive=False))
@click.argument("name")
@click.argument("vault_name")
@click.pass_context
def vmove(ctx: click.Context, kind: str, name: str, vault_name: str) -> None:
    """Move a folder or note into the root of another vault."""
    from .commands.items import run_vmove

    _run(run_vmove, ctx.obj["app"], ItemKind.parse(kind), name, vault_name)


# -----------------------------------------------------------------------------
# Config and audit log
# -----------------------------------------------------------------------------


@cli.command()
@click.argument("key", type=click.Choice([key.value for key in ConfigKey]))
@click.argument("value", required=False)
@click.pass_context
def config(ctx: click.Context, key: str, value: str | None) -> None:
    """Show or set a configuration value.

    Examples:

        jot config editor

        jot config editor vim

        jot config conflict false
    """
    from .commands.config_cmd import run_config

    _run(run_config, ctx.obj["app"], ConfigKey(key), value)


@cli.command("log")
@click.option("--last", "last_n", type=int, default=None, help="Show only the last N entries")
@click.pass_context
def audit_log(ctx: click.Context, last_n: int | None) -> None:
    """Show the audit log of state-changing commands."""
    from .commands.config_cmd import run_log

    _run(run_log, ctx.obj["app"], last_n=last_n)


def main() -> None:
    """Main entrypoint."""
    cli()


if __name__ == "__main__":
    main()
