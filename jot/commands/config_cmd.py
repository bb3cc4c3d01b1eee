"""Configuration and audit log commands."""

from __future__ import annotations

from ..audit_log import format_audit_entry, read_audit_log
from ..config import ConfigKey
from ..context import AppContext
from ..display import highlight, message


def run_config(app: AppContext, key: ConfigKey, value: str | None = None) -> int:
    """Show one setting, or set it when `value` is given."""
    if value is None:
        app.console.print(
            message(f"configuration option [{highlight(key.value)}] is set to {app.config.get(key)}")
        )
        return 0

    try:
        app.config.set(key, value)
    except ValueError as exc:
        app.err_console.print(f"Invalid value for {key.value}: {exc}", style="red")
        return 1

    app.console.print(message(f"configuration option [{highlight(key.value)}] set to {app.config.get(key)}"))
    return 0


def run_log(app: AppContext, *, last_n: int | None = None) -> int:
    entries = read_audit_log(app.app_dir, last_n=last_n)
    if not entries:
        app.err_console.print("Audit log is empty.", style="yellow")
        return 0
    for entry in entries:
        print(format_audit_entry(entry))
    return 0
