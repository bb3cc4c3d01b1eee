"""
Audit log of state-changing commands.

Every command that changes a vault, its items or the registry appends one
JSON line to `<app dir>/audit.log`. Nothing in the log is read back by the
core; it exists so that moves and deletions leave a trace.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .errors import translate_os_errors

logger = logging.getLogger(__name__)

AUDIT_LOG_FILENAME = "audit.log"


@dataclass
class AuditEntry:
    """A single audit log entry."""
    timestamp: str
    operation: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp,
            "operation": self.operation,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AuditEntry":
        """Create from dictionary."""
        return cls(
            timestamp=data["timestamp"],
            operation=data["operation"],
            metadata=data.get("metadata", {}),
        )


def get_audit_log_path(app_dir: Path) -> Path:
    """Get the path to the audit log file."""
    return app_dir / AUDIT_LOG_FILENAME


def log_operation(
    app_dir: Path,
    operation: str,
    metadata: dict[str, Any] | None = None,
) -> AuditEntry:
    """
    Log an operation to the audit log.

    Args:
        app_dir: Application directory holding the registry
        operation: Name of the operation (e.g., "vault-create", "note-move")
        metadata: Additional context (names, paths, destination vault)

    Returns:
        The created audit entry
    """
    entry = AuditEntry(
        timestamp=datetime.now(timezone.utc).isoformat(),
        operation=operation,
        metadata={key: str(value) for key, value in (metadata or {}).items()},
    )

    log_path = get_audit_log_path(app_dir)
    with translate_os_errors(f"write audit log {log_path}"):
        log_path.parent.mkdir(parents=True, exist_ok=True)
        # Append as JSON Lines format (one JSON object per line)
        with log_path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(entry.to_dict()) + "\n")

    return entry


def read_audit_log(app_dir: Path, last_n: int | None = None) -> list[AuditEntry]:
    """Entries of the audit log, oldest first; `last_n` keeps only the newest N."""
    log_path = get_audit_log_path(app_dir)
    if not log_path.exists():
        return []

    with translate_os_errors(f"read audit log {log_path}"):
        lines = log_path.read_text(encoding="utf-8").splitlines()

    entries: list[AuditEntry] = []
    for number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            entries.append(AuditEntry.from_dict(json.loads(line)))
        except (json.JSONDecodeError, KeyError, TypeError):
            logger.debug("skipping malformed audit log line %d", number)

    if last_n is None:
        return entries
    return entries[-last_n:] if last_n > 0 else []


def format_audit_entry(entry: AuditEntry) -> str:
    """Format an audit entry for human-readable display."""
    lines = [f"[{entry.timestamp}] {entry.operation}"]
    for key, value in entry.metadata.items():
        lines.append(f"  {key}: {value}")
    return "\n".join(lines)
