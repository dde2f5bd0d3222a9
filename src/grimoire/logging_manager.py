"""Diagnostic logging setup and per-session mutation transcripts."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from .events import MutationEvent
    from .script import ScriptImportResult

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR")


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output through a level filter.

    Args:
        level: One of ``LOG_LEVELS`` (case-insensitive).
    """
    name = level.upper()
    if name not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level}")
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, name)),
    )


class LoggingManager:
    """Writes a human-readable transcript of every applied mutation.

    Each enabled manager owns one ``<base_dir>/<YYYYmmdd_HHMMSS>/session.log``
    file. A disabled manager ignores every call.
    """

    def __init__(self, enabled: bool = False, base_dir: Path | None = None) -> None:
        self.enabled = enabled
        if not enabled:
            return

        root = base_dir if base_dir is not None else Path("logs")
        self.log_dir = root / datetime.now().strftime("%Y%m%d_%H%M%S")
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.transcript_path = self.log_dir / "session.log"

    def _write_log(self, content: str) -> None:
        if not self.enabled:
            return

        stamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.transcript_path.open("a", encoding="utf-8") as handle:
            handle.write(f"\n{'-' * 72}\n[{stamp}] {content}\n")

    def log_mutation(self, event: MutationEvent) -> None:
        """Append one applied mutation with its origin and payload."""
        if not self.enabled:
            return

        self._write_log(
            f"MUTATION {event.name.value}\n"
            f"  Origin: {event.origin.value}\n"
            f"  Payload: {event.payload!r}"
        )

    def log_import(self, result: ScriptImportResult) -> None:
        """Log the outcome of a script import, including dropped entries."""
        if not self.enabled:
            return

        lines = ["SCRIPT IMPORT"]
        lines.append(f"  Roles: {', '.join(result.roles) or '-'}")
        lines.append(f"  Custom roles: {', '.join(r.id for r in result.custom_roles) or '-'}")
        lines.append(f"  Other travelers: {len(result.other_travelers)}")
        if result.rejected:
            lines.append("  Rejected entries:")
            for rejected in result.rejected:
                lines.append(f"    - #{rejected.index}: {rejected.reason} ({rejected.entry!r})")
        self._write_log("\n".join(lines))


__all__ = ["LOG_LEVELS", "LoggingManager", "configure_logging"]
