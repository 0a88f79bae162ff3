"""Structured logging and verbosity levels for Wrapgen saves."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)


class Verbosity(IntEnum):
    """Verbosity levels for console output."""

    DEFAULT = 0   # Exporter progress lines and errors only
    VERBOSE = 1   # + per-file status
    DEBUG = 2     # + unchanged files


@dataclass
class SaveLog:
    """Structured log of a complete save.

    Serializable to dict; the format is::

        {
            "run_id": "20240315T101500Z",
            "written": ["/proj/JuceLibraryCode/AppConfig.h", ...],
            "unchanged": [...],
            "deleted": [...],
            "exporters": ["Linux Makefile", ...],
            "errors": [],
        }
    """

    run_id: str = ""
    written: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    exporters: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "written": list(self.written),
            "unchanged": list(self.unchanged),
            "deleted": list(self.deleted),
            "exporters": list(self.exporters),
            "errors": list(self.errors),
        }


class SaveLogger:
    """Structured logger for project saves.

    Writes JSONL log files to log_dir and emits console output via Rich
    based on verbosity level.
    """

    def __init__(
        self,
        verbosity: Verbosity = Verbosity.DEFAULT,
        log_dir: Path | None = None,
        console: Console | None = None,
    ):
        self.verbosity = verbosity
        self.log_dir = log_dir
        self.console = console or Console(highlight=False)
        self.save_log = SaveLog(
            run_id=datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ"),
        )
        self._log_file = None
        self._log_path: Path | None = None

        if log_dir is not None:
            try:
                log_dir.mkdir(parents=True, exist_ok=True)
                self._log_path = log_dir / f"{self.save_log.run_id}.jsonl"
                self._log_file = open(self._log_path, "a", encoding="utf-8")
            except OSError as e:
                logger.warning("Cannot open save log in %s: %s", log_dir, e)
                self._log_path = None
                self.console.print(f"[yellow]Warning:[/yellow] save log disabled, can't write to {escape(str(log_dir))}")

    @property
    def log_path(self) -> Path | None:
        return self._log_path

    def _write_event(self, event: dict[str, Any]) -> None:
        """Write a JSON event to the JSONL log file."""
        if self._log_file is not None:
            event["timestamp"] = datetime.now(timezone.utc).isoformat()
            self._log_file.write(json.dumps(event) + "\n")
            self._log_file.flush()

    def _console_print(self, message: str, min_verbosity: Verbosity) -> None:
        if self.verbosity >= min_verbosity:
            self.console.print(message)

    # -- Save lifecycle --

    def save_start(self, project_name: str, project_file: Path) -> None:
        self._write_event({
            "event": "save_start",
            "project": project_name,
            "file": str(project_file),
        })
        self._console_print(
            f"[bold]Saving project:[/bold] {escape(project_name)}",
            Verbosity.VERBOSE,
        )

    def save_finish(self, success: bool) -> None:
        self._write_event({
            "event": "save_finish",
            "success": success,
            "written": len(self.save_log.written),
            "unchanged": len(self.save_log.unchanged),
            "deleted": len(self.save_log.deleted),
            "errors": len(self.save_log.errors),
        })
        self.close()

    # -- File events --

    def artifact_written(self, path: Path) -> None:
        self.save_log.written.append(str(path))
        self._write_event({"event": "artifact_written", "path": str(path)})
        self._console_print(f"  [green]+[/green] {escape(str(path))}", Verbosity.VERBOSE)

    def artifact_unchanged(self, path: Path) -> None:
        self.save_log.unchanged.append(str(path))
        self._write_event({"event": "artifact_unchanged", "path": str(path)})
        self._console_print(f"  [cyan]=[/cyan] {escape(str(path))} (unchanged)", Verbosity.DEBUG)

    def artifact_deleted(self, path: Path) -> None:
        self.save_log.deleted.append(str(path))
        self._write_event({"event": "artifact_deleted", "path": str(path)})
        self._console_print(f"  [yellow]-[/yellow] {escape(str(path))}", Verbosity.VERBOSE)

    def error(self, message: str) -> None:
        self.save_log.errors.append(message)
        self._write_event({"event": "error", "message": message})
        self._console_print(f"  [red]![/red] {escape(message)}", Verbosity.VERBOSE)

    # -- Exporter events --

    def exporter_start(self, name: str) -> None:
        """Report the exporter being written; always shown."""
        self.save_log.exporters.append(name)
        self._write_event({"event": "exporter_start", "exporter": name})
        self.console.print(f"Writing files for: {escape(name)}", soft_wrap=True)

    def exporter_finish(self, name: str, success: bool) -> None:
        self._write_event({
            "event": "exporter_finish",
            "exporter": name,
            "success": success,
        })

    def close(self) -> None:
        """Close the log file if open."""
        if self._log_file is not None:
            self._log_file.close()
            self._log_file = None
