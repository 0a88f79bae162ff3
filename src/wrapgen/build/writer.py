"""Diff-writer — replace generated files only when their bytes change."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from wrapgen.core.errors import ArtifactWriteError, atomic_write

logger = logging.getLogger(__name__)


@dataclass
class WriteResult:
    """Outcome of a write or delete. Never raised; inspect ``ok``."""

    path: Path
    changed: bool = False
    error: ArtifactWriteError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _as_bytes(content: bytes | str) -> bytes:
    return content.encode("utf-8") if isinstance(content, str) else content


def write_if_different(path: Path, content: bytes | str) -> WriteResult:
    """Atomically replace path with content unless it already holds those bytes."""
    path = Path(path)
    data = _as_bytes(content)

    try:
        if path.is_file() and path.read_bytes() == data:
            logger.debug("Unchanged: %s", path)
            return WriteResult(path=path, changed=False)
        atomic_write(path, data)
    except OSError as e:
        return WriteResult(
            path=path,
            error=ArtifactWriteError(path, f"Can't write to file: {path} ({e.strerror or e})"),
        )

    logger.debug("Wrote %d bytes: %s", len(data), path)
    return WriteResult(path=path, changed=True)


def delete_if_exists(path: Path) -> WriteResult:
    """Remove a stale generated file. A missing file is not an error."""
    path = Path(path)
    try:
        path.unlink()
    except FileNotFoundError:
        return WriteResult(path=path, changed=False)
    except OSError as e:
        logger.warning("Could not delete %s: %s", path, e)
        return WriteResult(
            path=path,
            error=ArtifactWriteError(path, f"Can't delete file: {path} ({e.strerror or e})"),
        )
    return WriteResult(path=path, changed=True)
