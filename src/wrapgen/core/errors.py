"""Wrapgen error types and utilities."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path


def _default_mode() -> int:
    """Permission bits a plain ``open()`` would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def atomic_write(path: Path, content: bytes) -> None:
    """Write content to a file atomically using temp file + rename.

    Writes to a temporary file in the same directory, fsyncs it,
    then atomically replaces the target path. An existing target keeps its
    permission bits; a new one gets the umask default rather than mkstemp's 0600.
    """
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        mode = _default_mode()

    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        os.write(fd, content)
        os.fsync(fd)
        os.close(fd)
        os.chmod(tmp, mode)
        os.replace(tmp, str(path))
    except BaseException:
        try:
            os.close(fd)
        except OSError:
            pass
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


class WrapgenError(Exception):
    """Base exception for Wrapgen."""

    pass


class SerializationError(WrapgenError):
    """Project model could not be written, or did not survive a round trip."""

    pass


class ArtifactWriteError(WrapgenError):
    """A generated file could not be written or deleted."""

    def __init__(self, path: Path, message: str):
        super().__init__(message)
        self.path = path


class ToolchainExportError(WrapgenError):
    """An exporter failed to write its native project files."""

    pass


class ContractViolation(WrapgenError):
    """A caller handed the core a state it must never see."""

    pass
