"""Toolchain exporters. Importing this package registers every built-in type."""

from wrapgen.exporters import codeblocks, makefile, xcode  # noqa: F401
from wrapgen.exporters.base import (
    ToolchainExporter,
    create_exporter,
    create_exporters,
    get_exporter_types,
    register_exporter,
)

__all__ = [
    "ToolchainExporter",
    "create_exporter",
    "create_exporters",
    "get_exporter_types",
    "register_exporter",
]
