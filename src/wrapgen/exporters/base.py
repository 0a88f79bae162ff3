"""Toolchain exporter base and registry.

An exporter turns the saved project plus the generated wrapper files into one
toolchain's native project description. The saver fills ``wrapper_folder``
and ``wrapper_files`` before calling ``create()``.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath

from wrapgen.build.writer import write_if_different
from wrapgen.core.errors import ToolchainExportError
from wrapgen.core.models import ExporterDecl, Project


class ToolchainExporter(ABC):
    """Abstract base for toolchain exporters."""

    identifier_macro: str = ""
    default_target_folder: str = "Builds"
    uses_mm_files: bool = False

    def __init__(self, project: Project, decl: ExporterDecl):
        self.project = project
        self.decl = decl
        self.wrapper_folder: str = ""
        self.wrapper_files: list[str] = []

    @property
    def name(self) -> str:
        return self.decl.name

    @property
    def settings(self) -> dict:
        return self.decl.settings

    @property
    def target_folder(self) -> Path:
        return self.project.folder / (self.decl.target_folder or self.default_target_folder)

    @property
    def juce_folder(self) -> str:
        """Library folder, relative to the target folder, or an ``<...>`` system path."""
        return self.decl.juce_folder

    def map_include_path(self, logical_path: str, from_file: Path) -> str:
        """Quoted include path reaching a library file from ``from_file``."""
        folder = self.juce_folder.strip()
        if folder.startswith("<"):
            base = folder.strip("<>").rstrip("/")
            return f"<{PurePosixPath(base, logical_path)}>" if base else f"<{logical_path}>"

        target = self.target_folder / folder / logical_path
        rel = os.path.relpath(target, Path(from_file).parent)
        return f'"{Path(rel).as_posix()}"'

    def rebase(self, project_relative: str) -> str:
        """Path of a project-relative file as seen from the target folder."""
        return Path(os.path.relpath(self.project.folder / project_relative, self.target_folder)).as_posix()

    def wrapper_sources(self) -> list[str]:
        return [f for f in self.wrapper_files if f.endswith((".cpp", ".mm", ".c"))]

    def wrapper_headers(self) -> list[str]:
        return [f for f in self.wrapper_files if f.endswith(".h")]

    def project_sources(self) -> list[str]:
        return [self.rebase(s) for s in self.project.sources]

    def include_dirs(self) -> list[str]:
        dirs = [self.wrapper_folder] if self.wrapper_folder else []
        if not self.juce_folder.startswith("<"):
            dirs.append(PurePosixPath(self.juce_folder).as_posix())
        return dirs

    def write_file(self, filename: str, content: str) -> Path:
        """Write a native project file into the target folder, raising on failure."""
        result = write_if_different(self.target_folder / filename, content)
        if not result.ok:
            raise ToolchainExportError(str(result.error))
        return result.path

    @abstractmethod
    def create(self) -> None:
        """Write this toolchain's native project files.

        Raises:
            ToolchainExportError: if the project files cannot be produced.
        """
        ...


# Exporter registry
_EXPORTERS: dict[str, type[ToolchainExporter]] = {}


def register_exporter(name: str):
    """Decorator to register an exporter class under a project-file type name."""

    def wrapper(cls):
        _EXPORTERS[name] = cls
        return cls

    return wrapper


def get_exporter_types() -> list[str]:
    return sorted(_EXPORTERS)


def is_known_exporter(name: str) -> bool:
    return name in _EXPORTERS


def create_exporter(project: Project, decl: ExporterDecl) -> ToolchainExporter:
    """Instantiate the exporter declared by ``decl``."""
    if decl.exporter_type not in _EXPORTERS:
        raise ValueError(f"Unknown exporter type: {decl.exporter_type}. Available: {get_exporter_types()}")
    return _EXPORTERS[decl.exporter_type](project, decl)


def create_exporters(project: Project) -> list[ToolchainExporter]:
    """All of a project's exporters, in declaration order."""
    return [create_exporter(project, decl) for decl in project.exporters]
