"""Project saver — persist the model, regenerate wrapper files, run exporters.

A save runs strictly in sequence::

    persist model -> plan -> render wrapper files -> export per toolchain

Recoverable failures (unwritable files, folders that can't be created,
exporter errors) are collected in ``errors`` and the save carries on with
independent work; each phase only starts if no error has been logged yet.
When anything failed, the project's recorded file path is put back to what
it was before the save.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from wrapgen.build.includes import relative_posix
from wrapgen.build.plan import BINARY_DATA_NAME, ArtifactPaths, ArtifactPlan, plan_for_project
from wrapgen.build.project import serialize_project, verify_roundtrip
from wrapgen.build.render import (
    render_app_config,
    render_app_header,
    render_plugin_characteristics,
    render_source_shim,
)
from wrapgen.build.resources import BinaryDataWriter
from wrapgen.build.writer import WriteResult, delete_if_exists, write_if_different
from wrapgen.core.config import SaveConfig
from wrapgen.core.errors import ToolchainExportError
from wrapgen.core.logging import SaveLogger, Verbosity
from wrapgen.core.models import Project
from wrapgen.exporters.base import ToolchainExporter, create_exporter


@dataclass
class SaveResult:
    """Outcome of a save. ``errors`` is empty on success."""

    errors: list[str] = field(default_factory=list)
    plan: ArtifactPlan | None = None
    save_log: dict = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def first_error(self) -> str | None:
        return self.errors[0] if self.errors else None


class ProjectSaver:
    """Saves one project to ``project_file`` and regenerates everything derived from it."""

    def __init__(
        self,
        project: Project,
        project_file: str | Path,
        config: SaveConfig | None = None,
        logger: SaveLogger | None = None,
    ):
        self.project = project
        self.project_file = Path(project_file)
        self.config = config or SaveConfig.from_dict()
        self.logger = logger or SaveLogger(
            verbosity=Verbosity(min(self.config.verbosity, Verbosity.DEBUG)),
            log_dir=self.config.log_dir,
        )
        self.errors: list[str] = []
        self.plan: ArtifactPlan | None = None
        self.paths: ArtifactPaths | None = None
        self.exporters: list[ToolchainExporter] = []

    def save(self) -> SaveResult:
        """Run the whole save. Only contract and round-trip failures raise."""
        old_file = self.project.file
        self.project.file = self.project_file
        self.logger.save_start(self.project.name, self.project_file)

        try:
            self._write_main_project_file()

            if not self.errors:
                self.plan = plan_for_project(self.project)
                self.paths = ArtifactPaths.for_project(self.project)
                self._create_exporters()
                self._write_wrapper_files()

            if not self.errors:
                self._write_projects()
        except BaseException:
            self.project.file = old_file
            self.logger.close()
            raise

        if self.errors:
            self.project.file = old_file

        self.logger.save_finish(success=not self.errors)
        return SaveResult(
            errors=list(self.errors),
            plan=self.plan,
            save_log=self.logger.save_log.to_dict(),
        )

    # -- Error log --

    def _error(self, message: str) -> None:
        self.errors.append(message)
        self.logger.error(message)

    def _record(self, result: WriteResult, deleting: bool = False) -> bool:
        if not result.ok:
            self._error(str(result.error))
            return False
        if result.changed:
            if deleting:
                self.logger.artifact_deleted(result.path)
            else:
                self.logger.artifact_written(result.path)
        elif not deleting:
            self.logger.artifact_unchanged(result.path)
        return True

    def _replace(self, path: Path, content: str) -> bool:
        return self._record(write_if_different(path, content))

    def _delete(self, path: Path) -> bool:
        return self._record(delete_if_exists(path), deleting=True)

    def _create_folder(self, folder: Path, message: str = "Couldn't create folder") -> bool:
        try:
            folder.mkdir(parents=True, exist_ok=True)
        except OSError:
            self._error(f"{message}: {folder}")
            return False
        return True

    # -- Phases --

    def _write_main_project_file(self) -> None:
        text = serialize_project(self.project)
        if self.config.verify_roundtrip:
            verify_roundtrip(self.project, text)

        result = write_if_different(self.project_file, text)
        if not result.ok:
            self._error(f"Couldn't write to the target file: {self.project_file}")
            return
        self._record(result)

    def _create_exporters(self) -> None:
        for decl in self.project.exporters:
            try:
                self.exporters.append(create_exporter(self.project, decl))
            except ValueError as e:
                self._error(str(e))

    def _write_wrapper_files(self) -> None:
        plan, paths, project = self.plan, self.paths, self.project

        if plan.has_resources:
            if not self._create_folder(paths.wrapper_folder):
                return
            writer = BinaryDataWriter(
                resources=[project.folder / r for r in project.resources],
                class_name=BINARY_DATA_NAME,
            )
            for result in writer.write(paths.binary_data_cpp):
                self._record(result)
        else:
            self._delete(paths.binary_data_cpp)
            self._delete(paths.binary_data_h)

        if project.is_library:
            return

        if not self._create_folder(paths.wrapper_folder):
            return

        if plan.has_app_config:
            self._replace(paths.app_config, render_app_config(project))
        else:
            self._delete(paths.app_config)

        if plan.has_plugin_characteristics:
            self._replace(paths.plugin_characteristics, render_plugin_characteristics(project, paths))
        else:
            self._delete(paths.plugin_characteristics)

        for i in paths.shim_indices():
            if plan.uses_shim(i):
                content = render_source_shim(project, paths, i, self.exporters)
                self._replace(paths.shim_cpp(i), content)
                self._replace(paths.shim_mm(i), content)
            else:
                self._delete(paths.shim_mm(i))
                self._delete(paths.shim_cpp(i))
        for path in paths.orphaned_shims():
            self._delete(path)

        if plan.has_app_header:
            self._replace(paths.app_header, render_app_header(project, paths, plan, self.exporters))
        else:
            self._delete(paths.app_header)

    def _wrapper_files_for(self, exporter: ToolchainExporter) -> list[str]:
        """Generated files this exporter should add to its project, relative to its folder.

        Libraries only get the resource bundle; everything else is for apps.
        """
        plan, paths = self.plan, self.paths
        files: list[Path] = []
        is_app = not self.project.is_library

        if is_app and plan.has_app_config:
            files.append(paths.app_config)
        if is_app and plan.has_app_header:
            files.append(paths.app_header)
        if plan.has_resources:
            files.extend([paths.binary_data_cpp, paths.binary_data_h])
        for i in paths.shim_indices():
            if is_app and plan.uses_shim(i):
                files.append(paths.shim_mm(i) if exporter.uses_mm_files else paths.shim_cpp(i))
        if is_app and plan.has_plugin_characteristics:
            files.append(paths.plugin_characteristics)

        return [relative_posix(f, exporter.target_folder) for f in files]

    def _write_projects(self) -> None:
        for exporter in self.exporters:
            self.logger.exporter_start(exporter.name)

            if not self._create_folder(exporter.target_folder, "Can't create folder"):
                self.logger.exporter_finish(exporter.name, success=False)
                continue

            exporter.wrapper_folder = relative_posix(self.paths.wrapper_folder, exporter.target_folder)
            exporter.wrapper_files.extend(self._wrapper_files_for(exporter))

            try:
                exporter.create()
            except ToolchainExportError as e:
                self._error(str(e))
                self.logger.exporter_finish(exporter.name, success=False)
                continue

            self.logger.exporter_finish(exporter.name, success=True)


def save_project(project: Project, project_file: str | Path | None = None, config: SaveConfig | None = None) -> SaveResult:
    """Save ``project`` to ``project_file`` (default: its recorded file)."""
    target = project_file or project.file
    if target is None:
        raise ValueError("No project file given and the project has none recorded")
    return ProjectSaver(project, target, config).save()
