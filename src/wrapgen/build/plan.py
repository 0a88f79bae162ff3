"""Artifact planning — decide which wrapper files a save must produce."""

from __future__ import annotations

import glob
import json
from dataclasses import asdict, dataclass, field
from pathlib import Path

from wrapgen.core.errors import ContractViolation
from wrapgen.core.models import LinkageMode, Project

BINARY_DATA_NAME = "BinaryData"


@dataclass(frozen=True)
class ArtifactPlan:
    """Which optional wrapper files exist for one save."""

    has_app_header: bool
    has_app_config: bool
    num_source_shims: int
    has_resources: bool
    has_plugin_characteristics: bool = False

    def uses_shim(self, index: int) -> bool:
        """Shim 0 serves a single-unit build; shims 1..n serve a multi-unit one."""
        if self.num_source_shims <= 0:
            return False
        if index == 0:
            return self.num_source_shims == 1
        return self.num_source_shims > 1 and index <= self.num_source_shims


def plan_artifacts(
    linkage: LinkageMode,
    is_library: bool,
    resource_count: int,
    num_amalgamated_files: int = 1,
    is_audio_plugin: bool = False,
) -> ArtifactPlan:
    """Compute the ArtifactPlan for a linkage mode. Pure; touches no files.

    Raises:
        ContractViolation: for an unrecognised linkage mode, or a multi-file
            amalgamation without a positive file count.
    """
    if linkage == LinkageMode.NOT_LINKED:
        has_header, has_config, shims = not is_library, False, 0
    elif linkage in (LinkageMode.AMALGAMATED_SINGLE, LinkageMode.AMALGAMATED_TEMPLATE):
        has_header, has_config, shims = True, True, 1
    elif linkage == LinkageMode.AMALGAMATED_MULTIPLE:
        if num_amalgamated_files <= 0:
            raise ContractViolation(
                f"Multi-file amalgamation needs a positive file count, got {num_amalgamated_files}"
            )
        has_header, has_config, shims = True, True, num_amalgamated_files
    elif linkage == LinkageMode.EXTERNALLY_LINKED:
        has_header, has_config, shims = True, True, 0
    else:
        raise ContractViolation(f"Unknown linkage mode: {linkage!r}")

    return ArtifactPlan(
        has_app_header=has_header,
        has_app_config=has_config,
        num_source_shims=shims,
        has_resources=resource_count > 0,
        has_plugin_characteristics=is_audio_plugin,
    )


def plan_for_project(project: Project) -> ArtifactPlan:
    return plan_artifacts(
        project.linkage,
        project.is_library,
        len(project.resources),
        project.num_amalgamated_files,
        project.is_audio_plugin,
    )


@dataclass
class ArtifactPaths:
    """Filesystem locations of every wrapper file a project can generate."""

    wrapper_folder: Path
    app_config: Path
    app_header: Path
    plugin_characteristics: Path
    binary_data_cpp: Path
    source_root: str
    num_shim_slots: int = 1

    @classmethod
    def for_project(cls, project: Project) -> ArtifactPaths:
        folder = project.get_wrapper_folder()
        return cls(
            wrapper_folder=folder,
            app_config=folder / project.app_config_filename,
            app_header=project.get_app_include_file(),
            plugin_characteristics=folder / project.plugin_characteristics_filename,
            binary_data_cpp=folder / f"{BINARY_DATA_NAME}.cpp",
            source_root=project.source_filename_root,
            num_shim_slots=max(project.num_amalgamated_files, 1),
        )

    @property
    def binary_data_h(self) -> Path:
        return self.binary_data_cpp.with_suffix(".h")

    def shim_cpp(self, index: int) -> Path:
        suffix = str(index) if index != 0 else ""
        return self.wrapper_folder / f"{self.source_root}{suffix}.cpp"

    def shim_mm(self, index: int) -> Path:
        return self.shim_cpp(index).with_suffix(".mm")

    def shim_indices(self) -> range:
        """Every shim slot that may hold a file, used or stale."""
        return range(0, self.num_shim_slots + 1)

    def orphaned_shims(self) -> list[Path]:
        """Numbered shims on disk above the current slots, left from a larger file count."""
        if not self.wrapper_folder.is_dir():
            return []
        found = []
        for path in sorted(self.wrapper_folder.glob(f"{glob.escape(self.source_root)}*")):
            index = path.stem[len(self.source_root):]
            if path.suffix in (".cpp", ".mm") and index.isdigit() and int(index) > self.num_shim_slots:
                found.append(path)
        return found


@dataclass
class PlannedFile:
    """One row of a save plan, for display."""

    path: str
    kind: str
    action: str  # "write" or "delete"


@dataclass
class SavePlan:
    """Dry-run view of a save: the plan plus every file it touches."""

    project_name: str
    plan: ArtifactPlan
    files: list[PlannedFile] = field(default_factory=list)
    exporters: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def describe_save(project: Project) -> SavePlan:
    """List what a save of this project would write and delete."""
    plan = plan_for_project(project)
    paths = ArtifactPaths.for_project(project)
    result = SavePlan(
        project_name=project.name,
        plan=plan,
        exporters=[e.name for e in project.exporters],
    )

    def add(path: Path, kind: str, wanted: bool) -> None:
        result.files.append(PlannedFile(str(path), kind, "write" if wanted else "delete"))

    add(paths.binary_data_cpp, "resources", plan.has_resources)
    add(paths.binary_data_h, "resources", plan.has_resources)
    if project.is_library:
        return result

    add(paths.app_config, "app_config", plan.has_app_config)
    add(paths.plugin_characteristics, "plugin_characteristics", plan.has_plugin_characteristics)
    for i in paths.shim_indices():
        add(paths.shim_cpp(i), "source_shim", plan.uses_shim(i))
        add(paths.shim_mm(i), "source_shim", plan.uses_shim(i))
    for path in paths.orphaned_shims():
        add(path, "source_shim", False)
    add(paths.app_header, "app_header", plan.has_app_header)
    return result
