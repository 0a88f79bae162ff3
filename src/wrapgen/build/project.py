"""Read and write the JSON project file into Project objects."""

from __future__ import annotations

import json
from dataclasses import asdict, fields
from pathlib import Path

from wrapgen.core.errors import SerializationError
from wrapgen.core.models import (
    FLAG_DEFAULT,
    FLAG_VALUES,
    PROJECT_TYPES,
    ConfigFlag,
    ExporterDecl,
    LinkageMode,
    PluginSettings,
    Project,
)
from wrapgen.exporters.base import is_known_exporter

PROJECT_FILE_SUFFIX = ".wgproj"
FORMAT_VERSION = 1


def project_to_dict(project: Project) -> dict:
    """Plain-dict form of a project. The recorded file path is not included."""
    return {
        "format_version": FORMAT_VERSION,
        "name": project.name,
        "version": project.version,
        "project_type": project.project_type,
        "linkage": getattr(project.linkage, "value", project.linkage),
        "num_amalgamated_files": project.num_amalgamated_files,
        "wrapper_folder": project.wrapper_folder,
        "app_config_filename": project.app_config_filename,
        "app_header_filename": project.app_header_filename,
        "plugin_characteristics_filename": project.plugin_characteristics_filename,
        "source_filename_root": project.source_filename_root,
        "bundle_identifier": project.bundle_identifier,
        "config_flags": [asdict(f) for f in project.config_flags],
        "plugin": asdict(project.plugin),
        "resources": list(project.resources),
        "sources": list(project.sources),
        "exporters": [
            {
                "name": e.name,
                "type": e.exporter_type,
                "target_folder": e.target_folder,
                "juce_folder": e.juce_folder,
                "settings": dict(e.settings),
            }
            for e in project.exporters
        ],
    }


def _config_flag(entry) -> ConfigFlag:
    if not isinstance(entry, dict) or not isinstance(entry.get("symbol"), str):
        raise ValueError(f"Config flag entry must be an object with a 'symbol', got {entry!r}")
    unknown = set(entry) - {"symbol", "value"}
    if unknown:
        raise ValueError(f"Config flag {entry['symbol']} has unknown keys: {sorted(unknown)}")
    return ConfigFlag(symbol=entry["symbol"], value=entry.get("value", FLAG_DEFAULT))


def _exporter_decl(entry) -> ExporterDecl:
    if not isinstance(entry, dict):
        raise ValueError(f"Exporter entry must be an object, got {entry!r}")
    for key in ("name", "type"):
        if not isinstance(entry.get(key), str):
            raise ValueError(f"Exporter entry is missing '{key}': {entry!r}")
    settings = entry.get("settings", {})
    if not isinstance(settings, dict):
        raise ValueError(f"Exporter '{entry['name']}' settings must be an object")
    return ExporterDecl(
        name=entry["name"],
        exporter_type=entry["type"],
        target_folder=entry.get("target_folder", ""),
        juce_folder=entry.get("juce_folder", "../../juce"),
        settings=dict(settings),
    )


def _list_field(data: dict, key: str) -> list:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise ValueError(f"Project field '{key}' must be a list, got {type(value).__name__}")
    return value


def project_from_dict(data: dict) -> Project:
    """Build a Project from its dict form; unknown plugin keys are ignored.

    Raises:
        ValueError: for any malformed field, naming it.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Project data must be an object, got {type(data).__name__}")
    if "name" not in data:
        raise ValueError("Project data is missing 'name'")

    plugin_data = data.get("plugin", {})
    if not isinstance(plugin_data, dict):
        raise ValueError("Project field 'plugin' must be an object")
    plugin_keys = {f.name for f in fields(PluginSettings)}
    plugin = PluginSettings(**{k: v for k, v in plugin_data.items() if k in plugin_keys})

    try:
        linkage = LinkageMode(data.get("linkage", LinkageMode.AMALGAMATED_TEMPLATE.value))
    except ValueError as e:
        valid = [m.value for m in LinkageMode]
        raise ValueError(f"Unknown linkage mode: {data.get('linkage')!r}. Valid: {valid}") from e

    defaults = Project(name="")
    return Project(
        name=data["name"],
        version=data.get("version", defaults.version),
        project_type=data.get("project_type", defaults.project_type),
        linkage=linkage,
        num_amalgamated_files=data.get("num_amalgamated_files", defaults.num_amalgamated_files),
        wrapper_folder=data.get("wrapper_folder", defaults.wrapper_folder),
        app_config_filename=data.get("app_config_filename", defaults.app_config_filename),
        app_header_filename=data.get("app_header_filename", defaults.app_header_filename),
        plugin_characteristics_filename=data.get(
            "plugin_characteristics_filename", defaults.plugin_characteristics_filename
        ),
        source_filename_root=data.get("source_filename_root", defaults.source_filename_root),
        bundle_identifier=data.get("bundle_identifier", ""),
        config_flags=[_config_flag(f) for f in _list_field(data, "config_flags")],
        plugin=plugin,
        resources=list(_list_field(data, "resources")),
        sources=list(_list_field(data, "sources")),
        exporters=[_exporter_decl(e) for e in _list_field(data, "exporters")],
    )


def serialize_project(project: Project) -> str:
    """Canonical JSON text; unchanged models serialize byte-identically."""
    return json.dumps(project_to_dict(project), indent=2, sort_keys=True) + "\n"


def verify_roundtrip(project: Project, text: str) -> None:
    """Re-parse serialized text and compare it with the in-memory model.

    Raises:
        SerializationError: if the reloaded model differs, which means the
            writer and reader disagree about the format.
    """
    try:
        reloaded = project_from_dict(json.loads(text))
    except (ValueError, KeyError, TypeError) as e:
        raise SerializationError(f"Saved project could not be re-read: {e}") from e

    expected = project_to_dict(project)
    actual = project_to_dict(reloaded)
    if expected != actual:
        changed = sorted(k for k in expected.keys() | actual.keys() if expected.get(k) != actual.get(k))
        raise SerializationError(f"Project model did not survive a save/load round trip: {', '.join(changed)}")


def load_project(path: str | Path) -> Project:
    """Read and validate a project file; the result records ``path`` as its file."""
    filepath = Path(path).resolve()
    if not filepath.exists():
        raise FileNotFoundError(f"Project file not found: {path}")

    try:
        data = json.loads(filepath.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Project file {path} is not valid JSON: {e}") from e

    project = project_from_dict(data)
    project.file = filepath
    validate_project(project)
    return project


def find_project_file(folder: Path) -> Path | None:
    """The single project file in a folder, or None when there are none or several."""
    candidates = sorted(folder.glob(f"*{PROJECT_FILE_SUFFIX}"))
    return candidates[0] if len(candidates) == 1 else None


def validate_project(project: Project) -> None:
    """Validate project configuration."""
    for key in ("name", "version", "project_type", "wrapper_folder", "source_filename_root", "bundle_identifier"):
        if not isinstance(getattr(project, key), str):
            raise ValueError(f"Project field '{key}' must be a string")

    if not project.name.strip():
        raise ValueError("Project must have a name")

    if project.project_type not in PROJECT_TYPES:
        raise ValueError(f"Unknown project type: {project.project_type!r}. Valid: {list(PROJECT_TYPES)}")

    for key in ("sources", "resources"):
        if not all(isinstance(entry, str) for entry in getattr(project, key)):
            raise ValueError(f"Project field '{key}' must list file paths as strings")

    count = project.num_amalgamated_files
    if not isinstance(count, int) or isinstance(count, bool):
        raise ValueError(f"num_amalgamated_files must be an integer, got {count!r}")
    if count <= 0:
        raise ValueError(f"num_amalgamated_files must be positive, got {project.num_amalgamated_files}")

    for flag in project.config_flags:
        if flag.value not in FLAG_VALUES:
            raise ValueError(f"Config flag {flag.symbol} has invalid value {flag.value!r}. Valid: {list(FLAG_VALUES)}")

    names: set[str] = set()
    for exporter in project.exporters:
        if not is_known_exporter(exporter.exporter_type):
            raise ValueError(f"Exporter '{exporter.name}' has unknown type '{exporter.exporter_type}'")
        if exporter.name in names:
            raise ValueError(f"Duplicate exporter name: '{exporter.name}'")
        names.add(exporter.name)
