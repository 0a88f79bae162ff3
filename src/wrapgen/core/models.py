"""Core data models for Wrapgen."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class LinkageMode(str, Enum):
    """How the project pulls in the library's code."""

    NOT_LINKED = "none"
    AMALGAMATED_SINGLE = "amalg_big"
    AMALGAMATED_TEMPLATE = "amalg_template"
    AMALGAMATED_MULTIPLE = "amalg_multi"
    EXTERNALLY_LINKED = "static"


PROJECT_TYPES = ("guiapp", "consoleapp", "library", "audioplug")

FLAG_ENABLED = "enabled"
FLAG_DISABLED = "disabled"
FLAG_DEFAULT = "default"
FLAG_VALUES = (FLAG_ENABLED, FLAG_DISABLED, FLAG_DEFAULT)


@dataclass
class ConfigFlag:
    """A library configuration switch written to the app-config header."""

    symbol: str
    value: str = FLAG_DEFAULT  # "enabled", "disabled", "default"


@dataclass
class PluginSettings:
    """Audio plugin identity and capabilities."""

    name: str = ""
    description: str = ""
    manufacturer: str = ""
    manufacturer_code: str = "Manu"
    plugin_code: str = "Plug"
    channel_configs: str = "{1, 1}, {2, 2}"
    is_synth: bool = False
    wants_midi_input: bool = False
    produces_midi_output: bool = False
    silence_in_produces_silence_out: bool = False
    tail_length_seconds: float = 0.0
    editor_requires_keyboard_focus: bool = False
    build_vst: bool = True
    build_au: bool = True
    build_rtas: bool = False
    au_export_prefix: str = ""
    au_cocoa_view_class_name: str = ""


@dataclass
class ExporterDecl:
    """Declaration of a toolchain exporter in the project file."""

    name: str
    exporter_type: str  # registered exporter type, e.g. "makefile"
    target_folder: str = ""  # relative to the project folder
    juce_folder: str = "../../juce"  # relative to target_folder, or "<...>"
    settings: dict = field(default_factory=dict)


@dataclass
class Project:
    """The declarative project model a save is driven from."""

    name: str
    version: str = "1.0.0"
    project_type: str = "guiapp"
    linkage: LinkageMode = LinkageMode.AMALGAMATED_TEMPLATE
    num_amalgamated_files: int = 4
    wrapper_folder: str = "JuceLibraryCode"
    app_config_filename: str = "AppConfig.h"
    app_header_filename: str = "JuceHeader.h"
    plugin_characteristics_filename: str = "JucePluginCharacteristics.h"
    source_filename_root: str = "JuceLibraryCode"
    bundle_identifier: str = ""
    config_flags: list[ConfigFlag] = field(default_factory=list)
    plugin: PluginSettings = field(default_factory=PluginSettings)
    resources: list[str] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)
    exporters: list[ExporterDecl] = field(default_factory=list)
    file: Path | None = None  # recorded project file; not persisted

    @property
    def folder(self) -> Path:
        if self.file is None:
            return Path.cwd()
        return Path(self.file).parent

    @property
    def is_library(self) -> bool:
        return self.project_type == "library"

    @property
    def is_audio_plugin(self) -> bool:
        return self.project_type == "audioplug"

    @property
    def is_fully_amalgamated(self) -> bool:
        return self.linkage == LinkageMode.AMALGAMATED_SINGLE

    def get_wrapper_folder(self) -> Path:
        return self.folder / self.wrapper_folder

    def get_app_include_file(self) -> Path:
        return self.get_wrapper_folder() / self.app_header_filename

    def add_exporter(self, exporter: ExporterDecl) -> None:
        self.exporters.append(exporter)

    def add_config_flag(self, flag: ConfigFlag) -> None:
        self.config_flags.append(flag)
