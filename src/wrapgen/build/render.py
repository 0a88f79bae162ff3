"""Renderers for the generated wrapper files.

Every renderer returns the complete file text. Output is deterministic for a
given project and exporter list so that the diff-writer can skip unchanged
files.
"""

from __future__ import annotations

from collections.abc import Sequence

from wrapgen.build.encoding import format_version_code, header_guard, max_channels, version_code
from wrapgen.build.includes import include_statement, render_include, resolve_include
from wrapgen.build.plan import ArtifactPaths, ArtifactPlan
from wrapgen.core.models import FLAG_DISABLED, FLAG_ENABLED, LinkageMode, Project
from wrapgen.exporters.base import ToolchainExporter

AMALGAMATED_CPP = "juce_amalgamated.cpp"
AMALGAMATED_TEMPLATE_CPP = "amalgamation/juce_amalgamated_template.cpp"
AMALGAMATED_H = "juce_amalgamated.h"
LIBRARY_H = "juce.h"

REEXPORT_NOTE = "  // (If you change this value, you'll also need to re-export the projects using wrapgen)"

_SIMPLE_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t", '"': '\\"', "\\": "\\\\"}
_HEX_DIGITS = set("0123456789abcdefABCDEF")


def escape_c_string(text: str) -> str:
    """Escape text for use inside a C string literal (UTF-8 bytes as \\x escapes)."""
    out: list[str] = []
    last_was_hex = False
    for ch in text:
        if ch in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[ch])
            last_was_hex = False
        elif " " <= ch <= "~":
            if last_was_hex and ch in _HEX_DIGITS:
                # A hex escape would swallow this digit; split the literal.
                out.append('""')
            out.append(ch)
            last_was_hex = False
        else:
            out.extend(f"\\x{b:02x}" for b in ch.encode("utf-8"))
            last_was_hex = True
    return "".join(out)


def quoted(text: str) -> str:
    return f'"{escape_c_string(text)}"'


def _banner(*body: str) -> list[str]:
    lines = [
        "/*",
        "",
        "    IMPORTANT! This file is auto-generated by wrapgen each time you save your",
        "    project - if you alter its contents, your changes may be overwritten!",
        "",
    ]
    lines.extend(f"    {line}" if line else "" for line in body)
    lines.extend(["", "*/", ""])
    return lines


def _text(lines: list[str]) -> str:
    return "\n".join(lines) + "\n"


def render_app_config(project: Project) -> str:
    """One #define per config flag, in declaration order."""
    lines = _banner(
        "If you want to change any of these values, use wrapgen to do so, rather than",
        "editing this file directly!",
        "",
        "Any commented-out settings will fall back to using the default values that",
        "they are given in juce_Config.h",
    )

    not_active = project.linkage in (LinkageMode.EXTERNALLY_LINKED, LinkageMode.NOT_LINKED)
    if not_active:
        lines.extend([
            "/* NOTE: These configs aren't available when you're linking to the juce library statically!",
            "         If you need to set a configuration that differs from the default, you'll need",
            "         to include the amalgamated Juce files.",
            "",
        ])

    for flag in project.config_flags:
        if flag.value == FLAG_ENABLED:
            lines.append(f"#define    {flag.symbol} 1")
        elif flag.value == FLAG_DISABLED:
            lines.append(f"#define    {flag.symbol} 0")
        else:
            lines.append(f"//#define  {flag.symbol}")

    if not_active:
        lines.extend(["", "*/"])
    return _text(lines)


def render_source_shim(
    project: Project,
    paths: ArtifactPaths,
    index: int,
    exporters: Sequence[ToolchainExporter],
) -> str:
    """Shim that compiles amalgamated unit ``index`` with the app config applied."""
    lines = _banner(
        "This file pulls in all the Juce source code, and builds it using the settings",
        f"defined in {paths.app_config.name}.",
        "",
        "If you want to change the method by which Juce is linked into your app, use",
        "wrapgen to change it, rather than trying to edit this file directly.",
    )
    lines.append(include_statement(paths.app_config, paths.app_config))

    if index == 0:
        logical = AMALGAMATED_CPP if project.is_fully_amalgamated else AMALGAMATED_TEMPLATE_CPP
    else:
        logical = f"amalgamation/juce_amalgamated{index}.cpp"

    text = _text(lines)
    return text + render_include(resolve_include(logical, exporters, paths.shim_cpp(index)))


def render_app_header(
    project: Project,
    paths: ArtifactPaths,
    plan: ArtifactPlan,
    exporters: Sequence[ToolchainExporter],
) -> str:
    """The header user code includes to get the library with this project's config."""
    lines = _banner(
        "This is the header file that your files should include in order to get all the",
        "Juce library headers. You should NOT include juce.h or juce_amalgamated.h directly in",
        "your own source files, because that wouldn't pick up the correct Juce configuration",
        "options for your app.",
    )

    guard = header_guard("APPHEADERFILE", str(paths.app_header.resolve()))
    lines.extend([f"#ifndef {guard}", f"#define {guard}", ""])

    if plan.has_app_config:
        lines.append(include_statement(paths.app_config, paths.app_header))

    text = _text(lines)
    if project.linkage != LinkageMode.NOT_LINKED:
        library_header = LIBRARY_H if project.linkage == LinkageMode.EXTERNALLY_LINKED else AMALGAMATED_H
        text += render_include(resolve_include(library_header, exporters, paths.app_header))

    lines = []
    if plan.has_resources:
        lines.append(include_statement(paths.binary_data_h, paths.app_header))

    lines.extend([
        "",
        "namespace ProjectInfo",
        "{",
        f"    const char* const  projectName    = {quoted(project.name)};",
        f"    const char* const  versionString  = {quoted(project.version)};",
        f"    const int          versionNumber  = {format_version_code(version_code(project.version))};",
        "}",
        "",
        f"#endif   // {guard}",
    ])
    return text + _text(lines)


def _flag(value: bool) -> int:
    return 1 if value else 0


def _four_char_code(code: str) -> str:
    chars = code.strip()[:4].replace("\\", "\\\\").replace("'", "\\'")
    return f"'{chars}'"


def _seconds(value: float) -> str:
    """Shortest form of a duration, as a C++ stream prints a double (0, 1.5)."""
    return f"{float(value):g}"


def render_plugin_characteristics(project: Project, paths: ArtifactPaths) -> str:
    """Fixed, ordered JucePlugin_* macro list describing the plugin."""
    plugin = project.plugin
    guard = header_guard("PLUGINCHARACTERISTICS", str(paths.plugin_characteristics.resolve()))
    version = format_version_code(version_code(project.version))
    channels = plugin.channel_configs

    lines = _banner(
        "This header file contains configuration options for the plug-in. If you need to change any of",
        "these, it'd be wise to do so using wrapgen, rather than editing this file directly...",
    )

    defines = [
        ("JucePlugin_Build_VST", f"{_flag(plugin.build_vst)}{REEXPORT_NOTE}"),
        ("JucePlugin_Build_AU", f"{_flag(plugin.build_au)}{REEXPORT_NOTE}"),
        ("JucePlugin_Build_RTAS", f"{_flag(plugin.build_rtas)}{REEXPORT_NOTE}"),
        None,
        ("JucePlugin_Name", quoted(plugin.name)),
        ("JucePlugin_Desc", quoted(plugin.description)),
        ("JucePlugin_Manufacturer", quoted(plugin.manufacturer)),
        ("JucePlugin_ManufacturerCode", _four_char_code(plugin.manufacturer_code)),
        ("JucePlugin_PluginCode", _four_char_code(plugin.plugin_code)),
        ("JucePlugin_MaxNumInputChannels", max_channels(channels, True)),
        ("JucePlugin_MaxNumOutputChannels", max_channels(channels, False)),
        ("JucePlugin_PreferredChannelConfigurations", channels),
        ("JucePlugin_IsSynth", _flag(plugin.is_synth)),
        ("JucePlugin_WantsMidiInput", _flag(plugin.wants_midi_input)),
        ("JucePlugin_ProducesMidiOutput", _flag(plugin.produces_midi_output)),
        ("JucePlugin_SilenceInProducesSilenceOut", _flag(plugin.silence_in_produces_silence_out)),
        ("JucePlugin_TailLengthSeconds", _seconds(plugin.tail_length_seconds)),
        ("JucePlugin_EditorRequiresKeyboardFocus", _flag(plugin.editor_requires_keyboard_focus)),
        ("JucePlugin_VersionCode", version),
        ("JucePlugin_VersionString", quoted(project.version)),
        ("JucePlugin_VSTUniqueID", "JucePlugin_PluginCode"),
        ("JucePlugin_VSTCategory", "kPlugCategSynth" if plugin.is_synth else "kPlugCategEffect"),
        ("JucePlugin_AUMainType", "kAudioUnitType_MusicDevice" if plugin.is_synth else "kAudioUnitType_Effect"),
        ("JucePlugin_AUSubType", "JucePlugin_PluginCode"),
        ("JucePlugin_AUExportPrefix", plugin.au_export_prefix),
        ("JucePlugin_AUExportPrefixQuoted", quoted(plugin.au_export_prefix)),
        ("JucePlugin_AUManufacturerCode", "JucePlugin_ManufacturerCode"),
        ("JucePlugin_CFBundleIdentifier", project.bundle_identifier),
        ("JucePlugin_AUCocoaViewClassName", plugin.au_cocoa_view_class_name),
        ("JucePlugin_RTASCategory", "ePlugInCategory_SWGenerators" if plugin.is_synth else "ePlugInCategory_None"),
        ("JucePlugin_RTASManufacturerCode", "JucePlugin_ManufacturerCode"),
        ("JucePlugin_RTASProductId", "JucePlugin_PluginCode"),
        ("JUCE_USE_VSTSDK_2_4", 1),
    ]

    lines.extend([f"#ifndef {guard}", f"#define {guard}", ""])
    for entry in defines:
        if entry is None:
            lines.append("")
            continue
        name, value = entry
        lines.append(f"#define {name:<31} {value}".rstrip())
    lines.extend(["", f"#endif   // {guard}"])
    return _text(lines)

