"""Unit tests for the exporter registry and built-in exporters."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from wrapgen.core.errors import ToolchainExportError
from wrapgen.core.models import ExporterDecl
from wrapgen.exporters import ToolchainExporter, create_exporter, get_exporter_types, register_exporter
from wrapgen.exporters import base


def _exporter(project, exporter_type, **kwargs):
    return create_exporter(project, ExporterDecl(name=exporter_type, exporter_type=exporter_type, **kwargs))


class TestRegistry:
    def test_builtin_types(self):
        assert get_exporter_types() == ["codeblocks", "makefile", "xcode"]

    def test_unknown_type(self, project):
        with pytest.raises(ValueError, match="Unknown exporter type"):
            _exporter(project, "vs2008")

    def test_register_custom(self, project, monkeypatch):
        monkeypatch.setattr(base, "_EXPORTERS", dict(base._EXPORTERS))

        @register_exporter("null")
        class NullExporter(ToolchainExporter):
            identifier_macro = "NULL_BUILD"

            def create(self):
                pass

        assert isinstance(_exporter(project, "null"), NullExporter)
        assert "null" in get_exporter_types()


class TestPaths:
    def test_target_folder_default_and_override(self, project):
        assert _exporter(project, "makefile").target_folder == project.folder / "Builds/Linux"
        custom = _exporter(project, "makefile", target_folder="out/make")
        assert custom.target_folder == project.folder / "out/make"

    def test_map_include_path_relative(self, project):
        exporter = _exporter(project, "makefile", juce_folder="../../../juce")
        from_file = project.folder / "JuceLibraryCode" / "JuceHeader.h"
        assert exporter.map_include_path("juce.h", from_file) == '"../../juce/juce.h"'

    def test_map_include_path_system(self, project):
        exporter = _exporter(project, "makefile", juce_folder="<juce>")
        assert exporter.map_include_path("juce.h", Path("/anywhere/x.h")) == "<juce/juce.h>"
        assert exporter.include_dirs() == []

    def test_rebase(self, project):
        assert _exporter(project, "makefile").rebase("Source/Main.cpp") == "../../Source/Main.cpp"

    def test_wrapper_file_split(self, project):
        exporter = _exporter(project, "makefile")
        exporter.wrapper_files = ["../../W/AppConfig.h", "../../W/Code.cpp", "../../W/Code.mm"]
        assert exporter.wrapper_headers() == ["../../W/AppConfig.h"]
        assert exporter.wrapper_sources() == ["../../W/Code.cpp", "../../W/Code.mm"]


class TestMakefileExporter:
    def test_render(self, project):
        exporter = _exporter(project, "makefile", settings={"cxxflags": "-O3"})
        exporter.wrapper_folder = "../../JuceLibraryCode"
        exporter.wrapper_files = ["../../JuceLibraryCode/JuceLibraryCode.cpp", "../../JuceLibraryCode/AppConfig.h"]
        text = exporter.render()
        assert "TARGET := MyApp" in text
        assert "-DLINUX_MAKE=1 -I../../JuceLibraryCode -I../../juce" in text
        assert "CXXFLAGS += -O3" in text
        assert "  ../../Source/Main.cpp \\" in text
        assert "  ../../JuceLibraryCode/JuceLibraryCode.cpp \\" in text
        assert "AppConfig.h" not in text

    def test_create_writes_makefile(self, project):
        exporter = _exporter(project, "makefile")
        exporter.target_folder.mkdir(parents=True)
        exporter.create()
        assert (exporter.target_folder / "Makefile").is_file()

    def test_missing_folder_raises(self, project):
        with pytest.raises(ToolchainExportError, match="Can't write to file"):
            _exporter(project, "makefile").create()


class TestCodeBlocksExporter:
    def test_units(self, project):
        exporter = _exporter(project, "codeblocks")
        exporter.wrapper_files = ["../../JuceLibraryCode/JuceLibraryCode.cpp", "../../JuceLibraryCode/JuceHeader.h"]
        root = ET.fromstring(exporter.render().split("\n", 1)[1])
        units = root.findall("./Project/Unit")
        assert [u.get("filename") for u in units] == [
            "../../Source/Main.cpp",
            "../../JuceLibraryCode/JuceLibraryCode.cpp",
            "../../JuceLibraryCode/JuceHeader.h",
        ]
        assert units[2].find("Option").get("compile") == "0"
        defines = [a.get("option") for a in root.findall("./Project/Compiler/Add") if a.get("option")]
        assert defines == ["-DCODEBLOCKS=1"]

    def test_output_is_deterministic(self, project):
        exporter = _exporter(project, "codeblocks")
        assert exporter.render() == exporter.render()


class TestXcodeExporter:
    def test_uses_mm_files(self, project):
        assert _exporter(project, "xcode").uses_mm_files

    def test_xcconfig(self, project):
        project.bundle_identifier = "com.acme.myapp"
        exporter = _exporter(project, "xcode", settings={"sdk": "macosx"})
        exporter.wrapper_folder = "../../JuceLibraryCode"
        text = exporter.render_xcconfig()
        assert "GCC_PREPROCESSOR_DEFINITIONS = $(inherited) XCODE_MAC=1" in text
        assert '"$(SRCROOT)/../../JuceLibraryCode"' in text
        assert "PRODUCT_BUNDLE_IDENTIFIER = com.acme.myapp" in text
        assert "SDKROOT = macosx" in text

    def test_filelist(self, project):
        exporter = _exporter(project, "xcode")
        exporter.wrapper_files = ["../../JuceLibraryCode/JuceLibraryCode.mm"]
        assert exporter.render_filelist() == (
            "$(SRCROOT)/../../Source/Main.cpp\n"
            "$(SRCROOT)/../../JuceLibraryCode/JuceLibraryCode.mm\n"
        )
