"""Shared test fixtures for Wrapgen."""

from __future__ import annotations

from pathlib import Path

import pytest

from wrapgen import ConfigFlag, ExporterDecl, LinkageMode, Project


class FakeExporter:
    """Minimal stand-in satisfying the include-resolution side of the exporter contract."""

    def __init__(self, macro: str, path: str):
        self.identifier_macro = macro
        self._path = path

    def map_include_path(self, logical_path: str, from_file: Path) -> str:
        return f'"{self._path}/{logical_path}"'


@pytest.fixture
def fake_exporter():
    return FakeExporter


@pytest.fixture
def project_dir(tmp_path):
    """Project folder with a sibling library checkout."""
    folder = tmp_path / "MyApp"
    folder.mkdir()
    (tmp_path / "juce").mkdir()
    (folder / "Source").mkdir()
    (folder / "Source" / "Main.cpp").write_text("int main() { return 0; }\n")
    return folder


@pytest.fixture
def project(project_dir):
    """GUI app using the single-template amalgamation with two exporters."""
    p = Project(
        name="MyApp",
        version="1.2.3",
        linkage=LinkageMode.AMALGAMATED_TEMPLATE,
        sources=["Source/Main.cpp"],
    )
    p.add_config_flag(ConfigFlag("JUCE_QUICKTIME", "disabled"))
    p.add_config_flag(ConfigFlag("JUCE_OPENGL", "enabled"))
    p.add_config_flag(ConfigFlag("JUCE_ASIO"))
    p.add_exporter(ExporterDecl(name="Linux Makefile", exporter_type="makefile"))
    p.add_exporter(ExporterDecl(name="Code::Blocks", exporter_type="codeblocks"))
    p.file = project_dir / "MyApp.wgproj"
    return p


@pytest.fixture
def project_file(project):
    return project.file
