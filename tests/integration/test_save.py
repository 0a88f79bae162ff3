"""Integration tests — full project saves against a real filesystem."""

from __future__ import annotations

import pytest

from wrapgen import ProjectSaver, SaveConfig, save_project
from wrapgen.core.errors import ContractViolation, SerializationError
from wrapgen.core.models import ExporterDecl, LinkageMode, Project


def _files(folder):
    return sorted(p.name for p in folder.iterdir()) if folder.exists() else []


@pytest.fixture
def wrapper(project_dir):
    return project_dir / "JuceLibraryCode"


class TestFullSave:
    def test_writes_everything(self, project, project_file, project_dir, wrapper, capsys):
        result = ProjectSaver(project, project_file).save()

        assert result.success, result.errors
        assert result.first_error is None
        assert project_file.is_file()
        assert _files(wrapper) == ["AppConfig.h", "JuceHeader.h", "JuceLibraryCode.cpp", "JuceLibraryCode.mm"]
        assert (project_dir / "Builds" / "Linux" / "Makefile").is_file()
        assert (project_dir / "Builds" / "CodeBlocks" / "MyApp.cbp").is_file()

        out = capsys.readouterr().out
        assert out.index("Writing files for: Linux Makefile") < out.index("Writing files for: Code::Blocks")
        assert project.file == project_file
        assert result.save_log["exporters"] == ["Linux Makefile", "Code::Blocks"]

    def test_exporters_get_relative_wrapper_files(self, project, project_file, project_dir):
        ProjectSaver(project, project_file).save()
        makefile = (project_dir / "Builds" / "Linux" / "Makefile").read_text()
        cbp = (project_dir / "Builds" / "CodeBlocks" / "MyApp.cbp").read_text()
        assert "../../JuceLibraryCode/JuceLibraryCode.cpp" in makefile
        assert "../../Source/Main.cpp" in makefile
        assert "JuceLibraryCode.mm" not in cbp
        assert "../../JuceLibraryCode/JuceHeader.h" in cbp

    def test_xcode_gets_mm_shims(self, project, project_file, project_dir):
        project.add_exporter(ExporterDecl(name="Xcode", exporter_type="xcode"))
        assert ProjectSaver(project, project_file).save().success
        filelist = (project_dir / "Builds" / "MacOSX" / "MyApp.xcfilelist").read_text()
        assert "JuceLibraryCode.mm" in filelist
        assert "JuceLibraryCode.cpp" not in filelist
        header = (project_dir / "JuceLibraryCode" / "JuceHeader.h").read_text()
        assert "#elif defined (XCODE_MAC)" in header

    def test_second_save_changes_nothing(self, project, project_file, wrapper):
        ProjectSaver(project, project_file).save()
        before = {p.name: p.stat().st_mtime_ns for p in wrapper.iterdir()}

        result = ProjectSaver(project, project_file).save()

        assert result.success
        assert result.save_log["written"] == []
        assert str(project_file) in result.save_log["unchanged"]
        assert {p.name: p.stat().st_mtime_ns for p in wrapper.iterdir()} == before

    def test_save_project_uses_recorded_file(self, project, project_file):
        assert save_project(project).success
        assert project_file.is_file()

    def test_save_project_without_file(self):
        with pytest.raises(ValueError, match="No project file"):
            save_project(Project(name="Loose"))


class TestStaleFiles:
    def test_linkage_change_removes_old_shims(self, project, project_file, wrapper):
        project.linkage = LinkageMode.AMALGAMATED_MULTIPLE
        project.num_amalgamated_files = 3
        assert ProjectSaver(project, project_file).save().success
        assert "JuceLibraryCode3.cpp" in _files(wrapper)
        assert "JuceLibraryCode.cpp" not in _files(wrapper)

        project.linkage = LinkageMode.AMALGAMATED_TEMPLATE
        result = ProjectSaver(project, project_file).save()
        assert result.success
        assert _files(wrapper) == ["AppConfig.h", "JuceHeader.h", "JuceLibraryCode.cpp", "JuceLibraryCode.mm"]
        assert len(result.save_log["deleted"]) == 6

    def test_lower_file_count_removes_higher_shims(self, project, project_file, wrapper):
        project.linkage = LinkageMode.AMALGAMATED_MULTIPLE
        project.num_amalgamated_files = 4
        assert ProjectSaver(project, project_file).save().success
        (wrapper / "JuceLibraryCode9.h").write_text("user header")
        (wrapper / "JuceLibraryCodeNotes.cpp").write_text("user source")

        project.num_amalgamated_files = 2
        result = ProjectSaver(project, project_file).save()

        assert result.success
        assert _files(wrapper) == [
            "AppConfig.h",
            "JuceHeader.h",
            "JuceLibraryCode1.cpp",
            "JuceLibraryCode1.mm",
            "JuceLibraryCode2.cpp",
            "JuceLibraryCode2.mm",
            "JuceLibraryCode9.h",
            "JuceLibraryCodeNotes.cpp",
        ]

    def test_not_linked_keeps_only_header(self, project, project_file, wrapper):
        ProjectSaver(project, project_file).save()
        project.linkage = LinkageMode.NOT_LINKED
        assert ProjectSaver(project, project_file).save().success
        assert _files(wrapper) == ["JuceHeader.h"]

    def test_resources_bundle_and_cleanup(self, project, project_file, project_dir, wrapper):
        (project_dir / "Resources").mkdir()
        (project_dir / "Resources" / "logo.png").write_bytes(b"\x89PNG")
        project.resources = ["Resources/logo.png"]
        assert ProjectSaver(project, project_file).save().success
        assert {"BinaryData.cpp", "BinaryData.h"} <= set(_files(wrapper))
        assert '#include "BinaryData.h"' in (wrapper / "JuceHeader.h").read_text()

        project.resources = []
        assert ProjectSaver(project, project_file).save().success
        assert "BinaryData.cpp" not in _files(wrapper)

    def test_plugin_characteristics_follow_project_type(self, project, project_file, wrapper):
        project.project_type = "audioplug"
        assert ProjectSaver(project, project_file).save().success
        assert "JucePluginCharacteristics.h" in _files(wrapper)

        project.project_type = "guiapp"
        assert ProjectSaver(project, project_file).save().success
        assert "JucePluginCharacteristics.h" not in _files(wrapper)

    def test_library_writes_no_wrapper_headers(self, project, project_file, wrapper, project_dir):
        project.project_type = "library"
        assert ProjectSaver(project, project_file).save().success
        assert not wrapper.exists()
        assert (project_dir / "Builds" / "Linux" / "Makefile").is_file()


class TestFailures:
    def test_blocked_exporter_folder_does_not_stop_others(self, project, project_file, project_dir):
        project.file = None
        (project_dir / "Builds").mkdir()
        (project_dir / "Builds" / "Linux").write_text("in the way")

        result = ProjectSaver(project, project_file).save()

        assert len(result.errors) == 1
        assert result.first_error.startswith("Can't create folder")
        assert (project_dir / "Builds" / "CodeBlocks" / "MyApp.cbp").is_file()
        assert project.file is None

    def test_exporter_write_failure_is_logged(self, project, project_file, project_dir):
        (project_dir / "Builds" / "Linux" / "Makefile").mkdir(parents=True)
        result = ProjectSaver(project, project_file).save()
        assert len(result.errors) == 1
        assert "Makefile" in result.first_error
        assert (project_dir / "Builds" / "CodeBlocks" / "MyApp.cbp").is_file()

    def test_render_failure_skips_export(self, project, project_file, project_dir, capsys):
        project.file = None
        (project_dir / "JuceLibraryCode").write_text("not a folder")

        result = ProjectSaver(project, project_file).save()

        assert not result.success
        assert any("Couldn't create folder" in e for e in result.errors)
        assert "Writing files for" not in capsys.readouterr().out
        assert not (project_dir / "Builds").exists()
        assert project.file is None

    def test_unknown_exporter_type_skips_export(self, project, project_file, project_dir):
        project.add_exporter(ExporterDecl(name="VS", exporter_type="vs2008"))
        result = ProjectSaver(project, project_file).save()
        assert any("Unknown exporter type" in e for e in result.errors)
        assert (project_dir / "JuceLibraryCode" / "JuceHeader.h").is_file()
        assert not (project_dir / "Builds").exists()

    def test_unwritable_project_file_aborts(self, project, tmp_path):
        target = tmp_path / "missing" / "MyApp.wgproj"
        result = ProjectSaver(project, target).save()
        assert result.errors == [f"Couldn't write to the target file: {target}"]
        assert not (tmp_path / "missing").exists()
        assert result.plan is None

    def test_contract_violation_propagates_and_restores_file(self, project, project_file):
        project.file = None
        project.linkage = LinkageMode.AMALGAMATED_MULTIPLE
        project.num_amalgamated_files = 0
        with pytest.raises(ContractViolation):
            ProjectSaver(project, project_file).save()
        assert project.file is None


class TestRoundtripVerification:
    def test_enabled_and_passing(self, project, project_file):
        result = ProjectSaver(project, project_file, SaveConfig(verify_roundtrip=True)).save()
        assert result.success

    def test_mismatch_raises_before_writing(self, project, project_file, monkeypatch):
        project.file = None
        monkeypatch.setattr("wrapgen.build.project.project_from_dict", lambda data: Project(name="Other"))
        with pytest.raises(SerializationError):
            ProjectSaver(project, project_file, SaveConfig(verify_roundtrip=True)).save()
        assert not project_file.exists()
        assert project.file is None

    def test_env_enables_check_through_library_api(self, project, project_file, monkeypatch):
        monkeypatch.setenv("WRAPGEN_VERIFY_ROUNDTRIP", "1")
        monkeypatch.setattr("wrapgen.build.project.project_from_dict", lambda data: Project(name="Other"))
        with pytest.raises(SerializationError):
            save_project(project)
        assert not project_file.exists()
