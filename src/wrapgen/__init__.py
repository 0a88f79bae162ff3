"""Wrapgen - generate library wrapper files and toolchain projects from one project file.

Usage:
    from wrapgen import ExporterDecl, LinkageMode, Project, save_project

    project = Project("Synth", version="1.2.0", linkage=LinkageMode.AMALGAMATED_TEMPLATE)
    project.add_exporter(ExporterDecl(name="Linux Makefile", exporter_type="makefile"))
    result = save_project(project, "Synth/Synth.wgproj")
    if not result.success:
        print(result.first_error)
"""

from wrapgen.build.plan import ArtifactPlan, plan_artifacts
from wrapgen.build.project import load_project
from wrapgen.build.saver import ProjectSaver, SaveResult, save_project
from wrapgen.core.config import SaveConfig
from wrapgen.core.models import ConfigFlag, ExporterDecl, LinkageMode, PluginSettings, Project

__all__ = [
    "ArtifactPlan",
    "ConfigFlag",
    "ExporterDecl",
    "LinkageMode",
    "PluginSettings",
    "Project",
    "ProjectSaver",
    "SaveConfig",
    "SaveResult",
    "load_project",
    "plan_artifacts",
    "save_project",
]

__version__ = "0.1.0"
