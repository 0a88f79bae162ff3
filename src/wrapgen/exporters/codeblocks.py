"""Code::Blocks exporter."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from wrapgen.exporters.base import ToolchainExporter, register_exporter


@register_exporter("codeblocks")
class CodeBlocksExporter(ToolchainExporter):
    """Writes a ``.cbp`` project listing every source and wrapper file as a unit."""

    identifier_macro = "CODEBLOCKS"
    default_target_folder = "Builds/CodeBlocks"

    def create(self) -> None:
        filename = f"{self.project.name.replace(' ', '_')}.cbp"
        self.write_file(filename, self.render())

    def render(self) -> str:
        root = ET.Element("CodeBlocks_project_file")
        ET.SubElement(root, "FileVersion", major="1", minor="6")
        project = ET.SubElement(root, "Project")
        ET.SubElement(project, "Option", title=self.project.name)
        ET.SubElement(project, "Option", compiler="gcc")

        build = ET.SubElement(project, "Build")
        for config in ("Debug", "Release"):
            target = ET.SubElement(build, "Target", title=config)
            ET.SubElement(target, "Option", output=f"bin/{config}/{self.project.name}", prefix_auto="1", extension_auto="1")
            ET.SubElement(target, "Option", object_output=f"obj/{config}/")
            ET.SubElement(target, "Option", type="0" if self.project.project_type == "consoleapp" else "1")

        compiler = ET.SubElement(project, "Compiler")
        ET.SubElement(compiler, "Add", option=f"-D{self.identifier_macro}=1")
        for directory in self.include_dirs():
            ET.SubElement(compiler, "Add", directory=directory)

        for filename in self.project_sources() + self.wrapper_files:
            unit = ET.SubElement(project, "Unit", filename=filename)
            if filename.endswith(".h"):
                ET.SubElement(unit, "Option", compile="0")
                ET.SubElement(unit, "Option", link="0")

        ET.indent(root, space="\t")
        body = ET.tostring(root, encoding="unicode")
        return '<?xml version="1.0" encoding="UTF-8" standalone="yes" ?>\n' + body + "\n"
