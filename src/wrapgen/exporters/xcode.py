"""Xcode exporter.

Xcode compiles the wrapper shims as Objective-C++, so it takes the ``.mm``
twins. Output is an ``.xcconfig`` carrying the build settings plus an
``.xcfilelist`` naming every wrapper file, both relative to ``$(SRCROOT)``.
"""

from __future__ import annotations

from wrapgen.exporters.base import ToolchainExporter, register_exporter


@register_exporter("xcode")
class XcodeExporter(ToolchainExporter):
    identifier_macro = "XCODE_MAC"
    default_target_folder = "Builds/MacOSX"
    uses_mm_files = True

    @property
    def base_name(self) -> str:
        return self.project.name.replace(" ", "")

    def create(self) -> None:
        self.write_file(f"{self.base_name}.xcconfig", self.render_xcconfig())
        self.write_file(f"{self.base_name}.xcfilelist", self.render_filelist())

    def render_xcconfig(self) -> str:
        search_paths = " ".join(f'"$(SRCROOT)/{d}"' for d in self.include_dirs())
        lines = [
            "// Automatically generated by wrapgen. Changes will be overwritten when the project is re-saved.",
            "",
            f"PRODUCT_NAME = {self.project.name}",
            f"MARKETING_VERSION = {self.project.version}",
            f"GCC_PREPROCESSOR_DEFINITIONS = $(inherited) {self.identifier_macro}=1",
            f"HEADER_SEARCH_PATHS = $(inherited) {search_paths}".rstrip(),
        ]
        if self.project.bundle_identifier:
            lines.append(f"PRODUCT_BUNDLE_IDENTIFIER = {self.project.bundle_identifier}")
        if self.settings.get("sdk"):
            lines.append(f"SDKROOT = {self.settings['sdk']}")
        return "\n".join(lines) + "\n"

    def render_filelist(self) -> str:
        files = self.project_sources() + self.wrapper_files
        return "".join(f"$(SRCROOT)/{f}\n" for f in files)
