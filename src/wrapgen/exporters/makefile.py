"""GNU make exporter."""

from __future__ import annotations

from wrapgen.exporters.base import ToolchainExporter, register_exporter


@register_exporter("makefile")
class MakefileExporter(ToolchainExporter):
    """Writes a Makefile that builds the project and its wrapper sources."""

    identifier_macro = "LINUX_MAKE"
    default_target_folder = "Builds/Linux"

    def create(self) -> None:
        self.write_file("Makefile", self.render())

    def render(self) -> str:
        target = self.settings.get("target_name") or self.project.name.replace(" ", "")
        cxxflags = self.settings.get("cxxflags", "-O2")
        libs = self.settings.get("libs", "-lpthread -ldl")
        sources = self.project_sources() + self.wrapper_sources()
        includes = " ".join(f"-I{d}" for d in self.include_dirs())

        lines = [
            "# Automatically generated makefile, created by wrapgen",
            "# Don't edit this file! Your changes will be overwritten when you re-save the project!",
            "",
            "CXX ?= g++",
            f"TARGET := {target}",
            "OBJDIR := build/intermediate",
            f"CPPFLAGS += -DLINUX=1 -D{self.identifier_macro}=1 {includes}".rstrip(),
            f"CXXFLAGS += {cxxflags}",
            f"LDLIBS += {libs}",
            "",
            "SOURCES := \\",
        ]
        lines.extend(f"  {src} \\" for src in sources)
        lines.extend([
            "",
            "OBJECTS := $(addprefix $(OBJDIR)/,$(notdir $(SOURCES:.cpp=.o)))",
            "vpath %.cpp $(sort $(dir $(SOURCES)))",
            "",
            ".PHONY: all clean",
            "",
            "all: build/$(TARGET)",
            "",
            "build/$(TARGET): $(OBJECTS)",
            "\t@mkdir -p $(dir $@)",
            "\t$(CXX) -o $@ $(OBJECTS) $(LDFLAGS) $(LDLIBS)",
            "",
            "$(OBJDIR)/%.o: %.cpp",
            "\t@mkdir -p $(OBJDIR)",
            "\t$(CXX) $(CPPFLAGS) $(CXXFLAGS) -c -o $@ $<",
            "",
            "clean:",
            "\trm -rf build",
        ])
        return "\n".join(lines) + "\n"
