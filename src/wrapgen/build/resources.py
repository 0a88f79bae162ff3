"""Binary resource bundling — embed project resource files as C++ byte arrays."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from wrapgen.build.writer import WriteResult, write_if_different
from wrapgen.core.errors import ArtifactWriteError

_NON_IDENT = re.compile(r"[^A-Za-z0-9_]")
BYTES_PER_LINE = 16


def identifier_for(filename: str, taken: set[str]) -> str:
    """C++ identifier for a resource file name, unique within ``taken``."""
    name = _NON_IDENT.sub("_", filename) or "_"
    if name[0].isdigit():
        name = "_" + name
    candidate, n = name, 2
    while candidate in taken:
        candidate = f"{name}{n}"
        n += 1
    taken.add(candidate)
    return candidate


@dataclass
class BinaryDataWriter:
    """Writes ``<class_name>.cpp`` and ``.h`` embedding each resource file."""

    resources: list[Path]
    class_name: str = "BinaryData"
    results: list[WriteResult] = field(default_factory=list)

    def _load(self) -> list[tuple[str, bytes]]:
        taken: set[str] = set()
        entries = []
        for path in self.resources:
            try:
                data = path.read_bytes()
            except OSError as e:
                raise ArtifactWriteError(path, f"Can't read resource file: {path} ({e.strerror or e})") from e
            entries.append((identifier_for(path.name, taken), data))
        return entries

    def render_header(self, entries: list[tuple[str, bytes]]) -> str:
        lines = [
            "/* =========================================================================================",
            "",
            "   This is an auto-generated file, created by wrapgen. Do not edit it directly!",
            "",
            "*/",
            "",
            f"namespace {self.class_name}",
            "{",
        ]
        for ident, data in entries:
            lines.append(f"    extern const char*   {ident};")
            lines.append(f"    const int            {ident}Size = {len(data)};")
            lines.append("")
        lines.append("}")
        return "\n".join(lines) + "\n"

    def render_source(self, entries: list[tuple[str, bytes]], header_name: str) -> str:
        lines = [
            "/* ==================================== BINARY DATA ====================================",
            "",
            "   This is an auto-generated file, created by wrapgen. Do not edit it directly!",
            "",
            "*/",
            "",
            f'#include "{header_name}"',
            "",
        ]
        for ident, data in entries:
            lines.append(f"static const unsigned char temp_{ident}[] =")
            lines.append("{")
            for i in range(0, len(data), BYTES_PER_LINE):
                chunk = ",".join(str(b) for b in data[i:i + BYTES_PER_LINE])
                lines.append(f"  {chunk},")
            lines.append("  0 };")
            lines.append("")
            lines.append(f"const char* {self.class_name}::{ident} = (const char*) temp_{ident};")
            lines.append("")
        return "\n".join(lines) + "\n"

    def write(self, cpp_path: Path) -> list[WriteResult]:
        """Render and diff-write both files. Unreadable resources become failed results."""
        h_path = cpp_path.with_suffix(".h")
        try:
            entries = self._load()
        except ArtifactWriteError as e:
            self.results = [WriteResult(path=e.path, error=e)]
            return self.results

        self.results = [
            write_if_different(h_path, self.render_header(entries)),
            write_if_different(cpp_path, self.render_source(entries, h_path.name)),
        ]
        return self.results
