"""Conditional include resolution across toolchain exporters.

Each exporter may see the library at a different relative location, so one
logical include ("juce_amalgamated.h") can need a different path per
toolchain. When every exporter agrees, a plain ``#include`` is emitted;
otherwise the paths are selected at compile time by each exporter's
identifier macro::

    #if defined (LINUX_MAKE)
     #include "../../juce/juce_amalgamated.h"
    #elif defined (XCODE_MAC)
     #include "../../../juce/juce_amalgamated.h"
    #endif
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wrapgen.exporters.base import ToolchainExporter


@dataclass(frozen=True)
class IncludeBranch:
    """One include path and the guard that makes it active (None = always)."""

    guard: str | None
    path: str


def guard_for(identifier_macro: str) -> str:
    return f"defined ({identifier_macro})"


def collapse_branches(candidates: Iterable[tuple[str, str]]) -> list[IncludeBranch]:
    """Collapse ordered (path, guard) pairs into the minimal branch list.

    Exact pair duplicates keep their first occurrence. Only a single surviving
    pair is emitted without a guard; pairs that share a path but differ in
    guard each keep their own branch.
    """
    pairs: list[tuple[str, str]] = []
    for pair in candidates:
        if pair not in pairs:
            pairs.append(pair)

    if len(pairs) == 1:
        return [IncludeBranch(guard=None, path=pairs[0][0])]
    return [IncludeBranch(guard=guard, path=path) for path, guard in pairs]


def resolve_include(
    logical_path: str,
    exporters: Iterable[ToolchainExporter],
    from_file: Path,
) -> list[IncludeBranch]:
    """Compute the include branches for a library file, in exporter order."""
    return collapse_branches(
        (exporter.map_include_path(logical_path, from_file), guard_for(exporter.identifier_macro))
        for exporter in exporters
    )


def render_include(branches: list[IncludeBranch]) -> str:
    """Render branches as an include line or an #if/#elif/#endif chain."""
    if not branches:
        return ""
    if len(branches) == 1 and branches[0].guard is None:
        return f"#include {branches[0].path}\n"

    lines = []
    for i, branch in enumerate(branches):
        lines.append(f"{'#if' if i == 0 else '#elif'} {branch.guard}")
        lines.append(f" #include {branch.path}")
    lines.append("#endif")
    return "\n".join(lines) + "\n"


def include_statement(target: Path, from_file: Path) -> str:
    """``#include "rel/path"`` for a generated file, relative to the includer."""
    return f'#include "{relative_posix(target, from_file.parent)}"'


def relative_posix(target: Path, base_dir: Path) -> str:
    return Path(os.path.relpath(target, base_dir)).as_posix()
