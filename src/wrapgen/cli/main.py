"""Wrapgen CLI — main entry point and shared utilities."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.console import Console

console = Console(highlight=False)


def _resolve_project_path(
    ctx: click.Context, param: click.Parameter, value: str | None,
) -> str:
    """Click callback: default to the single *.wgproj in the current directory."""
    from wrapgen.build.project import PROJECT_FILE_SUFFIX, find_project_file

    if value is not None:
        return value
    found = find_project_file(Path.cwd())
    if found is None:
        console.print(
            "[red]Error:[/red] No project file specified and no single "
            f"[bold]*{PROJECT_FILE_SUFFIX}[/bold] file found in the current directory."
        )
        sys.exit(1)
    return str(found)


def project_argument(fn):
    """Shared Click argument decorator for PROJECT_PATH with a *.wgproj default."""
    return click.argument(
        "project_path",
        required=False,
        default=None,
        callback=_resolve_project_path,
        is_eager=False,
    )(fn)


def load_or_exit(project_path: str):
    """Load a project file, printing the error and exiting on failure."""
    from wrapgen.build.project import load_project

    try:
        return load_project(project_path)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error loading project:[/red] {e}")
        sys.exit(1)


@click.group()
def main():
    """Wrapgen — generate library wrapper files and toolchain projects."""
    pass


def cli():
    """Entrypoint that loads .env before running the CLI."""
    from dotenv import load_dotenv

    load_dotenv()
    main()


# Import subcommand modules to register commands
from wrapgen.cli.clean_commands import clean  # noqa: E402
from wrapgen.cli.plan_commands import exporters, plan  # noqa: E402
from wrapgen.cli.save_commands import save  # noqa: E402

main.add_command(save)
main.add_command(plan)
main.add_command(clean)
main.add_command(exporters)
