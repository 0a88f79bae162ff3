"""Save command — wrapgen save."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich import box
from rich.table import Table

from wrapgen.cli.main import console, load_or_exit, project_argument


@click.command()
@project_argument
@click.option("--verify-roundtrip", is_flag=True, default=False,
              help="Re-read the written project file and check it matches")
@click.option("--log-dir", default=None, type=click.Path(file_okay=False), help="Write a JSONL save log here")
@click.option("--verbose", "-v", count=True, help="Verbosity level: -v per-file, -vv include unchanged files")
def save(project_path: str, verify_roundtrip: bool, log_dir: str | None, verbose: int):
    """Save a project and regenerate its wrapper files and exporter projects.

    PROJECT_PATH defaults to the single *.wgproj file in the current directory.
    """
    from wrapgen.build.saver import ProjectSaver
    from wrapgen.core.config import SaveConfig
    from wrapgen.core.errors import WrapgenError
    from wrapgen.core.logging import SaveLogger, Verbosity

    project = load_or_exit(project_path)

    overrides: dict = {"log_dir": log_dir}
    if verify_roundtrip:
        overrides["verify_roundtrip"] = True
    if verbose:
        overrides["verbosity"] = verbose
    config = SaveConfig.from_dict(overrides)

    logger = SaveLogger(
        verbosity=Verbosity(min(config.verbosity, Verbosity.DEBUG)),
        log_dir=config.log_dir,
        console=console,
    )

    try:
        result = ProjectSaver(project, Path(project_path).resolve(), config, logger).save()
    except WrapgenError as e:
        console.print(f"[red]Save failed:[/red] {e}")
        sys.exit(1)

    if not result.success:
        console.print(f"[red]Error:[/red] {result.first_error}")
        if len(result.errors) > 1:
            console.print(f"[dim]({len(result.errors) - 1} more error(s); use -v for details)[/dim]")
        sys.exit(1)

    log = result.save_log
    table = Table(title="Save Summary", box=box.ROUNDED)
    table.add_column("Written", justify="right", style="green")
    table.add_column("Unchanged", justify="right", style="cyan")
    table.add_column("Deleted", justify="right", style="yellow")
    table.add_column("Exporters", justify="right")
    table.add_row(
        str(len(log["written"])),
        str(len(log["unchanged"])),
        str(len(log["deleted"])),
        str(len(log["exporters"])),
    )
    console.print(table)
