"""Clean command — remove generated wrapper files."""

from __future__ import annotations

from pathlib import Path

import click

from wrapgen.cli.main import console, load_or_exit, project_argument


@click.command()
@project_argument
@click.option("-y", "--yes", is_flag=True, help="Skip confirmation prompt")
def clean(project_path: str, yes: bool):
    """Delete every generated wrapper file of a project.

    PROJECT_PATH defaults to the single *.wgproj file in the current directory.

    Exporter project files are left alone. Use --yes to skip the confirmation prompt.
    """
    from wrapgen.build.plan import describe_save
    from wrapgen.build.writer import delete_if_exists

    project = load_or_exit(project_path)
    existing = [Path(f.path) for f in describe_save(project).files if Path(f.path).exists()]

    if not existing:
        console.print("[dim]Nothing to clean — no generated files exist.[/dim]")
        return

    if not yes:
        console.print(f"This will delete [bold]{len(existing)}[/bold] generated file(s).")
        if not click.confirm("Continue?"):
            console.print("[dim]Aborted.[/dim]")
            return

    failed = 0
    for path in existing:
        result = delete_if_exists(path)
        if result.ok:
            console.print(f"[green]Deleted:[/green] {path}")
        else:
            failed += 1
            console.print(f"[red]Error:[/red] {result.error}")
    if failed:
        raise SystemExit(1)
