"""Plan commands — wrapgen plan, wrapgen exporters."""

from __future__ import annotations

import click
from rich import box
from rich.table import Table

from wrapgen.cli.main import console, load_or_exit, project_argument


@click.command()
@project_argument
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the plan as JSON")
def plan(project_path: str, as_json: bool):
    """Show which wrapper files a save would write or delete, without saving.

    PROJECT_PATH defaults to the single *.wgproj file in the current directory.
    """
    from wrapgen.build.plan import describe_save

    project = load_or_exit(project_path)
    save_plan = describe_save(project)

    if as_json:
        click.echo(save_plan.to_json())
        return

    p = save_plan.plan
    console.print(f"[bold]Project:[/bold] {project.name}  [dim]({project.linkage.value}, {project.project_type})[/dim]")
    console.print(
        f"[bold]App header:[/bold] {'yes' if p.has_app_header else 'no'}  "
        f"[bold]App config:[/bold] {'yes' if p.has_app_config else 'no'}  "
        f"[bold]Source shims:[/bold] {p.num_source_shims}  "
        f"[bold]Resources:[/bold] {'yes' if p.has_resources else 'no'}"
    )

    table = Table(title="Planned Files", box=box.ROUNDED)
    table.add_column("File", style="bold")
    table.add_column("Kind")
    table.add_column("Action", justify="center")
    for f in save_plan.files:
        style = "green" if f.action == "write" else "dim"
        table.add_row(f.path, f.kind, f"[{style}]{f.action}[/{style}]")
    console.print(table)

    if save_plan.exporters:
        console.print(f"[bold]Exporters:[/bold] {', '.join(save_plan.exporters)}")
    else:
        console.print("[yellow]No exporters configured.[/yellow]")


@click.command()
def exporters():
    """List the available exporter types."""
    from wrapgen.exporters import create_exporter, get_exporter_types
    from wrapgen.core.models import ExporterDecl, Project

    table = Table(title="Exporter Types", box=box.ROUNDED)
    table.add_column("Type", style="bold")
    table.add_column("Identifier macro")
    table.add_column("Default folder")
    table.add_column("Shim extension", justify="center")

    probe = Project(name="probe")
    for type_name in get_exporter_types():
        exporter = create_exporter(probe, ExporterDecl(name=type_name, exporter_type=type_name))
        table.add_row(
            type_name,
            exporter.identifier_macro,
            exporter.default_target_folder,
            ".mm" if exporter.uses_mm_files else ".cpp",
        )
    console.print(table)
