"""rack-planner template list / new: Work with rack templates."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from rack_planner.cli.inspect_cmd import check_format
from rack_planner.config import get_settings
from rack_planner.exceptions import RackPlannerError
from rack_planner.rack.serializer import RackSerializer
from rack_planner.templates.registry import TemplateRegistry

console = Console()


def _registry() -> TemplateRegistry:
    settings = get_settings()
    return TemplateRegistry(template_dirs=settings.require_template_dirs())


def list_templates(
    search: Annotated[str | None, typer.Option("--search", "-s", help="Filter by keyword")] = None,
    fmt: Annotated[str, typer.Option("--format", "-f", help="Output format: table or json")] = "table",
) -> None:
    """List available rack templates."""
    try:
        check_format(fmt)
        registry = _registry()
        templates = registry.search(search) if search else registry.templates

        if fmt == "json":
            console.print_json(json.dumps(templates, indent=2))
            return

        table = Table(title="Rack Templates")
        table.add_column("Name", style="cyan")
        table.add_column("Size", justify="right")
        table.add_column("Devices", justify="right", style="green")
        table.add_column("Category", style="dim")
        table.add_column("Description")

        for t in templates:
            table.add_row(
                t["name"],
                f"{t['size_u']}U" if t["size_u"] else "",
                str(t["device_count"]),
                t["category"],
                t["description"][:60],
            )

        console.print(table)

    except RackPlannerError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e


def new_from_template(
    name: Annotated[str, typer.Argument(help="Template name")],
    output: Annotated[Path, typer.Option("--output", "-o", help="Rack file to create")],
    rack_name: Annotated[str | None, typer.Option("--name", "-n", help="Name of the new rack")] = None,
    force: Annotated[bool, typer.Option("--force", help="Overwrite an existing file")] = False,
) -> None:
    """Create a rack file from a template."""
    try:
        if output.exists() and not force:
            console.print(f"[red]File exists:[/red] {output} (use --force to overwrite)")
            raise typer.Exit(1)

        rack = _registry().load(name, rack_name=rack_name)
        RackSerializer.dump(rack, output)
        console.print(f"[green]Created[/green] {output} from '{name}' ({len(rack.devices)} devices)")

    except RackPlannerError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
