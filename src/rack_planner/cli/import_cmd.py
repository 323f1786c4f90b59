"""rack-planner import: Bulk-import devices from CSV into a rack file."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel

from rack_planner.cli.inspect_cmd import load_rack
from rack_planner.config import get_settings
from rack_planner.exceptions import RackPlannerError
from rack_planner.rack.importer import csv_template, import_devices_csv
from rack_planner.rack.serializer import RackSerializer

console = Console()


def import_devices(
    csv_file: Annotated[Path | None, typer.Argument(help="CSV file with one device per row")] = None,
    rack_file: Annotated[Path | None, typer.Option("--rack", "-r", help="Rack file to import into")] = None,
    strict: Annotated[
        bool | None, typer.Option("--strict/--partial", help="Abort on the first bad row")
    ] = None,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Write the updated rack here")] = None,
    template: Annotated[bool, typer.Option("--template", help="Print an example CSV and exit")] = False,
) -> None:
    """Import devices from CSV, validating every row's placement.

    Rows without a position_u are placed automatically using the default
    strategy.
    """
    if template:
        typer.echo(csv_template(), nl=False)
        return

    if csv_file is None or rack_file is None:
        console.print("[yellow]Specify a CSV file and --rack (or --template)[/yellow]")
        raise typer.Exit(1)

    try:
        if not csv_file.exists():
            console.print(f"[red]File not found:[/red] {csv_file}")
            raise typer.Exit(1)

        settings = get_settings()
        rack = load_rack(rack_file)
        result = import_devices_csv(
            csv_file.read_text(),
            rack,
            rack.devices,
            strict=settings.strict_import if strict is None else strict,
            strategy=settings.default_strategy,
            max_device_size=settings.max_device_size,
        )

        if result.errors:
            console.print(Panel("\n".join(result.errors), title="Rejected rows", border_style="red"))

        console.print(f"Imported: [green]{result.imported}[/green]  Failed: [red]{result.failed}[/red]")

        if result.devices and output:
            updated = rack.model_copy(update={"devices": [*rack.devices, *result.devices]})
            RackSerializer.dump(updated, output)
            console.print(f"[green]Saved[/green] {output}")

        if not result.success:
            raise typer.Exit(1)

    except RackPlannerError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
