"""rack-planner show / validate / gaps: Inspect a rack file."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from rack_planner.config import get_settings
from rack_planner.exceptions import RackPlannerError
from rack_planner.rack.definition import Rack
from rack_planner.rack.gaps import find_available_spaces
from rack_planner.rack.serializer import RackSerializer
from rack_planner.rack.utilization import calculate_utilization
from rack_planner.rack.validator import validate_rack

console = Console()

VALID_FORMATS = ("table", "json")

_EFFICIENCY_STYLES = {
    "low": "dim",
    "optimal": "green",
    "high": "yellow",
    "critical": "red",
}


def load_rack(path: Path) -> Rack:
    """Load a rack file, falling back to the configured default size."""
    settings = get_settings()
    return RackSerializer.load(path, default_size=settings.default_rack_size)


def check_format(fmt: str) -> None:
    if fmt not in VALID_FORMATS:
        console.print(f"[red]Invalid format '{fmt}'. Choose from: {', '.join(VALID_FORMATS)}[/red]")
        raise typer.Exit(1)


def show(
    file: Annotated[Path, typer.Argument(help="Rack file (YAML or JSON)")],
    fmt: Annotated[str, typer.Option("--format", "-f", help="Output format: table or json")] = "table",
) -> None:
    """Show a rack's devices and utilization."""
    try:
        check_format(fmt)
        rack = load_rack(file)
        usage = calculate_utilization(rack.devices, rack.size_u)

        if fmt == "json":
            payload = RackSerializer.to_dict(rack)
            payload["utilization"] = {**asdict(usage), "efficiency": usage.efficiency.value}
            console.print_json(json.dumps(payload))
            return

        table = Table(title=f"{rack.name or file.stem} ({rack.size_u}U)")
        table.add_column("Units", justify="right", style="dim")
        table.add_column("Name", style="cyan")
        table.add_column("Type")
        table.add_column("Size", justify="right")
        table.add_column("Manufacturer", style="dim")

        for d in sorted(rack.devices, key=lambda d: d.position_u):
            units = str(d.position_u) if d.size_u == 1 else f"{d.position_u}-{d.end_u}"
            table.add_row(units, d.name, d.device_type, f"{d.size_u}U", d.manufacturer)

        console.print(table)
        style = _EFFICIENCY_STYLES[usage.efficiency.value]
        console.print(
            f"\n  Used: {usage.used}U  Available: {usage.available}U  "
            f"({usage.percentage}%, [{style}]{usage.efficiency.value}[/{style}])"
        )

    except RackPlannerError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e


def validate(
    file: Annotated[Path, typer.Argument(help="Rack file (YAML or JSON)")],
) -> None:
    """Check a rack file for out-of-bounds and overlapping devices."""
    try:
        rack = load_rack(file)
        result = validate_rack(rack)

        for warning in result.warnings:
            console.print(f"[yellow]Warning:[/yellow] {warning}")

        if not result.valid:
            for error in result.errors:
                console.print(f"[red]Error:[/red] {error}")
            console.print(f"\n[red]{len(result.errors)} problem(s) found.[/red]")
            raise typer.Exit(1)

        console.print(f"[green]OK[/green] {rack.name or file.stem}: {len(rack.devices)} devices, no overlaps.")

    except RackPlannerError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e


def gaps(
    file: Annotated[Path, typer.Argument(help="Rack file (YAML or JSON)")],
    fmt: Annotated[str, typer.Option("--format", "-f", help="Output format: table or json")] = "table",
) -> None:
    """List the free runs of units in a rack."""
    try:
        check_format(fmt)
        rack = load_rack(file)
        spaces = find_available_spaces(rack.devices, rack.size_u)

        if fmt == "json":
            console.print_json(json.dumps([asdict(s) for s in spaces]))
            return

        table = Table(title="Free Space")
        table.add_column("Start", justify="right", style="cyan")
        table.add_column("End", justify="right", style="cyan")
        table.add_column("Size", justify="right", style="green")

        for s in spaces:
            table.add_row(str(s.start_u), str(s.end_u), f"{s.size_u}U")

        console.print(table)
        console.print(f"\n  Total free: {sum(s.size_u for s in spaces)}U in {len(spaces)} run(s)")

    except RackPlannerError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
