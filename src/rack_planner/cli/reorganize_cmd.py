"""rack-planner compact / distribute: Reorganize a whole rack."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from rack_planner.cli.inspect_cmd import load_rack
from rack_planner.exceptions import RackPlannerError
from rack_planner.rack.definition import CompactDirection, Device, Rack
from rack_planner.rack.layout import LayoutManager
from rack_planner.rack.serializer import RackSerializer

console = Console()


def _report(before: list[Device], after: list[Device], rack: Rack, output: Path | None) -> None:
    """Print old and new positions, then write the rack if requested."""
    old_positions = {d.id: d.position_u for d in before}

    table = Table(title="New Positions")
    table.add_column("Name", style="cyan")
    table.add_column("From", justify="right", style="dim")
    table.add_column("To", justify="right", style="green")
    for d in sorted(after, key=lambda d: d.position_u):
        table.add_row(d.label, f"{old_positions[d.id]}U", f"{d.position_u}U")
    console.print(table)

    if output:
        RackSerializer.dump(rack.model_copy(update={"devices": after}), output)
        console.print(f"\n[green]Saved[/green] {output}")
    else:
        console.print("\n[dim]Dry run: pass --output to save the new layout.[/dim]")


def compact(
    file: Annotated[Path, typer.Argument(help="Rack file (YAML or JSON)")],
    direction: Annotated[
        CompactDirection, typer.Option("--direction", "-d", help="Which end of the layout goes first")
    ] = CompactDirection.TOP,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Write the compacted rack here")] = None,
) -> None:
    """Remove every gap so devices form one block starting at unit 1."""
    try:
        rack = load_rack(file)
        compacted = LayoutManager.compact_devices(rack.devices, direction, rack.size_u)
        _report(rack.devices, compacted, rack, output)

    except RackPlannerError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e


def distribute(
    file: Annotated[Path, typer.Argument(help="Rack file (YAML or JSON)")],
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Write the redistributed rack here")] = None,
) -> None:
    """Spread devices evenly across the rack, keeping their order."""
    try:
        rack = load_rack(file)
        ordered = sorted(rack.devices, key=lambda d: d.position_u)
        distributed = LayoutManager.distribute_devices_evenly(ordered, rack.size_u)
        _report(rack.devices, distributed, rack, output)

    except RackPlannerError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
