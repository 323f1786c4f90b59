"""rack-planner suggest / snap: Find positions for a device."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from rack_planner.cli.inspect_cmd import load_rack
from rack_planner.config import get_settings
from rack_planner.exceptions import RackPlannerError
from rack_planner.rack.definition import Device, PlacementStrategy
from rack_planner.rack.snapping import preview_drop
from rack_planner.rack.strategies import suggest_placement

console = Console()


def suggest(
    file: Annotated[Path, typer.Argument(help="Rack file (YAML or JSON)")],
    size: Annotated[int, typer.Option("--size", "-s", help="Device size in units", min=1)],
    strategy: Annotated[
        str | None,
        typer.Option(
            "--strategy",
            help=f"Placement strategy: {', '.join(s.value for s in PlacementStrategy)}",
        ),
    ] = None,
) -> None:
    """Suggest where a new device of the given size should go."""
    try:
        rack = load_rack(file)
        strategy = strategy or get_settings().default_strategy

        try:
            position = suggest_placement(size, rack.devices, rack.size_u, strategy)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1) from e

        if position is None:
            console.print(f"[red]Not enough space[/red] for a {size}U device in {rack.name or file.stem}.")
            raise typer.Exit(1)

        end = position + size - 1
        console.print(f"Place at [cyan]{position}U[/cyan] (occupies {position}-{end}U, strategy {strategy})")

    except RackPlannerError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e


def snap(
    file: Annotated[Path, typer.Argument(help="Rack file (YAML or JSON)")],
    offset: Annotated[float, typer.Option("--offset", help="Pointer offset in pixels from the rack's first unit")],
    size: Annotated[int, typer.Option("--size", "-s", help="Size of the dragged device in units", min=1)] = 1,
    device_id: Annotated[
        str | None, typer.Option("--device-id", help="Id of a device being moved (ignored for collisions)")
    ] = None,
    unit_height: Annotated[
        float | None, typer.Option("--unit-height", help="Pixel height of one unit")
    ] = None,
) -> None:
    """Preview a drag-and-drop: snap a pointer offset and validate the drop."""
    try:
        rack = load_rack(file)
        height = unit_height if unit_height is not None else get_settings().unit_pixel_height

        dragged = next((d for d in rack.devices if d.id == device_id), None) if device_id else None
        if device_id and dragged is None:
            console.print(f"[red]No device with id '{device_id}' in this rack[/red]")
            raise typer.Exit(1)
        if dragged is None:
            dragged = Device(id="__dragged__", name="new device", size_u=size)

        drop = preview_drop(offset, height, dragged, rack, rack.devices)
        if drop.is_valid:
            console.print(f"[green]Valid drop[/green] at {drop.position_u}U")
        else:
            console.print(f"[red]Invalid drop[/red] at {drop.position_u}U: {drop.reason}")
            raise typer.Exit(1)

    except RackPlannerError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
