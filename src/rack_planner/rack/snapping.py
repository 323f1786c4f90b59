"""Pointer-to-unit snapping for drag and drop.

The snapper only proposes a unit; a drop is accepted only once
``validate_placement`` agrees (see ``preview_drop``).
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from rack_planner.exceptions import DegenerateInputError
from rack_planner.rack.definition import Device, DropZone, Rack, SnapGuide
from rack_planner.rack.occupancy import require_positive
from rack_planner.rack.validator import validate_placement


def _require_unit_height(unit_pixel_height: float) -> None:
    if unit_pixel_height <= 0:
        raise DegenerateInputError("unit_pixel_height", unit_pixel_height)


def unit_from_offset(pointer_offset: float, unit_pixel_height: float) -> int:
    """Unit under a pixel offset measured from the rack's first unit, never below 1."""
    _require_unit_height(unit_pixel_height)
    return max(1, math.floor(pointer_offset / unit_pixel_height) + 1)


def offset_from_unit(position_u: int, unit_pixel_height: float) -> float:
    """Pixel offset of the top edge of ``position_u``."""
    _require_unit_height(unit_pixel_height)
    return (position_u - 1) * unit_pixel_height


def snap_to_unit(
    pointer_offset: float,
    unit_pixel_height: float,
    device_size: int,
    rack_size: int,
) -> int:
    """Snap a pointer offset to a starting unit that keeps the device inside the rack.

    A device taller than the rack snaps to 1; the validator rejects it.
    """
    require_positive("device_size", device_size)
    require_positive("rack_size", rack_size)

    position = unit_from_offset(pointer_offset, unit_pixel_height)
    if position + device_size - 1 > rack_size:
        position = rack_size - device_size + 1
    return max(1, position)


def preview_drop(
    pointer_offset: float,
    unit_pixel_height: float,
    device: Device,
    rack: Rack,
    existing_devices: Iterable[Device],
) -> DropZone:
    """Snap a dragged device and validate the resulting drop against the rack."""
    position = snap_to_unit(pointer_offset, unit_pixel_height, device.size_u, rack.size_u)
    return validate_placement(position, device.size_u, rack, existing_devices, exclude_id=device.id)


def generate_snap_guides(devices: Iterable[Device], rack_size: int) -> list[SnapGuide]:
    """Guide lines at the rack edges and at every device boundary."""
    guides = [SnapGuide(position_u=1, kind="top", label="Rack Top (1U)")]

    for device in devices:
        guides.append(
            SnapGuide(
                position_u=device.position_u,
                kind="top",
                label=f"{device.label} Top ({device.position_u}U)",
            )
        )
        below = device.end_u + 1
        guides.append(
            SnapGuide(position_u=below, kind="bottom", label=f"{device.label} Bottom ({below}U)")
        )

    guides.append(
        SnapGuide(position_u=rack_size + 1, kind="bottom", label=f"Rack Bottom ({rack_size}U)")
    )
    return guides
