"""Free-space discovery.

Derives the maximal runs of unoccupied units from the current device list.
For any legal layout the free units plus the occupied units add up to the
rack size exactly.
"""

from __future__ import annotations

from collections.abc import Iterable

from rack_planner.rack.definition import Device, FreeSpace
from rack_planner.rack.occupancy import occupied_units, require_positive


def find_available_spaces(
    existing_devices: Iterable[Device],
    rack_size: int,
    exclude_id: str | None = None,
) -> list[FreeSpace]:
    """Return every maximal free run in ``1..rack_size``, ordered by start."""
    require_positive("rack_size", rack_size)
    occupied = occupied_units(existing_devices, exclude_id, rack_size)

    spaces: list[FreeSpace] = []
    run_start: int | None = None

    for u in range(1, rack_size + 1):
        if u not in occupied:
            if run_start is None:
                run_start = u
        elif run_start is not None:
            spaces.append(FreeSpace(start_u=run_start, end_u=u - 1, size_u=u - run_start))
            run_start = None

    # Rack ends with free space
    if run_start is not None:
        spaces.append(
            FreeSpace(start_u=run_start, end_u=rack_size, size_u=rack_size - run_start + 1)
        )

    return spaces


def total_free_units(existing_devices: Iterable[Device], rack_size: int) -> int:
    """Number of units not covered by any device."""
    return sum(space.size_u for space in find_available_spaces(existing_devices, rack_size))


def largest_free_space(existing_devices: Iterable[Device], rack_size: int) -> FreeSpace | None:
    """The biggest free run; the first one wins ties."""
    best: FreeSpace | None = None
    for space in find_available_spaces(existing_devices, rack_size):
        if best is None or space.size_u > best.size_u:
            best = space
    return best
