"""Automatic placement strategies.

Every strategy works from the same ordered free-space list and only
differs in which qualifying space it picks. ``nearest-fit`` is first-fit,
not best-fit: the first space large enough wins, however much room it
wastes. Callers that want tight packing compact afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from rack_planner.rack.definition import Device, FreeSpace, PlacementStrategy
from rack_planner.rack.gaps import find_available_spaces
from rack_planner.rack.occupancy import require_positive

logger = logging.getLogger(__name__)


def resolve_strategy(strategy: PlacementStrategy | str) -> PlacementStrategy:
    """Accept an enum member or its string value."""
    try:
        return PlacementStrategy(strategy)
    except ValueError:
        valid = ", ".join(s.value for s in PlacementStrategy)
        raise ValueError(f"Unknown placement strategy '{strategy}'. Choose from: {valid}") from None


def suggest_placement(
    device_size: int,
    existing_devices: Iterable[Device],
    rack_size: int,
    strategy: PlacementStrategy | str = PlacementStrategy.NEAREST_FIT,
) -> int | None:
    """Choose a legal starting unit for a device of ``device_size``.

    Returns:
        The suggested ``position_u``, or None when no free space is large
        enough for the device.
    """
    require_positive("device_size", device_size)
    strategy = resolve_strategy(strategy)

    fitting = [
        space
        for space in find_available_spaces(existing_devices, rack_size)
        if space.size_u >= device_size
    ]
    if not fitting:
        logger.debug("No free space for a %dU device in a %dU rack", device_size, rack_size)
        return None

    if strategy is PlacementStrategy.BOTTOM_FIRST:
        position = fitting[-1].end_u - device_size + 1
    elif strategy is PlacementStrategy.CENTER_BIASED:
        position = _closest_to(fitting, rack_size // 2).start_u
    else:
        # nearest-fit, top-first and compact all take the first fitting space
        position = fitting[0].start_u

    logger.debug("Strategy %s placed a %dU device at %dU", strategy.value, device_size, position)
    return position


def _closest_to(spaces: list[FreeSpace], target_u: int) -> FreeSpace:
    """Space whose start is nearest ``target_u``; the earliest wins ties."""
    best = spaces[0]
    best_distance = abs(best.start_u - target_u)
    for space in spaces[1:]:
        distance = abs(space.start_u - target_u)
        if distance < best_distance:
            best, best_distance = space, distance
    return best


def find_nearest_available_position(
    preferred_u: int,
    device_size: int,
    existing_devices: Iterable[Device],
    rack_size: int,
) -> int | None:
    """Find the legal position closest to where the user wanted the device.

    If ``preferred_u`` sits in a free space and the device fits from there,
    it is returned unchanged. If the device does not fit from there but the
    space is large enough, the space's start is used. Otherwise the start of
    the nearest space that can hold the device is returned.
    """
    require_positive("device_size", device_size)
    spaces = find_available_spaces(existing_devices, rack_size)

    for space in spaces:
        if space.start_u <= preferred_u <= space.end_u:
            if preferred_u + device_size - 1 <= space.end_u:
                return preferred_u
            if space.size_u >= device_size:
                return space.start_u

    fitting = [space for space in spaces if space.size_u >= device_size]
    if not fitting:
        return None
    return _closest_to(fitting, preferred_u).start_u
