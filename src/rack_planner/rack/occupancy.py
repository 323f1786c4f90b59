"""Occupancy model and collision detection.

A rack's occupancy is never stored; it is re-derived from the device list
on every call.
"""

from __future__ import annotations

from collections.abc import Iterable

from rack_planner.exceptions import DegenerateInputError
from rack_planner.rack.definition import CollisionReport, Device


def require_positive(name: str, value: int | float) -> None:
    """Fail fast on sizes that can never describe an interval."""
    if value < 1:
        raise DegenerateInputError(name, value)


def device_interval(device: Device) -> tuple[int, int]:
    """Closed unit interval covered by a device."""
    return device.position_u, device.position_u + device.size_u - 1


def intervals_overlap(a: tuple[int, int], b: tuple[int, int]) -> bool:
    """Closed intervals [a1, a2] and [b1, b2] overlap iff a1 <= b2 and b1 <= a2."""
    return a[0] <= b[1] and b[0] <= a[1]


def occupied_units(
    devices: Iterable[Device],
    exclude_id: str | None = None,
    rack_size: int | None = None,
) -> set[int]:
    """Every unit covered by a device, skipping ``exclude_id``.

    With ``rack_size``, units outside ``1..rack_size`` are skipped.
    """
    units: set[int] = set()
    for device in devices:
        if exclude_id is not None and device.id == exclude_id:
            continue
        start, end = device_interval(device)
        if rack_size is not None:
            start, end = max(start, 1), min(end, rack_size)
        units.update(range(start, end + 1))
    return units


def detect_collision(
    position_u: int,
    size_u: int,
    existing_devices: Iterable[Device],
    exclude_id: str | None = None,
) -> CollisionReport:
    """Report every device the candidate interval overlaps.

    Args:
        position_u: First unit of the candidate.
        size_u: Number of units the candidate spans.
        existing_devices: Current occupants of the rack.
        exclude_id: Device to ignore, used when checking a move of an
            existing device against the rest of the rack.

    Returns:
        CollisionReport listing all overlapping devices in input order.
    """
    require_positive("size_u", size_u)
    candidate = (position_u, position_u + size_u - 1)

    colliding = [
        device
        for device in existing_devices
        if not (exclude_id is not None and device.id == exclude_id)
        and intervals_overlap(candidate, device_interval(device))
    ]
    return CollisionReport(has_collision=bool(colliding), colliding_devices=colliding)


def find_overlapping_pairs(devices: list[Device]) -> list[tuple[Device, Device]]:
    """All pairs of devices whose intervals intersect."""
    ordered = sorted(devices, key=lambda d: d.position_u)
    pairs: list[tuple[Device, Device]] = []
    for i, first in enumerate(ordered):
        first_span = device_interval(first)
        for second in ordered[i + 1:]:
            if second.position_u > first_span[1]:
                break
            pairs.append((first, second))
    return pairs
