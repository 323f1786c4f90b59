"""Rack utilization statistics."""

from __future__ import annotations

from collections.abc import Iterable

from rack_planner.rack.definition import Device, Efficiency, Utilization
from rack_planner.rack.occupancy import require_positive

# Lower bound of each band, inclusive
OPTIMAL_FROM_PCT = 30.0
HIGH_FROM_PCT = 80.0
CRITICAL_FROM_PCT = 95.0


def classify_efficiency(percentage: float) -> Efficiency:
    if percentage >= CRITICAL_FROM_PCT:
        return Efficiency.CRITICAL
    if percentage >= HIGH_FROM_PCT:
        return Efficiency.HIGH
    if percentage >= OPTIMAL_FROM_PCT:
        return Efficiency.OPTIMAL
    return Efficiency.LOW


def calculate_utilization(devices: Iterable[Device], rack_size: int) -> Utilization:
    """Used and available units, percentage used (2 decimals) and its band."""
    require_positive("rack_size", rack_size)
    used = sum(d.size_u for d in devices)
    percentage = round(used / rack_size * 100, 2)
    return Utilization(
        used=used,
        available=rack_size - used,
        percentage=percentage,
        efficiency=classify_efficiency(percentage),
    )
