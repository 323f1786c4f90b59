"""Placement validation.

``validate_placement`` is the single check every write path (manual edit,
drag and drop, template insertion, CSV import, cloning) runs before it
commits a position. ``validate_rack`` checks an entire layout at once, e.g.
after loading a rack file.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from rack_planner.rack.definition import Device, DropZone, Rack
from rack_planner.rack.occupancy import detect_collision, find_overlapping_pairs, require_positive

logger = logging.getLogger(__name__)

CAPACITY_NOTICE_PCT = 75
CAPACITY_WARNING_PCT = 90

# Total draw above which a rack needs its power distribution reviewed
POWER_WARNING_WATTS = 5000


@dataclass
class ValidationResult:
    """Result of whole-rack validation."""

    valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)
        self.valid = False

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)


def validate_placement(
    position_u: int,
    size_u: int,
    rack: Rack,
    existing_devices: Iterable[Device],
    exclude_id: str | None = None,
) -> DropZone:
    """Decide whether a device of ``size_u`` may start at ``position_u``.

    Checks run in order and stop at the first failure: lower bound, rack
    capacity, then collisions. A collision reason names every colliding
    device, not only the first.
    """
    require_positive("size_u", size_u)

    if position_u < 1:
        return DropZone(
            position_u=position_u,
            size_u=size_u,
            is_valid=False,
            reason="Position below rack minimum (1U)",
        )

    if position_u + size_u - 1 > rack.size_u:
        return DropZone(
            position_u=position_u,
            size_u=size_u,
            is_valid=False,
            reason=f"Device exceeds rack capacity ({rack.size_u}U)",
        )

    collision = detect_collision(position_u, size_u, existing_devices, exclude_id)
    if collision.has_collision:
        return DropZone(
            position_u=position_u,
            size_u=size_u,
            is_valid=False,
            reason=f"Collision with {', '.join(collision.names)}",
            colliding_devices=collision.colliding_devices,
        )

    return DropZone(position_u=position_u, size_u=size_u, is_valid=True)


def validate_device_move(
    device: Device,
    new_position_u: int,
    rack: Rack,
    existing_devices: Iterable[Device],
) -> DropZone:
    """Validate moving ``device`` to ``new_position_u``, ignoring its current spot."""
    return validate_placement(new_position_u, device.size_u, rack, existing_devices, exclude_id=device.id)


def validate_rack(rack: Rack, devices: list[Device] | None = None) -> ValidationResult:
    """Validate a complete layout.

    Args:
        rack: The rack; its ``devices`` are used when ``devices`` is None.
        devices: Optional explicit device list.

    Returns:
        ValidationResult with bounds and overlap errors plus capacity warnings.
    """
    result = ValidationResult()
    devices = rack.devices if devices is None else devices

    for device in devices:
        prefix = f"Device '{device.label}'"
        if device.position_u < 1:
            result.add_error(f"{prefix}: Position {device.position_u}U is below rack minimum (1U).")
        if device.end_u > rack.size_u:
            result.add_error(
                f"{prefix}: Extends to {device.end_u}U, exceeding rack height of {rack.size_u}U."
            )

    for first, second in find_overlapping_pairs(devices):
        result.add_error(
            f"Device '{first.label}' ({first.position_u}-{first.end_u}U) overlaps "
            f"'{second.label}' ({second.position_u}-{second.end_u}U)."
        )

    used = sum(d.size_u for d in devices)
    # Rounded down so a rack with free units never reads as 100%
    percentage = used * 100 // rack.size_u
    if used > rack.size_u:
        result.add_error(f"Devices need {used}U but the rack has {rack.size_u}U.")
    elif used == rack.size_u:
        result.add_warning("Rack is at full capacity.")
    elif percentage >= CAPACITY_WARNING_PCT:
        result.add_warning(f"Rack is {percentage}% full - approaching capacity.")
    elif percentage >= CAPACITY_NOTICE_PCT:
        result.add_warning(f"Rack is {percentage}% full.")

    total_power = float(sum(d.power_watts or 0 for d in devices))
    if total_power > POWER_WARNING_WATTS:
        watts = int(total_power) if total_power.is_integer() else round(total_power, 1)
        result.add_warning(f"Total power draw is {watts}W - consider power distribution")

    if not result.valid:
        logger.debug("Rack '%s' failed validation with %d error(s)", rack.name, len(result.errors))
    return result
