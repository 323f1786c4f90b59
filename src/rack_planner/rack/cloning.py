"""Device cloning.

Clones get fresh ids. Whenever a clone lands in a rack it is validated
like any other placement, and a rejected clone raises ``PlacementError``
instead of being committed.
"""

from __future__ import annotations

import logging
import re
import uuid

from rack_planner.exceptions import PlacementError
from rack_planner.rack.definition import Device, Rack
from rack_planner.rack.validator import validate_placement

logger = logging.getLogger(__name__)

_TRAILING_NUMBER = re.compile(r"(\d+)$")


def new_device_id() -> str:
    return f"device-{uuid.uuid4().hex[:12]}"


def increment_name(name: str) -> str:
    """Bump a trailing number, keeping its zero padding ("sw-09" -> "sw-10").

    Names without a trailing number get " 01" appended.
    """
    match = _TRAILING_NUMBER.search(name)
    if not match:
        return f"{name} 01"
    digits = match.group(1)
    bumped = str(int(digits) + 1).zfill(len(digits))
    return name[: match.start()] + bumped


def clone_device(device: Device, position_offset: int = 0, name: str | None = None) -> Device:
    """Copy a device with a new id, shifted by ``position_offset`` units."""
    return device.model_copy(
        update={
            "id": new_device_id(),
            "name": name or f"{device.name} - Copy",
            "position_u": device.position_u + position_offset,
        }
    )


def clone_into_rack(
    device: Device,
    rack: Rack,
    existing_devices: list[Device],
    position_offset: int = 0,
    name: str | None = None,
) -> Device:
    """Clone a device and validate the copy against the target rack.

    Raises:
        PlacementError: If the clone would fall outside the rack or collide.
    """
    clone = clone_device(device, position_offset=position_offset, name=name)
    drop = validate_placement(clone.position_u, clone.size_u, rack, existing_devices)
    if not drop.is_valid:
        raise PlacementError(clone.label, drop)
    return clone


def batch_clone(
    devices: list[Device],
    start_u: int,
    rack: Rack,
    existing_devices: list[Device],
    name_pattern: str | None = None,
) -> list[Device]:
    """Clone devices as one consecutive block starting at ``start_u``.

    ``name_pattern`` may use ``{original}`` and ``{num}`` placeholders.
    Nothing is returned unless every clone is valid.

    Raises:
        PlacementError: On the first clone the validator rejects.
    """
    occupied = list(existing_devices)
    clones: list[Device] = []
    current_u = start_u

    for num, device in enumerate(devices, 1):
        if name_pattern:
            name = name_pattern.replace("{original}", device.name).replace("{num}", str(num))
        else:
            name = f"{device.name} - Copy {num}"

        clone = device.model_copy(update={"id": new_device_id(), "name": name, "position_u": current_u})
        drop = validate_placement(clone.position_u, clone.size_u, rack, occupied)
        if not drop.is_valid:
            raise PlacementError(clone.label, drop)

        occupied.append(clone)
        clones.append(clone)
        current_u += device.size_u

    logger.info("Cloned %d device(s) into rack '%s' from %dU", len(clones), rack.name, start_u)
    return clones
