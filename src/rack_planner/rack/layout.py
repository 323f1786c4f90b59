"""Rack reorganization: compaction, even distribution and batch placement.

Unit numbers are treated as a plain linear address space. Compaction
always packs from unit 1; the direction only decides which end of the
current layout goes first.
"""

from __future__ import annotations

import logging

from rack_planner.exceptions import InsufficientSpaceError
from rack_planner.rack.definition import CompactDirection, Device, PlacementStrategy
from rack_planner.rack.occupancy import require_positive
from rack_planner.rack.strategies import resolve_strategy, suggest_placement

logger = logging.getLogger(__name__)


class LayoutManager:
    """Reassign device positions across a whole rack.

    Every method returns new Device objects; the inputs are never mutated
    and sizes and ids are preserved.
    """

    @staticmethod
    def compact_devices(
        devices: list[Device],
        direction: CompactDirection | str = CompactDirection.TOP,
        rack_size: int | None = None,
    ) -> list[Device]:
        """Remove every gap, producing one block that starts at unit 1.

        ``top`` keeps the current top-to-bottom order (ascending position);
        ``bottom`` lays the highest-positioned device down first, which
        reverses the order. Ties keep their input order.

        Raises:
            InsufficientSpaceError: If ``rack_size`` is given and the devices
                need more units than the rack has.
        """
        direction = CompactDirection(direction)
        if rack_size is not None:
            require_positive("rack_size", rack_size)
        if not devices:
            return []

        total_used = sum(d.size_u for d in devices)
        if rack_size is not None and total_used > rack_size:
            raise InsufficientSpaceError(total_used, rack_size)

        ordered = sorted(
            devices,
            key=lambda d: d.position_u,
            reverse=direction is CompactDirection.BOTTOM,
        )

        result = []
        next_u = 1
        for device in ordered:
            result.append(device.model_copy(update={"position_u": next_u}))
            next_u += device.size_u

        logger.debug("Compacted %d devices (%s) into 1-%dU", len(result), direction.value, next_u - 1)
        return result

    @staticmethod
    def distribute_devices_evenly(devices: list[Device], rack_size: int) -> list[Device]:
        """Spread devices across the rack with equal gaps between them.

        The spare units are split into ``len(devices) + 1`` equal gaps
        (rounded down), so leftover units collect at the end of the rack.

        Raises:
            InsufficientSpaceError: If the devices need more units than the
                rack has.
        """
        require_positive("rack_size", rack_size)
        if not devices:
            return []

        total_used = sum(d.size_u for d in devices)
        available_gap = rack_size - total_used
        if available_gap < 0:
            raise InsufficientSpaceError(total_used, rack_size)

        gap = available_gap // (len(devices) + 1)

        result = []
        current_u = gap + 1
        for device in devices:
            result.append(device.model_copy(update={"position_u": current_u}))
            current_u += device.size_u + gap

        logger.debug("Distributed %d devices with %dU gaps", len(result), gap)
        return result

    @staticmethod
    def auto_position(
        pending: list[Device],
        existing: list[Device],
        rack_size: int,
        strategy: PlacementStrategy | str = PlacementStrategy.NEAREST_FIT,
    ) -> tuple[list[Device], list[Device]]:
        """Place each pending device in turn, ignoring its current position.

        Free space is re-derived after every placement, so later devices see
        the earlier ones.

        Returns:
            ``(placed, unplaced)``: devices with their new positions, and
            the devices for which no free space was large enough.
        """
        strategy = resolve_strategy(strategy)
        occupied = list(existing)
        placed: list[Device] = []
        unplaced: list[Device] = []

        for device in pending:
            position = suggest_placement(device.size_u, occupied, rack_size, strategy)
            if position is None:
                logger.info("Not enough space for '%s' (%dU)", device.label, device.size_u)
                unplaced.append(device)
                continue
            moved = device.model_copy(update={"position_u": position})
            occupied.append(moved)
            placed.append(moved)

        return placed, unplaced
