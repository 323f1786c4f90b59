"""Rack definitions and the rack-unit allocation engine."""

from rack_planner.rack.definition import Device, DropZone, FreeSpace, PlacementStrategy, Rack
from rack_planner.rack.gaps import find_available_spaces
from rack_planner.rack.layout import LayoutManager
from rack_planner.rack.occupancy import detect_collision
from rack_planner.rack.snapping import snap_to_unit
from rack_planner.rack.strategies import suggest_placement
from rack_planner.rack.utilization import calculate_utilization
from rack_planner.rack.validator import validate_placement

__all__ = [
    "Device",
    "DropZone",
    "FreeSpace",
    "LayoutManager",
    "PlacementStrategy",
    "Rack",
    "calculate_utilization",
    "detect_collision",
    "find_available_spaces",
    "snap_to_unit",
    "suggest_placement",
    "validate_placement",
]
