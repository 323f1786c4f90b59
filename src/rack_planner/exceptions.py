"""Custom exception hierarchy for rack-planner."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rack_planner.rack.definition import DropZone


class RackPlannerError(Exception):
    """Base exception for all rack-planner errors."""


class DegenerateInputError(RackPlannerError):
    """A size, rack size or unit height that can never describe a layout."""

    def __init__(self, name: str, value: object):
        self.name = name
        self.value = value
        super().__init__(f"{name} must be positive, got {value!r}")


class PlacementError(RackPlannerError):
    """A write path tried to commit a placement the validator rejected."""

    def __init__(self, device_name: str, drop_zone: DropZone):
        self.device_name = device_name
        self.drop_zone = drop_zone
        super().__init__(
            f"Cannot place '{device_name}' at {drop_zone.position_u}U: {drop_zone.reason}"
        )


class InsufficientSpaceError(RackPlannerError):
    """The devices do not fit in the rack at all."""

    def __init__(self, required: int, rack_size: int):
        self.required = required
        self.rack_size = rack_size
        super().__init__(
            f"Not enough space: devices need {required}U but the rack has {rack_size}U"
        )


class RackFileError(RackPlannerError):
    """Error reading or parsing a rack layout file."""


class TemplateError(RackPlannerError):
    """Error loading or applying a rack template."""


class ImportAbortedError(RackPlannerError):
    """A strict CSV import stopped at the first rejected row."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        error_list = "\n  - ".join(errors)
        super().__init__(f"Import aborted:\n  - {error_list}")


class ConfigurationError(RackPlannerError):
    """Invalid or missing configuration."""
