"""Tests for rack_planner.exceptions — exception hierarchy and formatting."""

from __future__ import annotations

from rack_planner.exceptions import (
    ConfigurationError,
    DegenerateInputError,
    ImportAbortedError,
    InsufficientSpaceError,
    PlacementError,
    RackFileError,
    RackPlannerError,
    TemplateError,
)
from rack_planner.rack.definition import DropZone


class TestHierarchy:
    def test_all_inherit_from_base(self):
        for exc in (
            ConfigurationError,
            DegenerateInputError,
            ImportAbortedError,
            InsufficientSpaceError,
            PlacementError,
            RackFileError,
            TemplateError,
        ):
            assert issubclass(exc, RackPlannerError)


class TestFormatting:
    def test_degenerate_input(self):
        e = DegenerateInputError("rack_size", 0)
        assert str(e) == "rack_size must be positive, got 0"
        assert e.value == 0

    def test_placement_error(self):
        zone = DropZone(position_u=5, size_u=2, is_valid=False, reason="Collision with Core")
        e = PlacementError("Edge", zone)
        assert str(e) == "Cannot place 'Edge' at 5U: Collision with Core"
        assert e.drop_zone is zone

    def test_insufficient_space(self):
        e = InsufficientSpaceError(50, 42)
        assert str(e) == "Not enough space: devices need 50U but the rack has 42U"

    def test_import_aborted_lists_errors(self):
        e = ImportAbortedError(["Row 2: bad", "Row 3: worse"])
        assert str(e) == "Import aborted:\n  - Row 2: bad\n  - Row 3: worse"
        assert e.errors == ["Row 2: bad", "Row 3: worse"]
