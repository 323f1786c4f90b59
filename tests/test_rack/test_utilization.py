"""Tests for rack_planner.rack.utilization."""

from __future__ import annotations

import pytest

from rack_planner.exceptions import DegenerateInputError
from rack_planner.rack.definition import Device, Efficiency
from rack_planner.rack.utilization import calculate_utilization, classify_efficiency


def _dev(id: str, position_u: int, size_u: int) -> Device:
    return Device(id=id, position_u=position_u, size_u=size_u)


class TestCalculateUtilization:
    def test_half_full_rack(self):
        devices = [_dev("a", 1, 1), _dev("b", 3, 1), _dev("c", 5, 1)]
        util = calculate_utilization(devices, 6)
        assert util.used == 3
        assert util.available == 3
        assert util.percentage == 50.0
        assert util.efficiency is Efficiency.OPTIMAL

    def test_empty_rack(self):
        util = calculate_utilization([], 42)
        assert util.used == 0
        assert util.available == 42
        assert util.percentage == 0
        assert util.efficiency is Efficiency.LOW

    def test_percentage_rounded_to_two_places(self):
        util = calculate_utilization([_dev("a", 1, 1)], 3)
        assert util.percentage == 33.33

    def test_used_plus_available_is_rack_size(self):
        devices = [_dev("a", 1, 4), _dev("b", 10, 7)]
        util = calculate_utilization(devices, 42)
        assert util.used + util.available == 42

    def test_degenerate_rack(self):
        with pytest.raises(DegenerateInputError):
            calculate_utilization([], 0)


class TestClassifyEfficiency:
    @pytest.mark.parametrize(
        "percentage,expected",
        [
            (0, Efficiency.LOW),
            (29.99, Efficiency.LOW),
            (30, Efficiency.OPTIMAL),
            (79.99, Efficiency.OPTIMAL),
            (80, Efficiency.HIGH),
            (94.99, Efficiency.HIGH),
            (95, Efficiency.CRITICAL),
            (100, Efficiency.CRITICAL),
        ],
    )
    def test_band_boundaries(self, percentage, expected):
        assert classify_efficiency(percentage) is expected
