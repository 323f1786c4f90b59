"""Tests for rack_planner.rack.gaps — free-space discovery."""

from __future__ import annotations

import random

import pytest

from rack_planner.exceptions import DegenerateInputError
from rack_planner.rack.definition import Device, FreeSpace
from rack_planner.rack.gaps import find_available_spaces, largest_free_space, total_free_units


def _dev(id: str, position_u: int, size_u: int) -> Device:
    return Device(id=id, position_u=position_u, size_u=size_u)


class TestFindAvailableSpaces:
    def test_empty_rack_is_one_space(self):
        assert find_available_spaces([], 42) == [FreeSpace(1, 42, 42)]

    def test_two_gaps_between_devices(self):
        devices = [_dev("a", 1, 2), _dev("b", 5, 2)]
        assert find_available_spaces(devices, 10) == [FreeSpace(3, 4, 2), FreeSpace(7, 10, 4)]

    def test_full_rack_has_no_space(self):
        assert find_available_spaces([_dev("a", 1, 4)], 4) == []

    def test_space_at_start(self):
        assert find_available_spaces([_dev("a", 3, 2)], 4) == [FreeSpace(1, 2, 2)]

    def test_exclude_id_frees_units(self):
        devices = [_dev("a", 1, 2), _dev("b", 5, 2)]
        spaces = find_available_spaces(devices, 10, exclude_id="b")
        assert spaces == [FreeSpace(3, 10, 8)]

    def test_input_order_does_not_matter(self):
        devices = [_dev("b", 5, 2), _dev("a", 1, 2)]
        assert find_available_spaces(devices, 10)[0].start_u == 3

    def test_degenerate_rack_size(self):
        with pytest.raises(DegenerateInputError):
            find_available_spaces([], 0)

    def test_oversized_device_only_scans_rack(self):
        devices = [_dev("a", 1, 2), _dev("huge", 5, 1_000_000_000)]
        assert find_available_spaces(devices, 10) == [FreeSpace(3, 4, 2)]


class TestConservation:
    @pytest.mark.parametrize("seed", range(20))
    def test_free_plus_used_equals_rack_size(self, seed):
        rng = random.Random(seed)
        rack_size = rng.randint(1, 48)
        devices = []
        u = 1
        while u <= rack_size:
            u += rng.randint(0, 3)
            size = rng.randint(1, 4)
            if u + size - 1 > rack_size:
                break
            devices.append(_dev(f"d{u}", u, size))
            u += size

        spaces = find_available_spaces(devices, rack_size)
        used = sum(d.size_u for d in devices)
        assert sum(s.size_u for s in spaces) + used == rack_size
        for s in spaces:
            assert s.size_u == s.end_u - s.start_u + 1
        assert [s.start_u for s in spaces] == sorted(s.start_u for s in spaces)


class TestHelpers:
    def test_total_free_units(self):
        assert total_free_units([_dev("a", 1, 2)], 10) == 8

    def test_largest_free_space(self):
        devices = [_dev("a", 3, 1), _dev("b", 6, 1)]
        assert largest_free_space(devices, 10) == FreeSpace(7, 10, 4)

    def test_largest_free_space_full_rack(self):
        assert largest_free_space([_dev("a", 1, 2)], 2) is None
