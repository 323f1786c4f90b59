"""Shared test fixtures for rack-planner tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from rack_planner.config import reset_settings

SAMPLE_RACK_YAML = """version: "1.0"
rack:
  name: Lab Rack
  size_u: 10
  location: Lab 2
devices:
  - id: router
    name: Edge Router
    size_u: 2
    position_u: 1
    device_type: router
  - id: switch
    name: Access Switch
    size_u: 2
    position_u: 5
    device_type: switch
"""

OVERLAPPING_RACK_YAML = """rack:
  name: Broken
  size_u: 6
devices:
  - {id: a, name: Server A, size_u: 2, position_u: 1}
  - {id: b, name: Server B, size_u: 2, position_u: 2}
"""


@pytest.fixture(autouse=True)
def _reset_settings(monkeypatch):
    """Reset settings singleton between tests and keep the environment clean."""
    for var in (
        "RACK_PLANNER_DEFAULT_RACK_SIZE",
        "RACK_PLANNER_UNIT_PIXEL_HEIGHT",
        "RACK_PLANNER_DEFAULT_STRATEGY",
        "RACK_PLANNER_STRICT_IMPORT",
        "RACK_PLANNER_MAX_DEVICE_SIZE",
        "RACK_PLANNER_EXTRA_TEMPLATE_DIRS",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def rack_file(tmp_path: Path) -> Path:
    """A 10U rack with devices at 1-2U and 5-6U."""
    path = tmp_path / "lab.yml"
    path.write_text(SAMPLE_RACK_YAML)
    return path


@pytest.fixture
def overlapping_rack_file(tmp_path: Path) -> Path:
    path = tmp_path / "broken.yml"
    path.write_text(OVERLAPPING_RACK_YAML)
    return path
