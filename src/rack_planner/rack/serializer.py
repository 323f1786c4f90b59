"""Serialize racks to/from YAML and JSON layout files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from rack_planner.exceptions import RackFileError
from rack_planner.rack.definition import Device, Rack

logger = logging.getLogger(__name__)

FILE_VERSION = "1.0"

# Device fields written only when set
_OPTIONAL_DEVICE_FIELDS = ("model", "port_count", "power_watts", "notes")


class RackSerializer:
    """Convert Rack to/from the layout file format.

    Layout files look like::

        version: "1.0"
        rack:
          name: Core
          size_u: 42
        devices:
          - id: core-router-1
            name: Core Router 1
            size_u: 2
            position_u: 1

    Loading never rejects an overlapping layout; ``validate_rack`` reports
    those so the user sees every problem at once.
    """

    @staticmethod
    def to_dict(rack: Rack) -> dict[str, Any]:
        rack_data: dict[str, Any] = {"name": rack.name, "size_u": rack.size_u}
        if rack.id:
            rack_data["id"] = rack.id
        if rack.location:
            rack_data["location"] = rack.location
        if rack.description:
            rack_data["description"] = rack.description

        devices = []
        for d in sorted(rack.devices, key=lambda d: d.position_u):
            entry: dict[str, Any] = {
                "id": d.id,
                "name": d.name,
                "size_u": d.size_u,
                "position_u": d.position_u,
                "manufacturer": d.manufacturer,
                "device_type": d.device_type,
            }
            for key in _OPTIONAL_DEVICE_FIELDS:
                value = getattr(d, key)
                if value is not None:
                    entry[key] = value
            devices.append(entry)

        return {"version": FILE_VERSION, "rack": rack_data, "devices": devices}

    @staticmethod
    def from_dict(data: Any, default_size: int = 42) -> Rack:
        if not data or not isinstance(data, dict):
            raise RackFileError("Invalid rack file: empty or not a mapping")

        rack_data = data.get("rack", {})
        if not isinstance(rack_data, dict):
            raise RackFileError("Invalid rack file: 'rack' must be a mapping")
        device_list = data.get("devices", [])
        if not isinstance(device_list, list):
            raise RackFileError("Invalid rack file: 'devices' must be a list")

        devices = []
        for index, device_data in enumerate(device_list, 1):
            if not isinstance(device_data, dict):
                raise RackFileError(f"Invalid rack file: device #{index} is not a mapping")
            device_data = dict(device_data)
            device_data.setdefault("id", f"device-{index}")
            try:
                devices.append(Device(**device_data))
            except ValidationError as e:
                raise RackFileError(f"Invalid device #{index}: {e}") from e

        try:
            return Rack(
                id=rack_data.get("id", ""),
                name=rack_data.get("name", ""),
                size_u=rack_data.get("size_u", default_size),
                location=rack_data.get("location"),
                description=rack_data.get("description"),
                devices=devices,
            )
        except ValidationError as e:
            raise RackFileError(f"Invalid rack: {e}") from e

    @staticmethod
    def to_yaml(rack: Rack) -> str:
        """Serialize a Rack to YAML for version control."""
        return yaml.dump(RackSerializer.to_dict(rack), default_flow_style=False, sort_keys=False, width=120)

    @staticmethod
    def from_yaml(yaml_str: str, default_size: int = 42) -> Rack:
        """Deserialize a Rack from YAML."""
        try:
            data = yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            raise RackFileError(f"Invalid YAML: {e}") from e
        return RackSerializer.from_dict(data, default_size=default_size)

    @staticmethod
    def to_json(rack: Rack) -> str:
        return json.dumps(RackSerializer.to_dict(rack), indent=2)

    @staticmethod
    def load(path: Path, default_size: int = 42) -> Rack:
        """Read a rack file; ``.json`` files are parsed as JSON, anything else as YAML."""
        if not path.exists():
            raise RackFileError(f"Rack file not found: {path}")
        content = path.read_text()

        if path.suffix == ".json":
            try:
                data = json.loads(content)
            except json.JSONDecodeError as e:
                raise RackFileError(f"Invalid JSON in {path}: {e}") from e
            rack = RackSerializer.from_dict(data, default_size=default_size)
        else:
            rack = RackSerializer.from_yaml(content, default_size=default_size)

        logger.debug("Loaded rack '%s' (%dU, %d devices) from %s", rack.name, rack.size_u, len(rack.devices), path)
        return rack

    @staticmethod
    def dump(rack: Rack, path: Path) -> None:
        """Write a rack file, choosing JSON or YAML from the suffix."""
        content = RackSerializer.to_json(rack) if path.suffix == ".json" else RackSerializer.to_yaml(rack)
        path.write_text(content)
        logger.info("Wrote rack '%s' to %s", rack.name, path)
