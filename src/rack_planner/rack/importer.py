"""Bulk CSV import and export of rack devices.

Every imported row goes through the same placement validation as a manual
edit. Rows that name a position are checked against the existing devices
plus the rows imported before them; rows without a position are placed
automatically. By default bad rows are collected and skipped; a strict
import stops at the first one.
"""

from __future__ import annotations

import csv
import io
import logging
import math
import uuid
from dataclasses import dataclass, field
from typing import Any

from rack_planner.exceptions import ImportAbortedError
from rack_planner.rack.definition import Device, DeviceType, PlacementStrategy, Rack
from rack_planner.rack.strategies import suggest_placement
from rack_planner.rack.validator import validate_placement

logger = logging.getLogger(__name__)

REQUIRED_HEADERS = ("name", "manufacturer", "device_type", "size_u")
CSV_HEADERS = (
    "name",
    "manufacturer",
    "device_type",
    "size_u",
    "power_watts",
    "port_count",
    "position_u",
)

_TEMPLATE_ROWS = (
    ("Core Switch 1", "cisco", "switch", "2", "300", "48", "1"),
    ("Edge Router", "juniper", "router", "1", "150", "24", "5"),
    ("Storage Server", "dell", "server", "4", "800", "4", "10"),
)


class RowError(Exception):
    """A single CSV row could not be imported."""


@dataclass
class ImportResult:
    """Outcome of a bulk import."""

    imported: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)
    devices: list[Device] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.failed == 0 and not self.errors


def parse_device_csv(content: str) -> list[dict[str, str]]:
    """Parse CSV text into row dicts keyed by lower-cased header.

    Raises:
        ValueError: If the header row or a required header is missing.
    """
    reader = csv.reader(io.StringIO(content.strip()))
    try:
        header_row = next(reader)
    except StopIteration:
        raise ValueError("CSV must contain a header row and at least one data row") from None

    headers = [h.strip().lower() for h in header_row]
    missing = [h for h in REQUIRED_HEADERS if h not in headers]
    if missing:
        raise ValueError(f"Missing required CSV headers: {', '.join(missing)}")

    rows = []
    for values in reader:
        values = [v.strip() for v in values]
        if not any(values):
            continue
        rows.append({h: (values[i] if i < len(values) else "") for i, h in enumerate(headers)})

    if not rows:
        raise ValueError("CSV must contain a header row and at least one data row")
    return rows


def _parse_int(raw: str, label: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise RowError(f"{label} must be an integer, got '{raw}'") from None


def _row_to_device(row: dict[str, str], max_size: int) -> tuple[Device, int | None]:
    """Build a Device from a row; the position is returned separately (None if unset)."""
    for key, label in (
        ("name", "Device name"),
        ("manufacturer", "Manufacturer"),
        ("device_type", "Device type"),
        ("size_u", "Size (U)"),
    ):
        if not row.get(key):
            raise RowError(f"{label} is required")

    device_type = row["device_type"].lower()
    valid_types = [t.value for t in DeviceType]
    if device_type not in valid_types:
        raise RowError(f"Invalid device type \"{row['device_type']}\". Valid types: {', '.join(valid_types)}")

    size_u = _parse_int(row["size_u"], "Size")
    if not 1 <= size_u <= max_size:
        raise RowError(f"Size must be between 1 and {max_size}U")

    power_watts = None
    if row.get("power_watts"):
        try:
            power_watts = float(row["power_watts"])
        except ValueError:
            power_watts = -1.0
        if not math.isfinite(power_watts) or power_watts < 0:
            raise RowError("Power draw must be a positive number")

    port_count = None
    if row.get("port_count"):
        port_count = _parse_int(row["port_count"], "Port count")
        if port_count < 0:
            raise RowError("Port count must be a non-negative integer")

    position_u = None
    if row.get("position_u"):
        position_u = _parse_int(row["position_u"], "Position")
        if position_u < 1:
            raise RowError("Position must be a positive integer")

    device = Device(
        id=f"import-{uuid.uuid4().hex[:12]}",
        name=row["name"],
        manufacturer=row["manufacturer"].lower(),
        device_type=device_type,
        size_u=size_u,
        position_u=position_u or 1,
        port_count=port_count,
        power_watts=power_watts,
    )
    return device, position_u


def import_devices(
    rows: list[dict[str, Any]],
    rack: Rack,
    existing_devices: list[Device] | None = None,
    *,
    strict: bool = False,
    strategy: PlacementStrategy | str = PlacementStrategy.NEAREST_FIT,
    max_device_size: int | None = None,
) -> ImportResult:
    """Validate rows and turn them into placed devices.

    Args:
        rows: Output of ``parse_device_csv``.
        rack: Target rack (only its size is used).
        existing_devices: Devices already in the rack.
        strict: Raise on the first bad row instead of collecting errors.
        strategy: Placement strategy for rows without a position.
        max_device_size: Largest accepted size; defaults to the rack size.

    Raises:
        ImportAbortedError: In strict mode, when a row is rejected.
    """
    existing = list(existing_devices or [])
    max_size = min(max_device_size or rack.size_u, rack.size_u)
    result = ImportResult()

    for index, row in enumerate(rows):
        line_number = index + 2  # header is line 1
        try:
            device, requested = _row_to_device(row, max_size)
            occupied = existing + result.devices

            if requested is None:
                position = suggest_placement(device.size_u, occupied, rack.size_u, strategy)
                if position is None:
                    raise RowError(f"Not enough space for a {device.size_u}U device")
                device = device.model_copy(update={"position_u": position})
            else:
                drop = validate_placement(requested, device.size_u, rack, occupied)
                if not drop.is_valid:
                    raise RowError(drop.reason or "Invalid placement")

            result.devices.append(device)
            result.imported += 1
        except RowError as e:
            message = f"Row {line_number}: {e}"
            result.failed += 1
            result.errors.append(message)
            logger.warning("Import rejected %s", message)
            if strict:
                raise ImportAbortedError(result.errors) from e

    logger.info("Imported %d device(s), %d failed", result.imported, result.failed)
    return result


def import_devices_csv(
    content: str,
    rack: Rack,
    existing_devices: list[Device] | None = None,
    **kwargs: Any,
) -> ImportResult:
    """Parse CSV text and import it; a malformed file becomes a single error."""
    try:
        rows = parse_device_csv(content)
    except (ValueError, csv.Error) as e:
        if kwargs.get("strict"):
            raise ImportAbortedError([str(e)]) from e
        return ImportResult(errors=[str(e)])
    return import_devices(rows, rack, existing_devices, **kwargs)


def export_devices_csv(devices: list[Device]) -> str:
    """Write devices in the import format, ordered by position."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for d in sorted(devices, key=lambda d: d.position_u):
        writer.writerow([
            d.name,
            d.manufacturer,
            d.device_type,
            d.size_u,
            "" if d.power_watts is None else f"{d.power_watts:g}",
            "" if d.port_count is None else d.port_count,
            d.position_u,
        ])
    return buf.getvalue()


def csv_template() -> str:
    """Example CSV showing every supported column."""
    lines = [",".join(CSV_HEADERS)]
    lines.extend(",".join(row) for row in _TEMPLATE_ROWS)
    return "\n".join(lines) + "\n"
