"""Core data models for rack layouts.

``Rack`` and ``Device`` are the Pydantic records that flow between rack
files, templates, the CSV importer and the allocation engine. The engine
itself only reads three device fields (``id``, ``position_u``, ``size_u``)
and the rack's ``size_u``; everything else is carried through untouched.

The small dataclasses at the bottom are transient query results. They are
never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class PlacementStrategy(str, Enum):
    """How an automatic placement picks among the free spaces."""

    NEAREST_FIT = "nearest-fit"
    TOP_FIRST = "top-first"
    BOTTOM_FIRST = "bottom-first"
    CENTER_BIASED = "center-biased"
    COMPACT = "compact"  # same as nearest-fit


class CompactDirection(str, Enum):
    """Which end of the current layout is laid down first when compacting."""

    TOP = "top"
    BOTTOM = "bottom"


class Efficiency(str, Enum):
    """Utilization band of a rack."""

    LOW = "low"
    OPTIMAL = "optimal"
    HIGH = "high"
    CRITICAL = "critical"


class DeviceType(str, Enum):
    """Device categories accepted by the importer and templates."""

    ROUTER = "router"
    SWITCH = "switch"
    FIBER_SWITCH = "fiber_switch"
    SERVER = "server"
    FIREWALL = "firewall"
    LOAD_BALANCER = "load_balancer"
    STORAGE = "storage"
    PDU = "pdu"
    UPS = "ups"
    PATCH_PANEL = "patch_panel"
    KVM = "kvm"
    OTHER = "other"


class Device(BaseModel):
    """A piece of equipment occupying a contiguous run of rack units.

    The occupied interval is ``[position_u, position_u + size_u - 1]``.
    """

    id: str
    name: str = ""
    size_u: int = Field(default=1, ge=1)
    position_u: int = 1

    # Metadata the allocation engine never looks at
    manufacturer: str = "custom"
    device_type: str = DeviceType.OTHER.value
    model: str | None = None
    port_count: int | None = None
    power_watts: float | None = None
    notes: str | None = None

    @field_validator("device_type")
    @classmethod
    def normalize_device_type(cls, v: str) -> str:
        return v.strip().lower()

    @property
    def end_u(self) -> int:
        """Last unit occupied by the device (inclusive)."""
        return self.position_u + self.size_u - 1

    @property
    def label(self) -> str:
        """Name used in messages, falling back to the id."""
        return self.name or self.id


class Rack(BaseModel):
    """A rack enclosure.

    Only ``size_u`` matters to the allocation engine. ``devices`` is filled
    in by the file layer and templates; engine functions always take the
    device list as an explicit argument.
    """

    id: str = ""
    name: str = ""
    size_u: int = Field(default=42, ge=1)
    location: str | None = None
    description: str | None = None
    devices: list[Device] = Field(default_factory=list)

    @field_validator("devices")
    @classmethod
    def validate_unique_ids(cls, v: list[Device]) -> list[Device]:
        seen: set[str] = set()
        for device in v:
            if device.id in seen:
                raise ValueError(f"Duplicate device id '{device.id}'")
            seen.add(device.id)
        return v


@dataclass(frozen=True)
class FreeSpace:
    """A maximal run of unoccupied units."""

    start_u: int
    end_u: int
    size_u: int


@dataclass
class CollisionReport:
    """Every device a candidate interval overlaps."""

    has_collision: bool = False
    colliding_devices: list[Device] = field(default_factory=list)

    @property
    def names(self) -> list[str]:
        return [d.label for d in self.colliding_devices]


@dataclass
class DropZone:
    """Verdict on one candidate placement."""

    position_u: int
    size_u: int
    is_valid: bool
    reason: str | None = None
    colliding_devices: list[Device] = field(default_factory=list)


@dataclass
class Utilization:
    """Summary statistics for a rack's occupancy."""

    used: int
    available: int
    percentage: float
    efficiency: Efficiency


@dataclass
class SnapGuide:
    """A horizontal guide line shown while dragging."""

    position_u: int
    kind: str  # "top" or "bottom"
    label: str
