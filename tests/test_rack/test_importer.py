"""Tests for rack_planner.rack.importer — CSV bulk import and export."""

from __future__ import annotations

import pytest

from rack_planner.exceptions import ImportAbortedError
from rack_planner.rack.definition import Device, Rack
from rack_planner.rack.importer import (
    csv_template,
    export_devices_csv,
    import_devices,
    import_devices_csv,
    parse_device_csv,
)
from rack_planner.rack.occupancy import find_overlapping_pairs

HEADER = "name,manufacturer,device_type,size_u,position_u"


@pytest.fixture
def rack():
    return Rack(name="Lab", size_u=10)


@pytest.fixture
def existing():
    return [Device(id="rtr", name="Router", size_u=2, position_u=1)]


class TestParseDeviceCsv:
    def test_headers_are_case_insensitive(self):
        rows = parse_device_csv("Name,Manufacturer,Device_Type,Size_U\nsw,cisco,switch,1\n")
        assert rows == [{"name": "sw", "manufacturer": "cisco", "device_type": "switch", "size_u": "1"}]

    def test_blank_lines_skipped(self):
        rows = parse_device_csv(f"{HEADER}\nA,x,switch,1,3\n,,,,\nB,x,switch,1,4\n")
        assert [r["name"] for r in rows] == ["A", "B"]

    def test_short_rows_padded(self):
        rows = parse_device_csv(f"{HEADER}\nA,x,switch,1\n")
        assert rows[0]["position_u"] == ""

    def test_missing_required_header(self):
        with pytest.raises(ValueError, match="Missing required CSV headers: size_u"):
            parse_device_csv("name,manufacturer,device_type\nA,x,switch\n")

    def test_header_only(self):
        with pytest.raises(ValueError, match="at least one data row"):
            parse_device_csv(HEADER)

    def test_empty_content(self):
        with pytest.raises(ValueError, match="header row"):
            parse_device_csv("")


class TestImportDevices:
    def test_explicit_and_automatic_positions(self, rack, existing):
        content = f"{HEADER}\nSwitch,cisco,switch,1,3\nServer,dell,server,2,\n"
        result = import_devices_csv(content, rack, existing)

        assert result.success
        assert result.imported == 2
        assert [(d.name, d.position_u) for d in result.devices] == [("Switch", 3), ("Server", 4)]

    def test_imported_devices_never_overlap(self, rack, existing):
        content = f"{HEADER}\nA,x,server,2,\nB,x,server,3,\nC,x,switch,1,\n"
        result = import_devices_csv(content, rack, existing)

        assert result.imported == 3
        assert find_overlapping_pairs(existing + result.devices) == []

    def test_collision_with_existing_device(self, rack, existing):
        result = import_devices_csv(f"{HEADER}\nSwitch,cisco,switch,1,2\n", rack, existing)

        assert not result.success
        assert result.imported == 0
        assert result.errors == ["Row 2: Collision with Router"]

    def test_collision_with_earlier_row(self, rack):
        content = f"{HEADER}\nA,x,server,2,5\nB,x,switch,1,6\n"
        result = import_devices_csv(content, rack)

        assert result.imported == 1
        assert result.errors == ["Row 3: Collision with A"]

    def test_out_of_bounds_row(self, rack):
        result = import_devices_csv(f"{HEADER}\nA,x,server,2,10\n", rack)
        assert result.errors == ["Row 2: Device exceeds rack capacity (10U)"]

    def test_partial_import_keeps_good_rows(self, rack):
        content = f"{HEADER}\nGood,x,switch,1,1\nBad,x,switch,0,2\nAlso Good,x,switch,1,3\n"
        result = import_devices_csv(content, rack)

        assert result.imported == 2
        assert result.failed == 1
        assert result.errors == ["Row 3: Size must be between 1 and 10U"]

    def test_strict_import_aborts(self, rack):
        content = f"{HEADER}\nGood,x,switch,1,1\nBad,x,toaster,1,2\nNever,x,switch,1,3\n"
        with pytest.raises(ImportAbortedError) as exc_info:
            import_devices_csv(content, rack, strict=True)

        assert len(exc_info.value.errors) == 1
        assert exc_info.value.errors[0].startswith('Row 3: Invalid device type "toaster"')

    def test_no_space_for_automatic_row(self):
        full = Rack(size_u=2)
        existing = [Device(id="a", size_u=2, position_u=1)]
        result = import_devices_csv(f"{HEADER}\nA,x,switch,1,\n", full, existing)
        assert result.errors == ["Row 2: Not enough space for a 1U device"]

    def test_bottom_first_strategy(self, rack):
        result = import_devices_csv(f"{HEADER}\nA,x,switch,2,\n", rack, strategy="bottom-first")
        assert result.devices[0].position_u == 9

    def test_max_device_size(self, rack):
        result = import_devices_csv(f"{HEADER}\nA,x,server,5,1\n", rack, max_device_size=4)
        assert result.errors == ["Row 2: Size must be between 1 and 4U"]

    @pytest.mark.parametrize(
        "row,message",
        [
            (",x,switch,1,1", "Device name is required"),
            ("A,,switch,1,1", "Manufacturer is required"),
            ("A,x,switch,two,1", "Size must be an integer, got 'two'"),
            ("A,x,switch,1,0", "Position must be a positive integer"),
            ("A,x,switch,1,top", "Position must be an integer, got 'top'"),
        ],
    )
    def test_row_validation_messages(self, rack, row, message):
        result = import_devices_csv(f"{HEADER}\n{row}\n", rack)
        assert result.errors == [f"Row 2: {message}"]

    def test_optional_columns(self, rack):
        content = "name,manufacturer,device_type,size_u,power_watts,port_count\nA,Cisco,Switch,1,150.5,48\n"
        device = import_devices_csv(content, rack).devices[0]

        assert device.power_watts == 150.5
        assert device.port_count == 48
        assert device.manufacturer == "cisco"
        assert device.device_type == "switch"

    @pytest.mark.parametrize(
        "power,ports,message",
        [
            ("-5", "", "Power draw must be a positive number"),
            ("lots", "", "Power draw must be a positive number"),
            ("nan", "", "Power draw must be a positive number"),
            ("inf", "", "Power draw must be a positive number"),
            ("-infinity", "", "Power draw must be a positive number"),
            ("", "-1", "Port count must be a non-negative integer"),
        ],
    )
    def test_optional_column_errors(self, rack, power, ports, message):
        content = f"name,manufacturer,device_type,size_u,power_watts,port_count\nA,x,switch,1,{power},{ports}\n"
        assert import_devices_csv(content, rack).errors == [f"Row 2: {message}"]

    def test_ids_are_unique(self, rack):
        content = f"{HEADER}\nA,x,switch,1,\nB,x,switch,1,\n"
        ids = [d.id for d in import_devices_csv(content, rack).devices]
        assert len(set(ids)) == 2
        assert all(i.startswith("import-") for i in ids)

    def test_parse_error_is_single_error(self, rack):
        result = import_devices_csv("", rack)
        assert not result.success
        assert result.imported == 0
        assert len(result.errors) == 1

    def test_parse_error_strict(self, rack):
        with pytest.raises(ImportAbortedError):
            import_devices_csv("name\nA\n", rack, strict=True)

    def test_accepts_pre_parsed_rows(self, rack):
        rows = [{"name": "A", "manufacturer": "x", "device_type": "pdu", "size_u": "1"}]
        result = import_devices(rows, rack)
        assert result.devices[0].position_u == 1


class TestExportAndTemplate:
    def test_export_sorted_by_position(self):
        devices = [
            Device(id="b", name="B", size_u=1, position_u=9, device_type="switch"),
            Device(id="a", name="A", size_u=2, position_u=1, power_watts=350.0, port_count=4),
        ]
        lines = export_devices_csv(devices).splitlines()

        assert lines[0] == "name,manufacturer,device_type,size_u,power_watts,port_count,position_u"
        assert lines[1] == "A,custom,other,2,350,4,1"
        assert lines[2] == "B,custom,switch,1,,,9"

    def test_export_can_be_reimported(self):
        devices = [Device(id="a", name="A", size_u=2, position_u=3, device_type="server")]
        result = import_devices_csv(export_devices_csv(devices), Rack(size_u=10))
        assert [(d.name, d.position_u, d.size_u) for d in result.devices] == [("A", 3, 2)]

    def test_template_imports_cleanly(self):
        result = import_devices_csv(csv_template(), Rack(size_u=42))
        assert result.success
        assert result.imported == 3
