"""Configuration form sections contributed by device types."""

import copy
from typing import Any

from devicehub.devices.base import DeviceType

BASE_COLUMNS = [
    {
        "label": "ID",
        "name": "ID",
        "width": "35px",
        "add": "",
        "save": True,
    },
    {
        "label": "Name",
        "name": "Name",
        "width": "auto",
        "add": "",
        "edit": {"type": "ValidationTextBox"},
    },
    # Device-type specific columns are inserted here
    {
        "label": "Status",
        "name": "Status",
        "width": "200px",
        "add": "-",
    },
]
EXTRA_COLUMNS_INDEX = 2
ROW_COUNT = 5


def order_by_position(device_types: list[DeviceType]) -> list[DeviceType]:
    """Sort device types by display position, ties kept in registration order."""
    indexed = list(enumerate(device_types))
    indexed.sort(key=lambda item: (item[1].get_position(), item[0]))
    return [device_type for _, device_type in indexed]


def build_columns(extra: list[dict[str, Any]]) -> list[dict[str, Any]]:
    columns = copy.deepcopy(BASE_COLUMNS)
    columns[EXTRA_COLUMNS_INDEX:EXTRA_COLUMNS_INDEX] = copy.deepcopy(extra)
    return columns


def build_section(
    device_type: DeviceType, list_name: str, records: list[dict[str, Any]]
) -> dict[str, Any]:
    """Build the expansion panel listing all devices of one type."""
    return {
        "type": "ExpansionPanel",
        "caption": device_type.get_caption(),
        "items": [
            {
                "type": "List",
                "name": list_name,
                "rowCount": ROW_COUNT,
                "add": True,
                "delete": True,
                "sort": {"column": "Name", "direction": "ascending"},
                "columns": build_columns(device_type.get_columns()),
                "values": [{"Status": device_type.get_status(record)} for record in records],
            }
        ],
    }
