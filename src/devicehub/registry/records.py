"""Reading and writing device records as JSON properties."""

import json
import logging
from typing import Any

from devicehub.store.base import ConfigurationStore

logger = logging.getLogger(__name__)

DEFAULT_PROPERTY_PREFIX = "Device"
EMPTY_RECORDS = "[]"


def property_key(prefix: str, device_type: str) -> str:
    """Return the store key holding the records of ``device_type``."""
    return f"{prefix}{device_type}"


def read_records(store: ConfigurationStore, owner_id: str, key: str) -> list[dict[str, Any]]:
    """Decode the record list stored under ``key``.

    A property that was never registered holds no devices.
    """
    try:
        raw = store.get_property(owner_id, key)
    except KeyError:
        return []
    records = json.loads(raw) if raw else []
    if not isinstance(records, list):
        raise ValueError(f"Property {key} must hold a JSON array, got {type(records).__name__}")
    for position, record in enumerate(records):
        if not isinstance(record, dict):
            raise ValueError(
                f"Property {key} must hold JSON objects, "
                f"got {type(record).__name__} at index {position}"
            )
    return records


def write_records(
    store: ConfigurationStore, owner_id: str, key: str, records: list[dict[str, Any]]
) -> None:
    store.set_property(owner_id, key, json.dumps(records))


def canonical_id(value: Any) -> str:
    """Return the comparable form of an identifier.

    Numeric identifiers compare by value, so "5", "05", 5 and 5.0 are the
    same device. Anything else compares as text.
    """
    if value is None:
        return ""
    text = str(value).strip()
    try:
        return str(int(text))
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return text
    if number.is_integer():
        return str(int(number))
    return text


def record_id(record: dict[str, Any]) -> str:
    """Return the record's canonical identifier, ``""`` when unassigned."""
    return canonical_id(record.get("ID"))
