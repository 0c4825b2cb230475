"""Identifier allocation across all device types."""

import logging
from typing import Any, Optional

from devicehub.errors import DuplicateDeviceIdError, RepairNotConvergedError
from devicehub.registry.records import (
    DEFAULT_PROPERTY_PREFIX,
    property_key,
    read_records,
    record_id,
    write_records,
)
from devicehub.store.base import ConfigurationStore

logger = logging.getLogger(__name__)

# First pass assigns, second pass must find nothing left to do
MAX_REPAIR_PASSES = 3


def collect_ids(snapshot: dict[str, list[dict[str, Any]]]) -> list[str]:
    """Return every assigned identifier in the snapshot.

    Args:
        snapshot: Records per device type, in registration order

    Raises:
        DuplicateDeviceIdError: If two records share a non-empty identifier
    """
    seen: set[str] = set()
    ids: list[str] = []
    for records in snapshot.values():
        for record in records:
            device_id = record_id(record)
            if device_id == "":
                continue
            if device_id in seen:
                raise DuplicateDeviceIdError(device_id)
            seen.add(device_id)
            ids.append(device_id)
    return ids


def _numeric_id(device_id: str) -> Optional[int]:
    try:
        return int(device_id)
    except ValueError:
        return None


class IdentifierAllocator:
    """Assigns identifiers to device records that lack one.

    Identifiers are unique across every device type of one owner. Repair
    reruns until a pass writes nothing, so the result is a fixed point, and
    then applies the changes once. If applying re-enters ``repair`` (the
    host validates again after a commit), the nested call only verifies.
    """

    def __init__(
        self,
        store: ConfigurationStore,
        owner_id: str,
        property_prefix: str = DEFAULT_PROPERTY_PREFIX,
    ):
        self._store = store
        self._owner_id = owner_id
        self._property_prefix = property_prefix
        self._applying = False

    def read_snapshot(self, device_types: list[str]) -> dict[str, list[dict[str, Any]]]:
        """Read the current records of every device type."""
        return {
            device_type: read_records(
                self._store, self._owner_id, property_key(self._property_prefix, device_type)
            )
            for device_type in device_types
        }

    def repair(self, device_types: list[str]) -> int:
        """Give every record a unique identifier and persist the result.

        Args:
            device_types: Registered device type names, in registration order

        Returns:
            Number of identifiers assigned

        Raises:
            DuplicateDeviceIdError: If the configuration holds a duplicate
            RepairNotConvergedError: If passes keep writing changes
        """
        assigned = 0
        for _ in range(MAX_REPAIR_PASSES):
            count = self._repair_pass(device_types)
            if count == 0:
                break
            assigned += count
        else:
            raise RepairNotConvergedError(MAX_REPAIR_PASSES)

        if assigned and not self._applying:
            logger.info(f"Assigned {assigned} device identifier(s), applying changes")
            self._applying = True
            try:
                self._store.apply_changes(self._owner_id)
            finally:
                self._applying = False
        return assigned

    def _repair_pass(self, device_types: list[str]) -> int:
        snapshot = self.read_snapshot(device_types)
        ids = collect_ids(snapshot)

        highest = 0
        for device_id in ids:
            number = _numeric_id(device_id)
            if number is not None and number > highest:
                highest = number

        assigned = 0
        modified = []
        for device_type, records in snapshot.items():
            changed = False
            for record in records:
                if record_id(record) == "":
                    highest += 1
                    record["ID"] = str(highest)
                    assigned += 1
                    changed = True
            if changed:
                modified.append(device_type)

        # Written only after the whole snapshot validated
        for device_type in modified:
            write_records(
                self._store,
                self._owner_id,
                property_key(self._property_prefix, device_type),
                snapshot[device_type],
            )
            logger.debug(f"Wrote repaired records for {device_type}")
        return assigned
