"""Device-type registry routing assistant requests to handlers."""

import logging
from typing import Any, Optional

from devicehub.devices.base import STATUS_ERROR, DeviceType
from devicehub.errors import DuplicateDeviceTypeError, RegistrationClosedError
from devicehub.registry.form import build_section, order_by_position
from devicehub.registry.id_allocator import IdentifierAllocator, collect_ids
from devicehub.registry.records import (
    DEFAULT_PROPERTY_PREFIX,
    EMPTY_RECORDS,
    canonical_id,
    property_key,
    record_id,
)
from devicehub.registry.translations import BASE_TRANSLATIONS, merge_translations
from devicehub.store.base import ConfigurationStore

logger = logging.getLogger(__name__)

ERROR_DEVICE_NOT_FOUND = "deviceNotFound"


class DeviceTypeRegistry:
    """Registry of device-type handlers for one configuration owner.

    Handlers are registered once at startup, in the order that decides how
    devices are listed and how identifiers are assigned. The first sync,
    query, execute or form request that reads a valid configuration closes
    registration.

    Every request reads the configuration from the store again; nothing is
    cached between calls.
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
        self._device_types: dict[str, DeviceType] = {}
        self._allocator = IdentifierAllocator(store, owner_id, property_prefix)
        self._closed = False

    def register(self, device_type: DeviceType) -> None:
        """Register a device-type handler.

        Args:
            device_type: Handler implementing DeviceType

        Raises:
            DuplicateDeviceTypeError: If a handler with the same name is registered
            RegistrationClosedError: If dispatch has already started
        """
        name = device_type.name
        if self._closed:
            raise RegistrationClosedError(name)
        if name in self._device_types:
            raise DuplicateDeviceTypeError(name)
        self._device_types[name] = device_type
        logger.info(f"Registered device type {name}")

    def get(self, name: str) -> Optional[DeviceType]:
        """Get a handler by device type name, or None if not registered."""
        return self._device_types.get(name)

    def list_device_types(self) -> list[str]:
        """List registered device type names in registration order."""
        return list(self._device_types.keys())

    def property_key(self, name: str) -> str:
        """Return the store key holding the records of a device type."""
        return property_key(self._property_prefix, name)

    @property
    def is_closed(self) -> bool:
        """Check if registration is closed because dispatch has started."""
        return self._closed

    def __len__(self) -> int:
        return len(self._device_types)

    def __contains__(self, name: str) -> bool:
        return name in self._device_types

    # Configuration lifecycle

    def register_properties(self) -> None:
        """Declare an empty record list for every registered device type."""
        for name in self._device_types:
            self._store.register_property(self._owner_id, self.property_key(name), EMPTY_RECORDS)

    def update_properties(self) -> int:
        """Validate the configuration and assign missing identifiers.

        Call this whenever the configuration changed.

        Returns:
            Number of identifiers assigned

        Raises:
            DuplicateDeviceIdError: If two records share an identifier
        """
        return self._allocator.repair(self.list_device_types())

    def _load_configuration(self) -> list[tuple[DeviceType, list[dict[str, Any]]]]:
        """Read and validate the records of every device type.

        Raises before any handler sees inconsistent configuration.
        """
        snapshot = self._allocator.read_snapshot(self.list_device_types())
        collect_ids(snapshot)
        # Only a dispatch that got past validation closes registration
        self._closed = True
        return [(self._device_types[name], records) for name, records in snapshot.items()]

    def _find(self, device_id: str) -> Optional[tuple[DeviceType, dict[str, Any]]]:
        wanted = canonical_id(device_id)
        configuration = self._load_configuration()
        # Unassigned records are not addressable
        if wanted == "":
            return None
        for device_type, records in configuration:
            for record in records:
                if record_id(record) == wanted:
                    return device_type, record
        return None

    # Assistant requests

    def sync_all(self) -> list[dict[str, Any]]:
        """Describe every configured device.

        Returns:
            Device descriptors, grouped by device type in registration order
            and in stored record order within a type
        """
        devices = []
        for device_type, records in self._load_configuration():
            for record in records:
                devices.append(device_type.sync(record))
        logger.debug(f"Synced {len(devices)} device(s)")
        return devices

    def query_one(self, device_id: str) -> dict[str, Any]:
        """Return the live state of one device.

        Unknown identifiers are reported as an offline device.
        """
        match = self._find(device_id)
        if match is None:
            logger.info(f"Query for unknown device {device_id}, reporting offline")
            return {"online": False}

        device_type, record = match
        logger.debug(f"Routing query for {device_id} to {device_type.name}")
        return device_type.query(record)

    def execute_one(
        self, device_id: str, command: str, params: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """Execute a command on one device.

        Returns:
            The handler's result, or a deviceNotFound error result
        """
        match = self._find(device_id)
        if match is None:
            logger.warning(f"Execute {command} for unknown device {device_id}")
            return {
                "id": device_id,
                "status": STATUS_ERROR,
                "errorCode": ERROR_DEVICE_NOT_FOUND,
            }

        device_type, record = match
        logger.debug(f"Routing {command} for {device_id} to {device_type.name}")
        return device_type.execute(record, command, params or {})

    # Configuration form

    def build_form(self) -> list[dict[str, Any]]:
        """Build one configuration form section per device type."""
        configuration = {
            device_type.name: records for device_type, records in self._load_configuration()
        }
        return [
            build_section(
                device_type, self.property_key(device_type.name), configuration[device_type.name]
            )
            for device_type in order_by_position(list(self._device_types.values()))
        ]

    def build_translations(self) -> dict[str, dict[str, str]]:
        """Merge the base translations with every device type's translations.

        Raises:
            TranslationConflictError: If two tables translate a phrase differently
        """
        return merge_translations(
            BASE_TRANSLATIONS,
            (device_type.get_translations() for device_type in self._device_types.values()),
        )
