"""Base device-type interface for smart home assistant handlers."""

from abc import ABC, abstractmethod
from typing import Any

from devicehub.variables import VariableSource

DEVICE_TYPE_LIGHT = "action.devices.types.LIGHT"

TRAIT_ON_OFF = "action.devices.traits.OnOff"
TRAIT_BRIGHTNESS = "action.devices.traits.Brightness"
TRAIT_COLOR_SPECTRUM = "action.devices.traits.ColorSpectrum"

COMMAND_ON_OFF = "action.devices.commands.OnOff"
COMMAND_BRIGHTNESS_ABSOLUTE = "action.devices.commands.BrightnessAbsolute"
COMMAND_COLOR_ABSOLUTE = "action.devices.commands.ColorAbsolute"

STATUS_SUCCESS = "SUCCESS"
STATUS_ERROR = "ERROR"
STATUS_PENDING = "PENDING"

ERROR_NOT_SUPPORTED = "notSupported"
ERROR_DEVICE_OFFLINE = "deviceOffline"
ERROR_VALUE_OUT_OF_RANGE = "valueOutOfRange"


class DeviceType(ABC):
    """Abstract base class for all device-type handlers.

    A handler describes one class of device (light switch, dimmer, ...).
    It holds no per-device state: every operation receives the configured
    device record and resolves live values through the variable source.
    This lets the registry stay agnostic of what any device actually does.
    """

    def __init__(self, variables: VariableSource):
        self._variables = variables

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the device type name (e.g. 'LightSwitch')."""
        pass

    @abstractmethod
    def sync(self, record: dict[str, Any]) -> dict[str, Any]:
        """Describe a configured device.

        Args:
            record: Device record with at least ``ID`` and ``Name``

        Returns:
            dict with keys ``id``, ``type``, ``traits``, ``name``,
            ``willReportState`` and optionally ``attributes``
        """
        pass

    @abstractmethod
    def query(self, record: dict[str, Any]) -> dict[str, Any]:
        """Return the current state of a device.

        Must not raise: an unreachable live value yields ``{"online": False}``.
        """
        pass

    @abstractmethod
    def execute(
        self, record: dict[str, Any], command: str, params: dict[str, Any]
    ) -> dict[str, Any]:
        """Execute a command on a device.

        Args:
            record: Device record
            command: Command name (e.g. 'action.devices.commands.OnOff')
            params: Command parameters

        Returns:
            dict with keys:
                - ids: list with the device identifier
                - status: SUCCESS, ERROR or PENDING
                - states: new state on success
                - errorCode: reason on failure
        """
        pass

    @abstractmethod
    def get_columns(self) -> list[dict[str, Any]]:
        """Return extra configuration form columns for this type."""
        pass

    @abstractmethod
    def get_status(self, record: dict[str, Any]) -> str:
        """Return a short status string for the configuration list."""
        pass

    @abstractmethod
    def get_caption(self) -> str:
        """Return the caption of this type's configuration section."""
        pass

    @abstractmethod
    def get_position(self) -> int:
        """Return the display position among device types."""
        pass

    @abstractmethod
    def get_translations(self) -> dict[str, dict[str, str]]:
        """Return translations as {language: {phrase: translation}}."""
        pass

    # Helpers shared by the concrete handlers

    @staticmethod
    def _descriptor(record: dict[str, Any], device_type: str, traits: list[str]) -> dict[str, Any]:
        return {
            "id": str(record["ID"]),
            "type": device_type,
            "traits": traits,
            "name": {"name": record["Name"]},
            "willReportState": False,
        }

    @staticmethod
    def _success(record: dict[str, Any], states: dict[str, Any]) -> dict[str, Any]:
        return {
            "ids": [str(record["ID"])],
            "status": STATUS_SUCCESS,
            "states": states,
        }

    @staticmethod
    def _error(record: dict[str, Any], error_code: str) -> dict[str, Any]:
        return {
            "ids": [str(record["ID"])],
            "status": STATUS_ERROR,
            "errorCode": error_code,
        }

    def _variable_status(self, ref: Any, expected: type, type_label: str) -> str:
        """Status string for a record's referenced variable."""
        if not self._variables.exists(ref):
            return "Variable missing"
        value = self._variables.get(ref)
        # bool is a subclass of int, so an integer slot must reject it explicitly
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            return f"{type_label} required"
        return "OK"
