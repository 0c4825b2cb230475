"""Light dimmer device type: on/off plus brightness from one variable."""

import logging
from typing import Any

from devicehub.devices.base import (
    COMMAND_BRIGHTNESS_ABSOLUTE,
    COMMAND_ON_OFF,
    DEVICE_TYPE_LIGHT,
    ERROR_DEVICE_OFFLINE,
    ERROR_NOT_SUPPORTED,
    ERROR_VALUE_OUT_OF_RANGE,
    TRAIT_BRIGHTNESS,
    TRAIT_ON_OFF,
    DeviceType,
)
from devicehub.variables import VariableNotFoundError

logger = logging.getLogger(__name__)

MAX_BRIGHTNESS = 100


class LightDimmer(DeviceType):
    """Light backed by an integer brightness variable (0-100).

    Brightness 0 means off. Turning the light on from 0 restores full
    brightness; turning it off sets 0.
    """

    VARIABLE_KEY = "BrightnessOnOffID"

    @property
    def name(self) -> str:
        return "LightDimmer"

    def sync(self, record: dict[str, Any]) -> dict[str, Any]:
        return self._descriptor(record, DEVICE_TYPE_LIGHT, [TRAIT_BRIGHTNESS, TRAIT_ON_OFF])

    def query(self, record: dict[str, Any]) -> dict[str, Any]:
        try:
            brightness = int(self._variables.get(record.get(self.VARIABLE_KEY)))
        except (VariableNotFoundError, TypeError, ValueError):
            return {"online": False}
        return {"online": True, "on": brightness > 0, "brightness": brightness}

    def execute(
        self, record: dict[str, Any], command: str, params: dict[str, Any]
    ) -> dict[str, Any]:
        ref = record.get(self.VARIABLE_KEY)

        if command == COMMAND_ON_OFF:
            if "on" not in params:
                return self._error(record, ERROR_VALUE_OUT_OF_RANGE)
            if params["on"]:
                current = self.query(record)
                if not current["online"]:
                    return self._error(record, ERROR_DEVICE_OFFLINE)
                brightness = current["brightness"] or MAX_BRIGHTNESS
            else:
                brightness = 0
        elif command == COMMAND_BRIGHTNESS_ABSOLUTE:
            try:
                brightness = int(params["brightness"])
            except (KeyError, TypeError, ValueError):
                return self._error(record, ERROR_VALUE_OUT_OF_RANGE)
            if not 0 <= brightness <= MAX_BRIGHTNESS:
                return self._error(record, ERROR_VALUE_OUT_OF_RANGE)
        else:
            return self._error(record, ERROR_NOT_SUPPORTED)

        logger.info(f"Setting device {record['ID']} brightness to {brightness}")
        try:
            self._variables.set(ref, brightness)
        except VariableNotFoundError:
            return self._error(record, ERROR_DEVICE_OFFLINE)
        return self._success(record, self.query(record))

    def get_columns(self) -> list[dict[str, Any]]:
        return [
            {
                "label": "Variable",
                "name": self.VARIABLE_KEY,
                "width": "250px",
                "add": 0,
                "edit": {"type": "SelectVariable"},
            }
        ]

    def get_status(self, record: dict[str, Any]) -> str:
        return self._variable_status(record.get(self.VARIABLE_KEY), int, "Integer")

    def get_caption(self) -> str:
        return "Light (Dimmer)"

    def get_position(self) -> int:
        return 2

    def get_translations(self) -> dict[str, dict[str, str]]:
        return {
            "de": {
                "Light (Dimmer)": "Licht (Dimmer)",
                "Variable": "Variable",
                "OK": "OK",
                "Variable missing": "Variable fehlt",
                "Integer required": "Integer benötigt",
            }
        }
