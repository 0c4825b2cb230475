"""Color light device type: on/off plus RGB color from one variable."""

import logging
from typing import Any

from devicehub.devices.base import (
    COMMAND_COLOR_ABSOLUTE,
    COMMAND_ON_OFF,
    DEVICE_TYPE_LIGHT,
    ERROR_DEVICE_OFFLINE,
    ERROR_NOT_SUPPORTED,
    ERROR_VALUE_OUT_OF_RANGE,
    TRAIT_COLOR_SPECTRUM,
    TRAIT_ON_OFF,
    DeviceType,
)
from devicehub.variables import VariableNotFoundError

logger = logging.getLogger(__name__)

WHITE = 0xFFFFFF


class LightColor(DeviceType):
    """Light backed by an integer RGB variable; black (0) means off."""

    VARIABLE_KEY = "ColorSpectrumOnOffID"

    @property
    def name(self) -> str:
        return "LightColor"

    def sync(self, record: dict[str, Any]) -> dict[str, Any]:
        descriptor = self._descriptor(
            record, DEVICE_TYPE_LIGHT, [TRAIT_COLOR_SPECTRUM, TRAIT_ON_OFF]
        )
        descriptor["attributes"] = {"colorModel": "rgb"}
        return descriptor

    def query(self, record: dict[str, Any]) -> dict[str, Any]:
        try:
            color = int(self._variables.get(record.get(self.VARIABLE_KEY)))
        except (VariableNotFoundError, TypeError, ValueError):
            return {"online": False}
        return {"online": True, "on": color > 0, "color": {"spectrumRGB": color}}

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
                color = current["color"]["spectrumRGB"] or WHITE
            else:
                color = 0
        elif command == COMMAND_COLOR_ABSOLUTE:
            try:
                color = int(params["color"]["spectrumRGB"])
            except (KeyError, TypeError, ValueError):
                return self._error(record, ERROR_VALUE_OUT_OF_RANGE)
            if not 0 <= color <= WHITE:
                return self._error(record, ERROR_VALUE_OUT_OF_RANGE)
        else:
            return self._error(record, ERROR_NOT_SUPPORTED)

        logger.info(f"Setting device {record['ID']} color to #{color:06x}")
        try:
            self._variables.set(ref, color)
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
        return "Light (Color)"

    def get_position(self) -> int:
        return 3

    def get_translations(self) -> dict[str, dict[str, str]]:
        return {
            "de": {
                "Light (Color)": "Licht (Farbe)",
                "Variable": "Variable",
                "OK": "OK",
                "Variable missing": "Variable fehlt",
                "Integer required": "Integer benötigt",
            }
        }
