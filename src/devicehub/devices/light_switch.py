"""Light switch device type: a light that can only be turned on and off."""

import logging
from typing import Any

from devicehub.devices.base import (
    COMMAND_ON_OFF,
    DEVICE_TYPE_LIGHT,
    ERROR_DEVICE_OFFLINE,
    ERROR_NOT_SUPPORTED,
    ERROR_VALUE_OUT_OF_RANGE,
    TRAIT_ON_OFF,
    DeviceType,
)
from devicehub.variables import VariableNotFoundError

logger = logging.getLogger(__name__)


class LightSwitch(DeviceType):
    """Light backed by a boolean variable referenced by ``OnOffID``."""

    VARIABLE_KEY = "OnOffID"

    @property
    def name(self) -> str:
        return "LightSwitch"

    def sync(self, record: dict[str, Any]) -> dict[str, Any]:
        return self._descriptor(record, DEVICE_TYPE_LIGHT, [TRAIT_ON_OFF])

    def query(self, record: dict[str, Any]) -> dict[str, Any]:
        try:
            value = self._variables.get(record.get(self.VARIABLE_KEY))
        except VariableNotFoundError:
            return {"online": False}
        return {"online": True, "on": bool(value)}

    def execute(
        self, record: dict[str, Any], command: str, params: dict[str, Any]
    ) -> dict[str, Any]:
        if command != COMMAND_ON_OFF:
            return self._error(record, ERROR_NOT_SUPPORTED)
        if "on" not in params:
            return self._error(record, ERROR_VALUE_OUT_OF_RANGE)

        logger.info(f"Switching device {record['ID']} {'on' if params['on'] else 'off'}")
        try:
            self._variables.set(record.get(self.VARIABLE_KEY), bool(params["on"]))
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
        return self._variable_status(record.get(self.VARIABLE_KEY), bool, "Bool")

    def get_caption(self) -> str:
        return "Light (Switch)"

    def get_position(self) -> int:
        return 1

    def get_translations(self) -> dict[str, dict[str, str]]:
        return {
            "de": {
                "Light (Switch)": "Licht (Schalter)",
                "Variable": "Variable",
                "OK": "OK",
                "Variable missing": "Variable fehlt",
                "Bool required": "Boolean benötigt",
            }
        }
