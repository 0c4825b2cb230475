"""Device-type handlers for the smart home assistant."""

from .base import DeviceType
from .light_color import LightColor
from .light_dimmer import LightDimmer
from .light_switch import LightSwitch

__all__ = ["DeviceType", "LightSwitch", "LightDimmer", "LightColor"]
