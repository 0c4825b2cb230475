"""Device-type dispatch registry for smart home assistants."""

from devicehub.registry import DeviceTypeRegistry, IdentifierAllocator

__all__ = ["DeviceTypeRegistry", "IdentifierAllocator"]
