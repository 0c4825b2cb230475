"""Device-type registry, identifier allocation and form aggregation."""

from devicehub.registry.device_type_registry import DeviceTypeRegistry
from devicehub.registry.id_allocator import IdentifierAllocator

__all__ = ["DeviceTypeRegistry", "IdentifierAllocator"]
