"""Configuration store interface consumed by the registry."""

from abc import ABC, abstractmethod


class ConfigurationStore(ABC):
    """Property store holding device configuration per owning unit.

    Properties are JSON text. ``apply_changes`` commits pending writes and
    may run validation again, which can re-enter the identifier allocator.
    Implementations must make single-key reads and writes atomic.
    """

    @abstractmethod
    def register_property(self, owner_id: str, key: str, default: str) -> None:
        """Declare a property and its default value if it does not exist yet."""
        pass

    @abstractmethod
    def get_property(self, owner_id: str, key: str) -> str:
        """Return the JSON text stored under ``key``.

        Raises:
            KeyError: If the property was never registered or written
        """
        pass

    @abstractmethod
    def set_property(self, owner_id: str, key: str, value: str) -> None:
        """Store JSON text under ``key`` (pending until applied)."""
        pass

    @abstractmethod
    def apply_changes(self, owner_id: str) -> None:
        """Commit pending writes and trigger validation for the owner."""
        pass
