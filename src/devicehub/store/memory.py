"""In-memory configuration store."""

import logging
from typing import Callable, Optional

from devicehub.store.base import ConfigurationStore

logger = logging.getLogger(__name__)


class InMemoryConfigurationStore(ConfigurationStore):
    """Configuration store backed by dicts.

    Counts writes and applies so callers can check how much a repair pass
    touched. An ``on_apply`` callback stands in for the host's validation
    step and receives the owner id.
    """

    def __init__(self, on_apply: Optional[Callable[[str], None]] = None):
        self._properties: dict[str, dict[str, str]] = {}
        self.on_apply = on_apply
        self.write_count = 0
        self.apply_count = 0
        self.writes: list[tuple[str, str]] = []

    def register_property(self, owner_id: str, key: str, default: str) -> None:
        self._properties.setdefault(owner_id, {}).setdefault(key, default)

    def get_property(self, owner_id: str, key: str) -> str:
        try:
            return self._properties[owner_id][key]
        except KeyError:
            raise KeyError(f"Property {key} not found for {owner_id}") from None

    def set_property(self, owner_id: str, key: str, value: str) -> None:
        self._properties.setdefault(owner_id, {})[key] = value
        self.write_count += 1
        self.writes.append((owner_id, key))
        logger.debug(f"Property {key} written for {owner_id}")

    def apply_changes(self, owner_id: str) -> None:
        self.apply_count += 1
        if self.on_apply is not None:
            self.on_apply(owner_id)
