"""Configuration store persisted to a JSON file."""

import json
import logging
from pathlib import Path
from typing import Callable, Optional

from devicehub.store.memory import InMemoryConfigurationStore

logger = logging.getLogger(__name__)


class JsonFileConfigurationStore(InMemoryConfigurationStore):
    """Configuration store that survives restarts.

    The file maps owner id to {property key: JSON text}. Writes are kept in
    memory until ``apply_changes`` saves them.
    """

    def __init__(self, state_file: Path, on_apply: Optional[Callable[[str], None]] = None):
        super().__init__(on_apply=on_apply)
        self.state_file = state_file
        self._properties = self._load()

    def _load(self) -> dict[str, dict[str, str]]:
        if self.state_file.exists():
            try:
                with open(self.state_file, "r") as f:
                    data = json.load(f)
                logger.info(f"Loaded configuration from {self.state_file}")
                return data
            except (json.JSONDecodeError, IOError) as e:
                logger.warning(f"Could not load configuration file: {e}. Using empty configuration.")
        return {}

    def _save(self) -> None:
        try:
            self.state_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.state_file, "w") as f:
                json.dump(self._properties, f, indent=2)
            logger.debug(f"Configuration saved to {self.state_file}")
        except IOError as e:
            logger.error(f"Failed to save configuration: {e}")

    def apply_changes(self, owner_id: str) -> None:
        self._save()
        super().apply_changes(owner_id)
