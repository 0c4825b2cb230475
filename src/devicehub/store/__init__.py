"""Configuration stores for device records."""

from devicehub.store.base import ConfigurationStore
from devicehub.store.json_file import JsonFileConfigurationStore
from devicehub.store.memory import InMemoryConfigurationStore

__all__ = ["ConfigurationStore", "InMemoryConfigurationStore", "JsonFileConfigurationStore"]
