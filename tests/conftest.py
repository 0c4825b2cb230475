"""Shared fixtures for device hub tests."""

import pytest

from devicehub.devices import LightColor, LightDimmer, LightSwitch
from devicehub.registry import DeviceTypeRegistry
from devicehub.store import InMemoryConfigurationStore
from devicehub.variables import InMemoryVariableSource

from mocks.configuration import OWNER_ID


@pytest.fixture
def variables():
    """Provide an empty in-memory variable source."""
    return InMemoryVariableSource()


@pytest.fixture
def store():
    """Provide an in-memory configuration store."""
    return InMemoryConfigurationStore()


@pytest.fixture
def registry(store, variables):
    """Return a registry with the three light device types registered."""
    registry = DeviceTypeRegistry(store, OWNER_ID)
    registry.register(LightSwitch(variables))
    registry.register(LightDimmer(variables))
    registry.register(LightColor(variables))
    registry.register_properties()
    return registry
