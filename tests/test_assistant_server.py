"""Tests for the MCP device hub tools."""

import json

import pytest

from devicehub.assistant import Assistant
from devicehub.config import AssistantConfig
from devicehub.mcp_servers import assistant_server

from mocks.configuration import configure

# The @app.tool() decorator wraps functions into FunctionTool objects.
# Access the underlying async functions via the .fn attribute.
_sync_devices = assistant_server.sync_devices.fn
_query_device = assistant_server.query_device.fn
_execute_command = assistant_server.execute_command.fn
_get_configuration_form = assistant_server.get_configuration_form.fn
_get_translations = assistant_server.get_translations.fn


@pytest.fixture(autouse=True)
def _inject_assistant(registry):
    """Inject an in-memory assistant into the server module and reset after each test."""
    assistant_server.assistant = Assistant(registry, "agent-test")
    yield
    assistant_server.assistant = None


@pytest.fixture
def hall_light(store, variables):
    ref = variables.create(False)
    configure(store, "LightSwitch", [{"ID": "1", "Name": "Hall Light", "OnOffID": ref}])
    return ref


@pytest.mark.asyncio
async def test_sync_devices_empty():
    assert await _sync_devices() == "No devices configured"


@pytest.mark.asyncio
async def test_sync_devices_lists_devices(hall_light):
    result = await _sync_devices()
    assert result == "1: Hall Light (OnOff)"


@pytest.mark.asyncio
async def test_query_device(hall_light):
    result = await _query_device("1")
    assert "💡" in result
    assert '"on": false' in result


@pytest.mark.asyncio
async def test_query_unknown_device():
    result = await _query_device("42")
    assert "offline" in result


@pytest.mark.asyncio
async def test_execute_command(hall_light, variables):
    result = await _execute_command("1", "action.devices.commands.OnOff", {"on": True})
    assert "✓" in result
    assert variables.get(hall_light) is True


@pytest.mark.asyncio
async def test_execute_command_unknown_device():
    result = await _execute_command("42", "action.devices.commands.OnOff", {"on": True})
    assert "✗" in result
    assert "deviceNotFound" in result


@pytest.mark.asyncio
async def test_duplicate_ids_reported(store):
    configure(store, "LightSwitch", [{"ID": "3", "Name": "A", "OnOffID": 0}])
    configure(store, "LightDimmer", [{"ID": "3", "Name": "B", "BrightnessOnOffID": 0}])

    result = await _sync_devices()
    assert "✗" in result


@pytest.mark.asyncio
async def test_get_configuration_form():
    form = json.loads(await _get_configuration_form())
    assert [section["caption"] for section in form["elements"]] == [
        "Light (Switch)",
        "Light (Dimmer)",
        "Light (Color)",
    ]


@pytest.mark.asyncio
async def test_get_translations():
    translations = json.loads(await _get_translations())
    assert translations["translations"]["de"]["Light (Dimmer)"] == "Licht (Dimmer)"


def test_create_assistant_repairs_on_startup(tmp_path):
    store_file = tmp_path / "configuration.json"
    store_file.write_text(
        json.dumps({"home": {"DeviceLightDimmer": json.dumps([{"ID": "", "Name": "Desk"}])}})
    )
    config = AssistantConfig(
        owner_id="home",
        agent_user_id="agent",
        store_path=store_file,
        variables_path=tmp_path / "variables.json",
    )

    assistant = assistant_server.create_assistant(config)

    saved = json.loads(json.loads(store_file.read_text())["home"]["DeviceLightDimmer"])
    assert saved == [{"ID": "1", "Name": "Desk"}]
    assert assistant.registry.list_device_types() == ["LightSwitch", "LightDimmer", "LightColor"]
