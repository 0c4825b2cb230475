"""MCP server exposing the device hub to assistants."""

import json
import logging
from typing import Any, Optional

from fastmcp import FastMCP

from devicehub.assistant import INTENT_EXECUTE, INTENT_QUERY, INTENT_SYNC, Assistant
from devicehub.config import load_config
from devicehub.devices import LightColor, LightDimmer, LightSwitch
from devicehub.errors import DeviceHubError
from devicehub.logging import DynamoExecutionLogger
from devicehub.registry import DeviceTypeRegistry
from devicehub.store import JsonFileConfigurationStore
from devicehub.variables import JsonFileVariableSource

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize FastMCP server
app = FastMCP("Device Hub")

# Lazily initialized assistant instance
assistant = None


def create_assistant(config=None, execution_logger: Optional[DynamoExecutionLogger] = None) -> Assistant:
    """Build an assistant with the built-in light device types.

    Device records and variable values are persisted to the JSON files
    named in the config. Missing identifiers are repaired on startup.
    """
    config = config or load_config()
    variables = JsonFileVariableSource(config.variables_path)
    store = JsonFileConfigurationStore(config.store_path)

    registry = DeviceTypeRegistry(store, config.owner_id, config.property_prefix)
    for device_type in (LightSwitch(variables), LightDimmer(variables), LightColor(variables)):
        registry.register(device_type)
    registry.register_properties()

    # The host validates again after every commit
    store.on_apply = lambda owner_id: registry.update_properties()
    registry.update_properties()

    return Assistant(registry, config.agent_user_id, execution_logger)


def get_assistant() -> Assistant:
    """Get or initialize the assistant instance."""
    global assistant
    if assistant is None:
        assistant = create_assistant(execution_logger=DynamoExecutionLogger())
        logger.info(
            "Device hub ready with device types: %s",
            ", ".join(assistant.registry.list_device_types()),
        )
    return assistant


async def _request(intent: str, payload: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    request = {"requestId": f"mcp-{intent.rsplit('.', 1)[-1].lower()}", "inputs": [{"intent": intent}]}
    if payload is not None:
        request["inputs"][0]["payload"] = payload
    response = await get_assistant().handle_request(request)
    return response["payload"]


@app.tool()
async def sync_devices() -> str:
    """List all configured devices with their traits.

    Returns:
        One line per device with id, name and traits
    """
    logger.info("Tool called: sync_devices")
    payload = await _request(INTENT_SYNC)
    if "errorCode" in payload:
        return f"✗ {payload.get('debugString', payload['errorCode'])}"

    devices = payload["devices"]
    if not devices:
        return "No devices configured"
    lines = []
    for device in devices:
        traits = ", ".join(trait.rsplit(".", 1)[-1] for trait in device["traits"])
        lines.append(f"{device['id']}: {device['name']['name']} ({traits})")
    return "\n".join(lines)


@app.tool()
async def query_device(device_id: str) -> str:
    """Get the current state of a device.

    Args:
        device_id: Device identifier as listed by sync_devices

    Returns:
        The device state as JSON
    """
    logger.info("Tool called: query_device(%s)", device_id)
    payload = await _request(INTENT_QUERY, {"devices": [{"id": device_id}]})
    if "errorCode" in payload:
        return f"✗ {payload.get('debugString', payload['errorCode'])}"

    state = payload["devices"][device_id]
    if not state.get("online"):
        return f"⚫ Device {device_id} is offline"
    return f"💡 Device {device_id}: {json.dumps(state)}"


@app.tool()
async def execute_command(device_id: str, command: str, params: Optional[dict[str, Any]] = None) -> str:
    """Execute a command on a device.

    Args:
        device_id: Device identifier as listed by sync_devices
        command: Command name, e.g. action.devices.commands.OnOff
        params: Command parameters, e.g. {"on": true}

    Returns:
        A message confirming the command or naming the error
    """
    logger.info("Tool called: execute_command(%s, %s)", device_id, command)
    payload = await _request(
        INTENT_EXECUTE,
        {
            "commands": [
                {
                    "devices": [{"id": device_id}],
                    "execution": [{"command": command, "params": params or {}}],
                }
            ]
        },
    )
    if "errorCode" in payload:
        return f"✗ {payload.get('debugString', payload['errorCode'])}"

    result = payload["commands"][0]
    if result["status"] == "SUCCESS":
        return f"✓ {command} executed. Current state: {json.dumps(result['states'])}"
    return f"✗ {command} failed: {result.get('errorCode', 'unknown error')}"


@app.tool()
async def get_configuration_form() -> str:
    """Get the configuration form describing every device type.

    Returns:
        The form elements as JSON
    """
    logger.info("Tool called: get_configuration_form")
    try:
        return json.dumps({"elements": get_assistant().registry.build_form()})
    except DeviceHubError as e:
        logger.error("Building form failed: %s", e)
        return f"✗ {e}"


@app.tool()
async def get_translations() -> str:
    """Get the translations of the configuration form.

    Returns:
        The translations as JSON
    """
    logger.info("Tool called: get_translations")
    try:
        return json.dumps({"translations": get_assistant().registry.build_translations()})
    except DeviceHubError as e:
        logger.error("Building translations failed: %s", e)
        return f"✗ {e}"


if __name__ == "__main__":
    app.run()
