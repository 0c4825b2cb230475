"""Smart home intent handling on top of the device-type registry.

Receives parsed smart home requests and turns them into registry calls:

    {"requestId": "...", "inputs": [{"intent": "action.devices.SYNC"}]}

Responses carry the same request id and a payload per intent:
    SYNC:    {"agentUserId": ..., "devices": [...]}
    QUERY:   {"devices": {device_id: state}}
    EXECUTE: {"commands": [per-device result, ...]}
"""

import logging
from typing import Any, Optional

from devicehub.errors import DeviceHubError
from devicehub.logging.dynamo_logger import DynamoExecutionLogger
from devicehub.registry.device_type_registry import DeviceTypeRegistry

logger = logging.getLogger(__name__)

INTENT_SYNC = "action.devices.SYNC"
INTENT_QUERY = "action.devices.QUERY"
INTENT_EXECUTE = "action.devices.EXECUTE"


class Assistant:
    """Protocol envelope for one registry.

    Optionally records every executed command with a DynamoExecutionLogger.
    """

    def __init__(
        self,
        registry: DeviceTypeRegistry,
        agent_user_id: str,
        execution_logger: Optional[DynamoExecutionLogger] = None,
    ):
        self._registry = registry
        self._agent_user_id = agent_user_id
        self._execution_logger = execution_logger

    @property
    def registry(self) -> DeviceTypeRegistry:
        return self._registry

    def apply_changes(self) -> int:
        """Handle a configuration change: repair missing device identifiers."""
        return self._registry.update_properties()

    async def handle_request(self, request: dict[str, Any]) -> dict[str, Any]:
        """Handle one smart home request.

        Args:
            request: Parsed request with ``requestId`` and ``inputs``

        Returns:
            Response dict with ``requestId`` and ``payload``
        """
        request_id = request.get("requestId", "")
        inputs = request.get("inputs") or [{}]
        intent = inputs[0].get("intent", "")
        payload = inputs[0].get("payload") or {}
        logger.info("Intent %s, request_id=%s", intent, request_id)

        try:
            if intent == INTENT_SYNC:
                result = self._sync()
            elif intent == INTENT_QUERY:
                result = self._query(payload)
            elif intent == INTENT_EXECUTE:
                result = await self._execute(payload)
            else:
                logger.warning("Unsupported intent: %s", intent)
                result = {"errorCode": "notSupported"}
        except DeviceHubError as e:
            logger.error("Request %s failed: %s", request_id, e)
            result = {"errorCode": "protocolError", "debugString": str(e)}

        return {"requestId": request_id, "payload": result}

    def _sync(self) -> dict[str, Any]:
        return {
            "agentUserId": self._agent_user_id,
            "devices": self._registry.sync_all(),
        }

    def _query(self, payload: dict[str, Any]) -> dict[str, Any]:
        devices = {}
        for device in payload.get("devices", []):
            device_id = str(device.get("id", ""))
            devices[device_id] = self._registry.query_one(device_id)
        return {"devices": devices}

    async def _execute(self, payload: dict[str, Any]) -> dict[str, Any]:
        results = []
        for command in payload.get("commands", []):
            for execution in command.get("execution", []):
                name = execution.get("command", "")
                params = execution.get("params") or {}
                for device in command.get("devices", []):
                    device_id = str(device.get("id", ""))
                    result = self._registry.execute_one(device_id, name, params)
                    results.append(result)
                    if self._execution_logger is not None:
                        await self._execution_logger.log_execution(device_id, name, result)
        return {"commands": results}
