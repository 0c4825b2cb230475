"""DynamoDB audit logger for executed device commands."""

import logging
import os
from datetime import datetime, timezone, timedelta
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)

DEFAULT_TABLE_NAME = "devicehub-execution-log"
DEFAULT_REGION = "eu-central-1"
TTL_DAYS = 30


class DynamoExecutionLogger:
    """Fire-and-forget logger that writes executed commands to DynamoDB.

    Lazy-initializes the boto3 Table resource on first write.
    After any connection/table failure, sets ``_disabled`` to avoid retrying.
    """

    def __init__(self, profile_name: str | None = None) -> None:
        self._profile_name = profile_name
        self._table = None
        self._disabled = False

    def _get_table(self):
        """Lazily create and return the DynamoDB Table resource."""
        if self._table is not None:
            return self._table

        table_name = os.environ.get("DYNAMODB_TABLE_NAME", DEFAULT_TABLE_NAME)
        region = os.environ.get("AWS_DEFAULT_REGION", DEFAULT_REGION)

        session_kwargs = {"region_name": region}
        if self._profile_name:
            session_kwargs["profile_name"] = self._profile_name

        session = boto3.Session(**session_kwargs)
        dynamodb = session.resource("dynamodb")
        self._table = dynamodb.Table(table_name)
        return self._table

    @property
    def is_disabled(self) -> bool:
        return self._disabled

    async def log_execution(
        self, device_id: str, command: str, result: dict[str, Any]
    ) -> None:
        """Record one executed command.

        Failures are logged as warnings and never propagate to the caller.

        Args:
            device_id: Identifier of the device the command was routed to.
            command: The executed command (e.g. ``action.devices.commands.OnOff``).
            result: The per-device result, expected to contain ``status`` and
                either ``states`` or ``errorCode``.
        """
        if self._disabled:
            return

        try:
            table = self._get_table()

            now = datetime.now(timezone.utc)
            status = result.get("status", "ERROR")

            item = {
                "device_id": str(device_id),
                "timestamp": now.isoformat(timespec="microseconds"),
                "command": command,
                "status": status,
                "success": status == "SUCCESS",
                "ttl": int((now + timedelta(days=TTL_DAYS)).timestamp()),
            }
            states = result.get("states", {})
            if "on" in states:
                item["is_on"] = bool(states["on"])
            if "errorCode" in result:
                item["error_code"] = result["errorCode"]

            table.put_item(Item=item)
        except (BotoCoreError, ClientError, Exception) as exc:
            logger.warning("DynamoDB logging failed, disabling logger: %s", exc)
            self._disabled = True
