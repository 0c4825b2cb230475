"""Tests for DynamoExecutionLogger using moto for in-memory DynamoDB."""

from unittest.mock import MagicMock

import boto3
import pytest
from moto import mock_aws
from boto3.dynamodb.conditions import Key

from devicehub.logging import DynamoExecutionLogger

TABLE_NAME = "devicehub-execution-log"
REGION = "eu-central-1"
DEVICE_ID = "1"
COMMAND = "action.devices.commands.OnOff"


def _create_table(dynamodb):
    """Create the DynamoDB table used by the logger."""
    dynamodb.create_table(
        TableName=TABLE_NAME,
        KeySchema=[
            {"AttributeName": "device_id", "KeyType": "HASH"},
            {"AttributeName": "timestamp", "KeyType": "RANGE"},
        ],
        AttributeDefinitions=[
            {"AttributeName": "device_id", "AttributeType": "S"},
            {"AttributeName": "timestamp", "AttributeType": "S"},
        ],
        BillingMode="PAY_PER_REQUEST",
    )


def _success(on=True):
    return {"ids": [DEVICE_ID], "status": "SUCCESS", "states": {"online": True, "on": on}}


def _error(code="deviceOffline"):
    return {"ids": [DEVICE_ID], "status": "ERROR", "errorCode": code}


@pytest.fixture
def aws_env(monkeypatch):
    """Set env vars so the logger finds the right table and region."""
    monkeypatch.setenv("DYNAMODB_TABLE_NAME", TABLE_NAME)
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")


@pytest.fixture
def dynamodb_table(aws_env):
    """Provide a moto-backed DynamoDB table and a logger writing to it."""
    with mock_aws():
        session = boto3.Session(region_name=REGION)
        dynamodb = session.resource("dynamodb")
        _create_table(dynamodb)
        table = dynamodb.Table(TABLE_NAME)

        yield DynamoExecutionLogger(), table


def _items(table):
    return table.query(KeyConditionExpression=Key("device_id").eq(DEVICE_ID))["Items"]


@pytest.mark.asyncio
async def test_log_execution_writes_item(dynamodb_table):
    logger, table = dynamodb_table

    await logger.log_execution(DEVICE_ID, COMMAND, _success())

    assert len(_items(table)) == 1


@pytest.mark.asyncio
async def test_log_execution_success_fields(dynamodb_table):
    logger, table = dynamodb_table

    await logger.log_execution(DEVICE_ID, COMMAND, _success(on=False))

    item = _items(table)[0]
    assert item["command"] == COMMAND
    assert item["status"] == "SUCCESS"
    assert item["success"] is True
    assert item["is_on"] is False
    assert "ttl" in item
    assert "error_code" not in item


@pytest.mark.asyncio
async def test_log_execution_error_fields(dynamodb_table):
    logger, table = dynamodb_table

    await logger.log_execution(DEVICE_ID, COMMAND, _error())

    item = _items(table)[0]
    assert item["success"] is False
    assert item["error_code"] == "deviceOffline"
    assert "is_on" not in item


@pytest.mark.asyncio
async def test_failure_disables_logger():
    """Test a failing table disables the logger instead of raising."""
    logger = DynamoExecutionLogger()
    table = MagicMock()
    table.put_item.side_effect = Exception("table gone")
    logger._table = table

    await logger.log_execution(DEVICE_ID, COMMAND, _success())
    await logger.log_execution(DEVICE_ID, COMMAND, _success())

    assert logger.is_disabled
    table.put_item.assert_called_once()
