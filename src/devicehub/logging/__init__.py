"""Audit logging for executed commands."""

from devicehub.logging.dynamo_logger import DynamoExecutionLogger

__all__ = ["DynamoExecutionLogger"]
