# db.py
"""
DynamoDB access for pending Orbit requests.

Table schema:
  PK: request_id (S, uuid4)
Only put_item is used; the downstream worker owns every later read/update.
"""

from __future__ import annotations

import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from orbit_intake.errors import StoreWriteError

logger = logging.getLogger(__name__)


def table_from_name(table_name: str):
    """Open the boto3 Table resource (region/credentials come from the Lambda role)."""
    return boto3.resource("dynamodb").Table(table_name)


class PendingRecordStore:
    def __init__(self, table):
        self._table = table

    def put(self, item: dict) -> None:
        """Write one pending record. Raises StoreWriteError if DynamoDB refuses it."""
        try:
            self._table.put_item(Item=item)
        except (ClientError, BotoCoreError) as exc:
            logger.exception("put_item failed for request_id=%s", item.get("request_id"))
            raise StoreWriteError(f"could not save request {item.get('request_id')}") from exc
        logger.info("Saved request_id=%s to %s", item["request_id"], getattr(self._table, "name", "table"))
