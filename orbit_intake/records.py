# records.py
"""
Builds the PendingRecord for an accepted slash command and saves it.
"""

from __future__ import annotations

import time
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable

from orbit_intake.db import PendingRecordStore

STATUS_PENDING = "pending"

# Copied verbatim from the slash command payload when present.
COMMAND_FIELDS = (
    "api_app_id",
    "channel_id",
    "channel_name",
    "command",
    "response_url",
    "team_domain",
    "team_id",
    "text",
    "trigger_id",
    "user_id",
    "user_name",
)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def iso_from_millis(millis: int) -> str:
    """Render epoch milliseconds as e.g. 2025-08-12T22:46:13.123Z (UTC)."""
    instant = _EPOCH + timedelta(milliseconds=millis)
    return instant.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_record(
    command: dict[str, str],
    clock: Callable[[], float] = time.time,
    id_factory: Callable[[], uuid.UUID] = uuid.uuid4,
) -> dict:
    """
    Assemble the item for DynamoDB. The clock is read exactly once so
    created_at and created_at_readable always name the same instant.
    """
    created_at = int(clock() * 1000)

    item = {
        "request_id": str(id_factory()),
        "status": STATUS_PENDING,
        "created_at": created_at,
        "created_at_readable": iso_from_millis(created_at),
        "is_enterprise_install": command.get("is_enterprise_install") == "true",
    }
    for field in COMMAND_FIELDS:
        if field in command:
            item[field] = command[field]
    return item


class RequestRecorder:
    def __init__(
        self,
        store: PendingRecordStore,
        clock: Callable[[], float] = time.time,
        id_factory: Callable[[], uuid.UUID] = uuid.uuid4,
    ):
        self._store = store
        self._clock = clock
        self._id_factory = id_factory

    def record(self, command: dict[str, str]) -> dict:
        """Create and persist exactly one pending record; returns it once saved."""
        item = build_record(command, clock=self._clock, id_factory=self._id_factory)
        self._store.put(item)
        return item
