# core_orbit.py
"""
Shared Orbit intake logic (no Flask/Lambda imports here).
- Verifies the Slack signature over the exact body Slack sent.
- Parses the slash command and saves it to DynamoDB with status="pending".
- Replies immediately so Slack does not time out; the real work is done
  later by the worker that picks up pending records.

Every call returns (status_code, headers_dict, body_string):
  401 bad signature, 500 anything that stopped the record from being saved,
  200 once the record is in DynamoDB.
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Mapping

from orbit_intake.db import PendingRecordStore, table_from_name
from orbit_intake.errors import IntakeError
from orbit_intake.form import decode_command, unwrap_body
from orbit_intake.records import RequestRecorder
from orbit_intake.signature import SignatureVerifier

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}

UNAUTHORIZED_TEXT = "Invalid Slack Signature"
INTERNAL_ERROR_TEXT = "Internal Server Error"


@dataclass
class InboundRequest:
    """What a trigger (Lambda or Flask) hands to the pipeline."""

    body: str | bytes | None
    headers: Mapping[str, str] = field(default_factory=dict)
    is_base64_encoded: bool = False


def format_ack(record: dict) -> str:
    return (
        f"Hi *{record.get('user_name') or 'there'}*, Orbit has received your request "
        f"and is working on it. Req number: {record['request_id']}"
    )


def _reply(status: int, text: str) -> tuple[int, dict, str]:
    return status, dict(JSON_HEADERS), json.dumps({"text": text})


class CommandIntake:
    def __init__(self, verifier: SignatureVerifier, recorder: RequestRecorder):
        self.verifier = verifier
        self.recorder = recorder

    def handle(self, request: InboundRequest) -> tuple[int, dict, str]:
        try:
            # 1) Exact text Slack signed; base64 unwrapping has to happen first.
            body = unwrap_body(request.body, request.is_base64_encoded)

            # 2) Verify before parsing anything.
            verification = self.verifier.verify(request.headers or {}, body)
            if not verification:
                return _reply(401, UNAUTHORIZED_TEXT)

            # 3) Form fields -> dict[str, str]
            command = decode_command(body)
            logger.info("Slash command %s fields=%s", command.get("command"), sorted(command))

            # 4) Save. Nothing is acknowledged until DynamoDB has the item.
            record = self.recorder.record(command)
        except IntakeError as exc:
            logger.error("Request failed (%s): %s", exc.reason, exc)
            return _reply(500, INTERNAL_ERROR_TEXT)
        except Exception:
            logger.exception("Unexpected error handling slash command")
            return _reply(500, INTERNAL_ERROR_TEXT)

        return _reply(200, format_ack(record))


def build_intake(settings, table=None, clock=None, id_factory=None) -> CommandIntake:
    """
    Wire the pipeline from Settings. 'table' defaults to the real DynamoDB
    table; tests pass an in-memory stand-in along with a fixed clock.
    """
    clock = clock or time.time
    verifier = SignatureVerifier(settings.signing_secret, clock=clock)
    store = PendingRecordStore(table if table is not None else table_from_name(settings.table_name))
    recorder = RequestRecorder(store, clock=clock, id_factory=id_factory or uuid.uuid4)
    return CommandIntake(verifier, recorder)
