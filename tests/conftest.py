"""Shared fixtures: fixed clock, in-memory DynamoDB table, Slack signing helper."""

import hashlib
import hmac
import os
import uuid

import pytest
from botocore.exceptions import ClientError

from orbit_intake.config import Settings
from orbit_intake.core_orbit import build_intake

TEST_SECRET = "8f742231b10e8888abcd99yyyzzz85a5"
NOW = 1_760_000_000

# lambda_function reads its settings at import time.
os.environ["SLACK_SIGNING_SECRET"] = TEST_SECRET


def slack_signature(secret: str, timestamp, body: str) -> str:
    base = f"v0:{timestamp}:{body}".encode("utf-8")
    return "v0=" + hmac.new(secret.encode("utf-8"), base, hashlib.sha256).hexdigest()


def signed_headers(body: str, secret: str = TEST_SECRET, timestamp=NOW, lowercase: bool = False) -> dict:
    headers = {
        "X-Slack-Signature": slack_signature(secret, timestamp, body),
        "X-Slack-Request-Timestamp": str(timestamp),
        "Content-Type": "application/x-www-form-urlencoded",
    }
    if lowercase:
        headers = {k.lower(): v for k, v in headers.items()}
    return headers


class FakeTable:
    """Stands in for boto3's Table resource; only put_item is needed."""

    name = "Orbit2Records"

    def __init__(self):
        self.items = []
        self.error = None

    def put_item(self, Item):
        if self.error is not None:
            raise self.error
        self.items.append(dict(Item))
        return {"ResponseMetadata": {"HTTPStatusCode": 200}}

    def fail_with(self, code: str = "ProvisionedThroughputExceededException"):
        self.error = ClientError({"Error": {"Code": code, "Message": "boom"}}, "PutItem")


@pytest.fixture
def clock():
    return lambda: float(NOW)


@pytest.fixture
def table():
    return FakeTable()


@pytest.fixture
def settings():
    return Settings(signing_secret=TEST_SECRET)


@pytest.fixture
def intake(settings, table, clock):
    return build_intake(settings, table=table, clock=clock, id_factory=uuid.uuid4)
