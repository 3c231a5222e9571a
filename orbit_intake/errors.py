# errors.py
"""
Exceptions raised inside the intake pipeline.
CommandIntake.handle maps every one of these to a status code;
none of their messages are sent back to Slack.
"""


class IntakeError(Exception):
    """Base class. 'reason' is the short machine-readable failure name."""

    reason = "internal_error"


class MalformedPayload(IntakeError):
    """Body could not be base64-decoded or is not valid UTF-8."""

    reason = "malformed_payload"


class StoreWriteError(IntakeError):
    """DynamoDB did not acknowledge the put_item."""

    reason = "store_write_failure"


class ConfigError(IntakeError):
    """Required configuration is missing or invalid at startup."""

    reason = "misconfigured"
