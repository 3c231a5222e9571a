# lambda_function.py
"""
AWS Lambda HTTP handler (for API Gateway "HTTP API" or "REST API").

Responsibilities here (not in core_orbit):
1) Read configuration at import, so a missing SLACK_SIGNING_SECRET fails
   the cold start instead of the first request.
2) Turn the API Gateway event into an InboundRequest.
3) Return the {statusCode, headers, body} structure expected by API Gateway.

Environment variables: see config.py (SLACK_SIGNING_SECRET is required).
"""

import logging

from orbit_intake.config import Settings
from orbit_intake.core_orbit import CommandIntake, InboundRequest, build_intake

logger = logging.getLogger(__name__)

SETTINGS = Settings.from_env()
logging.getLogger().setLevel(SETTINGS.log_level)

_intake = None


def _get_intake() -> CommandIntake:
    """Open the DynamoDB table on first use and reuse the pipeline for warm invocations."""
    global _intake
    if _intake is None:
        _intake = build_intake(SETTINGS)
    return _intake


def _response(status: int, headers: dict | None = None, body: str = "") -> dict:
    """
    Format the Lambda proxy integration response.
    'body' must be a string (JSON-encoded if returning JSON).
    """
    return {"statusCode": status, "headers": headers or {}, "body": body}


def event_to_request(event: dict) -> InboundRequest:
    """
    Key fields we use:
      event["body"]             : raw request body (string or base64)
      event["isBase64Encoded"]  : whether 'body' needs base64 decoding
      event["headers"]          : dict of HTTP headers
    """
    return InboundRequest(
        body=event.get("body") or "",
        headers=event.get("headers") or {},
        is_base64_encoded=bool(event.get("isBase64Encoded")),
    )


def handler(event, context):
    """Main Lambda entrypoint. 'event' is the HTTP request from API Gateway."""
    status, headers, body = _get_intake().handle(event_to_request(event))
    return _response(status, headers, body)
