# signature.py
"""
Slack request signing (version v0).

Slack signing guide:
  base_string = "v0:{timestamp}:{raw_body}"
  my_sig = "v0=" + HMAC_SHA256(signing_secret, base_string)
  Compare my_sig to header X-Slack-Signature.
Requests whose timestamp is more than five minutes away from now are
rejected, which bounds how long a captured request can be replayed.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import time
from dataclasses import dataclass
from typing import Callable, Mapping

logger = logging.getLogger(__name__)

VERSION = "v0"
SIGNATURE_HEADER = "X-Slack-Signature"
TIMESTAMP_HEADER = "X-Slack-Request-Timestamp"

# Largest allowed |now - timestamp|; a captured request cannot be replayed after this.
FRESHNESS_WINDOW_SECONDS = 300

MISSING_CREDENTIALS = "missing_credentials"
STALE_TIMESTAMP = "stale_timestamp"
SIGNATURE_MISMATCH = "signature_mismatch"


def _hdr(headers: Mapping[str, str], name: str) -> str:
    """
    API Gateway may pass headers with different cases (X-Header vs x-header).
    This helper normalizes access.
    """
    return headers.get(name) or headers.get(name.lower()) or ""


@dataclass(frozen=True)
class Verification:
    ok: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.ok


ACCEPTED = Verification(True)


class SignatureVerifier:
    def __init__(
        self,
        signing_secret: str,
        clock: Callable[[], float] = time.time,
    ):
        if not signing_secret:
            raise ValueError("signing_secret must not be empty")
        self._secret = signing_secret.encode("utf-8")
        self._clock = clock

    def sign(self, timestamp: str | int, body: str) -> str:
        """Return the 'v0=<hex>' signature Slack would send for this body."""
        base_string = f"{VERSION}:{timestamp}:{body}".encode("utf-8")
        digest = hmac.new(self._secret, base_string, hashlib.sha256).hexdigest()
        return f"{VERSION}={digest}"

    def verify(self, headers: Mapping[str, str], body: str) -> Verification:
        """
        Check the signature headers against 'body', the exact decoded text
        Slack signed. Never raises for bad input; every failure comes back
        as a rejected Verification with a reason.
        """
        signature = _hdr(headers, SIGNATURE_HEADER)
        timestamp = _hdr(headers, TIMESTAMP_HEADER)

        if not signature or not timestamp:
            return self._reject(MISSING_CREDENTIALS)

        try:
            skew = abs(int(self._clock()) - int(timestamp))
        except ValueError:
            return self._reject(STALE_TIMESTAMP, "timestamp=%r is not an integer", timestamp)
        if skew > FRESHNESS_WINDOW_SECONDS:
            return self._reject(STALE_TIMESTAMP, "timestamp=%s is %ss away from now", timestamp, skew)

        expected = self.sign(timestamp, body)

        # Constant-time compare to prevent timing attacks
        if not hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8")):
            return self._reject(SIGNATURE_MISMATCH)

        return ACCEPTED

    @staticmethod
    def _reject(reason: str, detail: str = "", *args) -> Verification:
        if detail:
            logger.warning("Slack request rejected (%s): " + detail, reason, *args)
        else:
            logger.warning("Slack request rejected (%s)", reason)
        return Verification(False, reason)
