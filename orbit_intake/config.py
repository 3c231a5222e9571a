# config.py
"""
Process-wide settings, read once from the environment.

Environment variables:
- SLACK_SIGNING_SECRET : required, used for request verification
- TABLE_NAME           : DynamoDB table for pending records (default Orbit2Records)
- LOG_LEVEL            : root log level for the Lambda (default INFO)

The replay window is fixed at five minutes (signature.FRESHNESS_WINDOW_SECONDS)
and cannot be changed from the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from orbit_intake.errors import ConfigError

DEFAULT_TABLE_NAME = "Orbit2Records"


@dataclass(frozen=True)
class Settings:
    signing_secret: str
    table_name: str = DEFAULT_TABLE_NAME
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """
        Build settings from the environment.
        A missing or blank signing secret is fatal: we never accept
        unsigned requests.
        """
        env = os.environ if environ is None else environ

        secret = (env.get("SLACK_SIGNING_SECRET") or "").strip()
        if not secret:
            raise ConfigError("SLACK_SIGNING_SECRET is not set")

        return cls(
            signing_secret=secret,
            table_name=env.get("TABLE_NAME") or DEFAULT_TABLE_NAME,
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )
