"""Orbit slash command intake: verify, record as pending, acknowledge."""

from orbit_intake.core_orbit import CommandIntake, InboundRequest, build_intake, format_ack
from orbit_intake.config import Settings
from orbit_intake.signature import SignatureVerifier, Verification

__all__ = [
    "CommandIntake",
    "InboundRequest",
    "Settings",
    "SignatureVerifier",
    "Verification",
    "build_intake",
    "format_ack",
]
