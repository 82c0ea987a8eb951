"""
beaconverify.beacon
-------------------

Round message construction and the single-shot round verifier.

    from beaconverify.beacon import build_message, verify, RoundVerifier
"""

from __future__ import annotations

from .message import build_message
from .verifier import (
    RoundVerifier,
    VerificationResult,
    derive_randomness,
    ensure_valid,
    is_valid,
    verify,
    verify_record,
)

__all__ = [
    "build_message",
    "RoundVerifier",
    "VerificationResult",
    "derive_randomness",
    "ensure_valid",
    "is_valid",
    "verify",
    "verify_record",
]
