"""
beaconverify: verifier for a chained, publicly-verifiable randomness beacon.

Given a round's signature, the previous round's signature, the round number
and the beacon's distributed public key, the package:
- checks the BLS12-381 signature over the round's canonical message,
- rejects signatures that also verify for the adjacent round,
- derives the round's randomness as a one-way hash of the signature.

Only light, stable exports are surfaced here; the transport client
(`beaconverify.client`) and CLI (`beaconverify.cli`) are imported explicitly.
"""

from __future__ import annotations

from .beacon.message import build_message
from .beacon.verifier import RoundVerifier, VerificationResult, ensure_valid, verify
from .errors import (
    AmbiguousRoundBinding,
    BeaconError,
    DecodeError,
    RandomnessMismatch,
    SignatureInvalid,
    VerifyFailure,
)
from .scheme import DEFAULT_SCHEME, Scheme
from .types import RoundRecord, Valid
from .version import __version__

__all__ = [
    "__version__",
    "build_message",
    "RoundVerifier",
    "VerificationResult",
    "verify",
    "ensure_valid",
    "Scheme",
    "DEFAULT_SCHEME",
    "RoundRecord",
    "Valid",
    "BeaconError",
    "VerifyFailure",
    "DecodeError",
    "SignatureInvalid",
    "AmbiguousRoundBinding",
    "RandomnessMismatch",
]
