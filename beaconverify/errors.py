"""
Beacon verification errors.

This module defines a small, typed hierarchy of failure kinds produced while
verifying a beacon round (decode → signature → round binding → randomness).
The verifier *returns* these as values so callers can branch on the kind
without string inspection; every failure is also an exception, so
:func:`beaconverify.beacon.verifier.ensure_valid` can raise it unchanged.

Callers can catch the base `BeaconError` to handle every error raised by the
package, `VerifyFailure` for verification outcomes only, or the concrete
subclasses for more granular control.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional


class BeaconError(Exception):
    """Base class for all beacon verification and transport errors."""
    pass


class VerifyFailure(BeaconError):
    """Base class for the failure kinds a round verification can resolve to."""

    kind: ClassVar[str] = "failure"


@dataclass(frozen=True)
class DecodeError(VerifyFailure):
    """
    Raised when an input could not be parsed into its cryptographic representation.

    Attributes:
        field: Name of the offending input ('public_key', 'signature',
               'previous_signature', 'round' or 'randomness'). These are the
               snake_case forms of the camelCase protocol names, e.g.
               'public_key' for publicKey and 'previous_signature' for
               previousSignature.
        reason: Optional short explanation (e.g., 'bad-hex', 'length', 'not-in-subgroup').
    """
    field: str
    reason: Optional[str] = None

    kind: ClassVar[str] = "decode_error"

    def __str__(self) -> str:  # pragma: no cover - trivial formatting
        base = f"DecodeError: field={self.field}"
        return f"{base} reason={self.reason}" if self.reason else base


@dataclass(frozen=True)
class SignatureInvalid(VerifyFailure):
    """
    Raised when the signature does not verify over the round's message.

    Attributes:
        round_id: The beacon round the signature was checked against.
    """
    round_id: int

    kind: ClassVar[str] = "signature_invalid"

    def __str__(self) -> str:  # pragma: no cover - trivial formatting
        return f"SignatureInvalid: round={self.round_id}"


@dataclass(frozen=True)
class AmbiguousRoundBinding(VerifyFailure):
    """
    Raised when the signature also verifies for round-1's message.

    The message encoding failed to bind the round number uniquely. This is a
    defect on the signing side, never a transient condition.

    Attributes:
        round_id: The round that was claimed.
    """
    round_id: int

    kind: ClassVar[str] = "ambiguous_round_binding"

    def __str__(self) -> str:  # pragma: no cover - trivial formatting
        return (
            f"AmbiguousRoundBinding: round={self.round_id} "
            f"signature also valid for round={self.round_id - 1}"
        )


@dataclass(frozen=True)
class RandomnessMismatch(VerifyFailure):
    """
    Raised when the randomness derived from the signature differs from the claim.

    Attributes:
        round_id: The beacon round identifier.
        expected_hex: Hex of the randomness derived from the signature.
        got_hex: Hex of the claimed randomness.
    """
    round_id: int
    expected_hex: str
    got_hex: str

    kind: ClassVar[str] = "randomness_mismatch"

    def __str__(self) -> str:  # pragma: no cover - trivial formatting
        return (
            f"RandomnessMismatch: round={self.round_id} expected={self.expected_hex} "
            f"got={self.got_hex}"
        )


@dataclass(frozen=True)
class TransportError(BeaconError):
    """
    Raised by the beacon client when a node could not be reached or answered badly.

    Attributes:
        url: The request URL.
        reason: Human-readable explanation (status code, timeout, bad JSON...).
    """
    url: str
    reason: str

    def __str__(self) -> str:  # pragma: no cover - trivial formatting
        return f"TransportError: url={self.url} reason={self.reason}"


__all__ = [
    "BeaconError",
    "VerifyFailure",
    "DecodeError",
    "SignatureInvalid",
    "AmbiguousRoundBinding",
    "RandomnessMismatch",
    "TransportError",
]
