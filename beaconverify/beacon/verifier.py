"""
beaconverify.beacon.verifier
============================

Single-shot verifier for one beacon round. Given the distributed public key,
the round's signature, the round number, the previous signature and the
claimed randomness, it runs a short-circuiting pipeline:

  1) decode the public key                      → DecodeError("public_key")
  2) decode signature / previous signature / round / claimed randomness
                                                → DecodeError(<field>)
  3) build the round's message
  4) verify the signature over that message     → SignatureInvalid
  5) round-binding check: verify the SAME signature over round-1's message.
     Here success is the failure case           → AmbiguousRoundBinding
  6) derive randomness = H(signature)
  7) compare with the claimed randomness        → RandomnessMismatch
  8) return Valid(round_index, randomness)

Step 5 inverts normal verification semantics: on the happy path the pairing
check is expected to FAIL, and that failure is what lets the round through.
It is skipped for round 0, which has no predecessor.

The verifier holds no mutable state and never logs, retries or raises on a
verification outcome; every failure comes back as a value. Use
:func:`ensure_valid` to turn the result into an exception instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..errors import (
    AmbiguousRoundBinding,
    DecodeError,
    RandomnessMismatch,
    SignatureInvalid,
    VerifyFailure,
)
from ..scheme import DEFAULT_SCHEME, Scheme
from ..types.core import RoundId, RoundRecord, Valid
from ..utils.bytes import HexOrBytes, as_bytes, consteq, to_hex, u64be
from .message import build_message

VerificationResult = Union[
    Valid,
    DecodeError,
    SignatureInvalid,
    AmbiguousRoundBinding,
    RandomnessMismatch,
]


@dataclass(frozen=True)
class _Decoded:
    public_key: bytes
    signature: bytes
    previous_signature: bytes
    round_id: int
    claimed: bytes


@dataclass(frozen=True)
class RoundVerifier:
    """
    Verifier bound to a :class:`Scheme`. Safe to share across threads.
    """
    scheme: Scheme = DEFAULT_SCHEME

    def verify(
        self,
        public_key: HexOrBytes,
        signature: HexOrBytes,
        round_id: int,
        previous_signature: HexOrBytes,
        claimed_randomness: HexOrBytes,
    ) -> VerificationResult:
        decoded = self._decode(
            public_key, signature, round_id, previous_signature, claimed_randomness
        )
        if isinstance(decoded, DecodeError):
            return decoded

        failure = (
            self._check_signature(decoded)
            or self._check_round_binding(decoded)
            or self._check_randomness(decoded)
        )
        if failure is not None:
            return failure
        return Valid(
            round_index=RoundId(decoded.round_id),
            randomness=self.scheme.derive_randomness(decoded.signature),
        )

    def verify_record(self, public_key: HexOrBytes, record: RoundRecord) -> VerificationResult:
        return self.verify(
            public_key,
            record.signature,
            int(record.round),
            record.previous_signature,
            record.randomness,
        )

    # ------------------------- pipeline steps -------------------------

    def _decode(
        self,
        public_key: HexOrBytes,
        signature: HexOrBytes,
        round_id: int,
        previous_signature: HexOrBytes,
        claimed_randomness: HexOrBytes,
    ) -> Union[_Decoded, DecodeError]:
        try:
            pk = self.scheme.decode_public_key(public_key)
        except (TypeError, ValueError) as e:
            return DecodeError(field="public_key", reason=str(e))
        try:
            sig = self.scheme.decode_signature(signature)
        except (TypeError, ValueError) as e:
            return DecodeError(field="signature", reason=str(e))
        try:
            prev = as_bytes(previous_signature)
        except (TypeError, ValueError) as e:
            return DecodeError(field="previous_signature", reason=str(e))
        try:
            u64be(round_id)
        except (TypeError, ValueError) as e:
            return DecodeError(field="round", reason=str(e))
        try:
            claimed = as_bytes(claimed_randomness)
        except (TypeError, ValueError) as e:
            return DecodeError(field="randomness", reason=str(e))
        return _Decoded(
            public_key=pk,
            signature=sig,
            previous_signature=prev,
            round_id=round_id,
            claimed=claimed,
        )

    def _check_signature(self, d: _Decoded) -> Optional[SignatureInvalid]:
        msg = build_message(d.previous_signature, d.round_id, self.scheme)
        if not self.scheme.verify_signature(d.public_key, msg, d.signature):
            return SignatureInvalid(round_id=d.round_id)
        return None

    def _check_round_binding(self, d: _Decoded) -> Optional[AmbiguousRoundBinding]:
        if d.round_id == 0:
            return None
        prior_msg = build_message(d.previous_signature, d.round_id - 1, self.scheme)
        if self.scheme.verify_signature(d.public_key, prior_msg, d.signature):
            return AmbiguousRoundBinding(round_id=d.round_id)
        return None

    def _check_randomness(self, d: _Decoded) -> Optional[RandomnessMismatch]:
        derived = self.scheme.derive_randomness(d.signature)
        if not consteq(derived, d.claimed):
            return RandomnessMismatch(
                round_id=d.round_id,
                expected_hex=to_hex(derived),
                got_hex=to_hex(d.claimed),
            )
        return None


# -----------------------------------------------------------------------------
# Convenience API
# -----------------------------------------------------------------------------

def verify(
    public_key: HexOrBytes,
    signature: HexOrBytes,
    round_id: int,
    previous_signature: HexOrBytes,
    claimed_randomness: HexOrBytes,
    *,
    scheme: Scheme = DEFAULT_SCHEME,
) -> VerificationResult:
    """Verify one round under *scheme* (default: chained BLS12-381, SHA-512)."""
    return RoundVerifier(scheme).verify(
        public_key, signature, round_id, previous_signature, claimed_randomness
    )


def verify_record(
    public_key: HexOrBytes,
    record: RoundRecord,
    *,
    scheme: Scheme = DEFAULT_SCHEME,
) -> VerificationResult:
    return RoundVerifier(scheme).verify_record(public_key, record)


def derive_randomness(signature: HexOrBytes, scheme: Scheme = DEFAULT_SCHEME) -> bytes:
    """Randomness for a signature, bound to the signature bytes only."""
    return scheme.derive_randomness(signature)


def is_valid(result: VerificationResult) -> bool:
    return isinstance(result, Valid)


def ensure_valid(result: VerificationResult) -> Valid:
    """Return *result* if it is Valid, otherwise raise the failure it carries."""
    if isinstance(result, VerifyFailure):
        raise result
    return result


__all__ = [
    "VerificationResult",
    "RoundVerifier",
    "verify",
    "verify_record",
    "derive_randomness",
    "is_valid",
    "ensure_valid",
]
