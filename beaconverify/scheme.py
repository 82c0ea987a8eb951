"""
beaconverify.scheme
===================

Explicit cryptographic scheme parameters for beacon verification.

A :class:`Scheme` is an immutable value describing how a beacon network signs
rounds: the BLS12-381 ciphersuite (public keys in G1, signatures in G2), the
hash-to-curve domain separation tag, the round message format and the hash
used to extract randomness from a signature. It is passed into the message
builder and the verifier instead of living in module globals, so beacons with
different parameters can be verified side by side in one process.

Backend
-------
- `py_ecc` BLS ciphersuites (``py_ecc.bls.G2Basic``) provide key validation,
  point decompression and pairing-based verification. A ciphersuite subclass
  is derived per DST and cached.

Decoding helpers raise ``ValueError``; the verifier maps those onto
:class:`beaconverify.errors.DecodeError` with the offending field name.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Type

from py_ecc.bls import G2Basic
from py_ecc.bls.g2_primitives import signature_to_G2, subgroup_check

from .constants import (
    DEFAULT_RANDOMNESS_HASH,
    DST_G2_BASIC,
    MESSAGE_FORMAT_CONCAT,
    MESSAGE_FORMAT_SHA256,
    MESSAGE_FORMATS,
    PUBLIC_KEY_SIZE,
    RANDOMNESS_HASHES,
    RANDOMNESS_SIZE,
    SCHEME_CHAINED,
    SCHEME_CHAINED_SHA256,
    SIGNATURE_SIZE,
)
from .utils.bytes import BytesLike, as_bytes

__all__ = [
    "Scheme",
    "DEFAULT_SCHEME",
    "SHA256_SCHEME",
    "scheme_by_id",
]


@lru_cache(maxsize=16)
def _ciphersuite(dst: bytes) -> Type[G2Basic]:
    """Return a G2Basic ciphersuite bound to *dst*."""
    if dst == G2Basic.DST:
        return G2Basic
    return type("G2BasicCustomDST", (G2Basic,), {"DST": dst})


@dataclass(frozen=True)
class Scheme:
    """
    Parameters of a beacon signing scheme.

    scheme_id: human-readable identifier published by beacon nodes.
    message_format: "concat" (round || prev, the default) or "sha256" (SHA-256 of prev || round).
    dst: hash-to-curve domain separation tag for G2 signatures.
    randomness_hash: 64-byte hash used to extract randomness from a signature.
    """

    scheme_id: str = SCHEME_CHAINED
    message_format: str = MESSAGE_FORMAT_CONCAT
    dst: bytes = DST_G2_BASIC
    randomness_hash: str = DEFAULT_RANDOMNESS_HASH

    def __post_init__(self) -> None:
        if self.message_format not in MESSAGE_FORMATS:
            raise ValueError(f"Unsupported message format: {self.message_format}")
        if self.randomness_hash not in RANDOMNESS_HASHES:
            raise ValueError(f"Unsupported randomness hash: {self.randomness_hash}")
        if not isinstance(self.dst, bytes) or not self.dst:
            raise ValueError("dst must be non-empty bytes")
        if len(self.dst) > 255:
            raise ValueError("dst must be at most 255 bytes")

    # ------------------------- ciphersuite -------------------------

    @property
    def ciphersuite(self) -> Type[G2Basic]:
        return _ciphersuite(self.dst)

    def decode_public_key(self, public_key: BytesLike) -> bytes:
        """Validate a compressed G1 public key; raises ValueError if unusable."""
        pk = as_bytes(public_key)
        if len(pk) != PUBLIC_KEY_SIZE:
            raise ValueError(f"length: expected {PUBLIC_KEY_SIZE} bytes, got {len(pk)}")
        if not self.ciphersuite.KeyValidate(pk):
            raise ValueError("not a valid G1 subgroup point")
        return pk

    def decode_signature(self, signature: BytesLike) -> bytes:
        """Validate a compressed G2 signature; raises ValueError if unusable."""
        sig = as_bytes(signature)
        if len(sig) != SIGNATURE_SIZE:
            raise ValueError(f"length: expected {SIGNATURE_SIZE} bytes, got {len(sig)}")
        try:
            point = signature_to_G2(sig)
        except Exception as e:
            raise ValueError(f"not a G2 point: {e}") from e
        if not subgroup_check(point):
            raise ValueError("not in the G2 subgroup")
        return sig

    def verify_signature(self, public_key: bytes, message: bytes, signature: bytes) -> bool:
        """Pairing check e(pk, H(m)) == e(g1, sig) under this scheme's DST."""
        return bool(self.ciphersuite.Verify(public_key, message, signature))

    # ------------------------- randomness -------------------------

    def derive_randomness(self, signature: BytesLike) -> bytes:
        """Hash the raw signature bytes into the round's 64-byte randomness."""
        out = hashlib.new(self.randomness_hash, as_bytes(signature)).digest()
        if len(out) != RANDOMNESS_SIZE:  # pragma: no cover - guarded by RANDOMNESS_HASHES
            raise ValueError(f"{self.randomness_hash} produced {len(out)} bytes")
        return out


DEFAULT_SCHEME: Scheme = Scheme()
SHA256_SCHEME: Scheme = Scheme(
    scheme_id=SCHEME_CHAINED_SHA256, message_format=MESSAGE_FORMAT_SHA256
)

_KNOWN: Dict[str, Scheme] = {
    DEFAULT_SCHEME.scheme_id: DEFAULT_SCHEME,
    SHA256_SCHEME.scheme_id: SHA256_SCHEME,
}


def scheme_by_id(scheme_id: str) -> Scheme:
    """Look up a built-in scheme by the identifier beacon nodes publish."""
    try:
        return _KNOWN[scheme_id]
    except KeyError:
        raise ValueError(f"Unknown scheme id: {scheme_id!r}") from None
