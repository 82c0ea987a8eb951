"""
Beacon verification constants.

This module centralizes:
- Scheme identifiers and the hash-to-curve domain separation tag
- Group element encoding sizes for BLS12-381
- Round number bounds and the randomness output width
- Transport defaults used by the client and CLI

Networks may override operational knobs via `beaconverify.config.BeaconConfig`,
but code that needs stable compile-time defaults can import from here.
"""

from __future__ import annotations

# -----------------------------
# Scheme identifiers
# -----------------------------
# Chained scheme: signature over u64be(round) || prev_sig.
SCHEME_CHAINED: str = "pedersen-bls-chained"
# Digest variant: signature over SHA-256(prev_sig || u64be(round)).
SCHEME_CHAINED_SHA256: str = "pedersen-bls-chained-sha256"

MESSAGE_FORMAT_CONCAT: str = "concat"
MESSAGE_FORMAT_SHA256: str = "sha256"
MESSAGE_FORMATS = (MESSAGE_FORMAT_CONCAT, MESSAGE_FORMAT_SHA256)

# Keep stable; changing it invalidates every signature ever produced.
DST_G2_BASIC: bytes = b"BLS_SIG_BLS12381G2_XMD:SHA-256_SSWU_RO_NUL_"

# -----------------------------
# Encodings (compressed, bytes)
# -----------------------------
G1_COMPRESSED_SIZE: int = 48
G2_COMPRESSED_SIZE: int = 96

PUBLIC_KEY_SIZE: int = G1_COMPRESSED_SIZE
SIGNATURE_SIZE: int = G2_COMPRESSED_SIZE

# -----------------------------
# Rounds & randomness
# -----------------------------
ROUND_BYTES: int = 8
MAX_ROUND: int = (1 << 64) - 1

# Hash names accepted for the randomness extractor (all 64-byte outputs).
RANDOMNESS_HASHES = ("sha512", "sha3_512", "blake2b")
DEFAULT_RANDOMNESS_HASH: str = "sha512"
RANDOMNESS_SIZE: int = 64

# -----------------------------
# Transport defaults
# -----------------------------
DEFAULT_BASE_URL: str = "http://127.0.0.1:8081"
DEFAULT_TIMEOUT_S: float = 1.0

__all__ = [
    "SCHEME_CHAINED",
    "SCHEME_CHAINED_SHA256",
    "MESSAGE_FORMAT_CONCAT",
    "MESSAGE_FORMAT_SHA256",
    "MESSAGE_FORMATS",
    "DST_G2_BASIC",
    "G1_COMPRESSED_SIZE",
    "G2_COMPRESSED_SIZE",
    "PUBLIC_KEY_SIZE",
    "SIGNATURE_SIZE",
    "ROUND_BYTES",
    "MAX_ROUND",
    "RANDOMNESS_HASHES",
    "DEFAULT_RANDOMNESS_HASH",
    "RANDOMNESS_SIZE",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT_S",
]
