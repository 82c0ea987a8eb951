"""
Shared fixtures: a deterministic signing key and a short chain of honestly
signed rounds, produced with py_ecc's reference BLS signer over message
bytes laid out here by hand, so the package's own message builder is never
used to produce what it is later checked against.

Signing and pairing checks are slow in pure Python, so the chain is built once
per session and reused by every test module.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Dict, List

import pytest

from beaconverify.constants import MESSAGE_FORMAT_SHA256
from beaconverify.scheme import DEFAULT_SCHEME, SHA256_SCHEME, Scheme
from beaconverify.types.core import RoundId, RoundRecord

# Any scalar in [1, r) works; fixed so failures are reproducible.
SECRET_KEY = 0x2A5F1C0DE1B7E44C93A2F00D5EEDBEEF0123456789ABCDEF0FEDCBA987654321
GENESIS_SEED = hashlib.sha256(b"beaconverify test genesis").digest()


@dataclass(frozen=True)
class Chain:
    scheme: Scheme
    public_key: bytes
    rounds: Dict[int, RoundRecord]

    def latest(self) -> RoundRecord:
        return self.rounds[max(self.rounds)]


def signed_message(scheme: Scheme, round_id: int, previous_signature: bytes) -> bytes:
    rnd = round_id.to_bytes(8, "big")
    if scheme.message_format == MESSAGE_FORMAT_SHA256:
        return hashlib.sha256(previous_signature + rnd).digest()
    return rnd + previous_signature


def sign_round(scheme: Scheme, round_id: int, previous_signature: bytes) -> RoundRecord:
    msg = signed_message(scheme, round_id, previous_signature)
    sig = bytes(scheme.ciphersuite.Sign(SECRET_KEY, msg))
    return RoundRecord(
        round=RoundId(round_id),
        previous_signature=previous_signature,
        signature=sig,
        randomness=hashlib.sha512(sig).digest(),
    )


def _build_chain(scheme: Scheme, rounds: List[int]) -> Chain:
    pk = bytes(scheme.ciphersuite.SkToPk(SECRET_KEY))
    out: Dict[int, RoundRecord] = {}
    prev = GENESIS_SEED
    for r in rounds:
        rec = sign_round(scheme, r, prev)
        out[r] = rec
        prev = rec.signature
    return Chain(scheme=scheme, public_key=pk, rounds=out)


@pytest.fixture(scope="session")
def chain() -> Chain:
    """Rounds 1 and 2 of a beacon on the default scheme."""
    return _build_chain(DEFAULT_SCHEME, [1, 2])


@pytest.fixture(scope="session")
def sha256_chain() -> Chain:
    return _build_chain(SHA256_SCHEME, [1])


@pytest.fixture(scope="session")
def genesis_round() -> Chain:
    """A round 0 with an empty previous signature."""
    pk = bytes(DEFAULT_SCHEME.ciphersuite.SkToPk(SECRET_KEY))
    rec = sign_round(DEFAULT_SCHEME, 0, b"")
    return Chain(scheme=DEFAULT_SCHEME, public_key=pk, rounds={0: rec})
