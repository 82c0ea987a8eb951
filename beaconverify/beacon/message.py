"""
beaconverify.beacon.message
===========================

Build the canonical byte message a round's signature covers, from:
  - the **previous round's signature** (empty for the first round), and
  - the **round number**, encoded as an 8-byte big-endian unsigned integer.

Formats
-------
- ``concat`` (default) : u64be(round) || previous_signature
- ``sha256``           : SHA-256( previous_signature || u64be(round) )

Signers and verifiers must agree on exactly these bytes or every signature
becomes unverifiable. The builder is deterministic and stable: no ambient
time/IO, purely functional on its inputs.

Typical usage
-------------
    from beaconverify.beacon.message import build_message

    msg = build_message(prev_sig, 1234)
"""

from __future__ import annotations

import hashlib

from ..constants import MESSAGE_FORMAT_SHA256
from ..scheme import DEFAULT_SCHEME, Scheme
from ..utils.bytes import HexOrBytes, as_bytes, u64be


def build_message(
    previous_signature: HexOrBytes,
    round_id: int,
    scheme: Scheme = DEFAULT_SCHEME,
) -> bytes:
    """
    Return the message signed for *round_id* under *scheme*.

    Args:
        previous_signature: Signature of the previous round (bytes or hex); may be empty.
        round_id: Round number in [0, 2**64).
        scheme: Scheme selecting the message format.

    Raises:
        TypeError: round_id is not an int.
        ValueError: round_id is out of range or previous_signature is not valid hex.
    """
    prev = as_bytes(previous_signature)
    rnd = u64be(round_id)
    if scheme.message_format == MESSAGE_FORMAT_SHA256:
        return hashlib.sha256(prev + rnd).digest()
    return rnd + prev


__all__ = ["build_message"]
