"""
beaconverify.utils.bytes
========================

Hex/bytes normalization for values crossing the transport boundary plus a
timing-safe comparison. Kept stdlib-only and strict: a value that is not
clean hex is an error, never a silently truncated or zero value.

Highlights
----------
- :func:`from_hex` / :func:`to_hex` with strict validation.
- :func:`as_bytes` to accept either bytes-like values or hex strings.
- :func:`u64be` fixed-width round encoding.
- :func:`consteq` timing-safe equality (hmac.compare_digest).
"""

from __future__ import annotations

import hmac
import re
from typing import Union

from ..constants import MAX_ROUND, ROUND_BYTES

BytesLike = Union[bytes, bytearray, memoryview]
HexOrBytes = Union[str, bytes, bytearray, memoryview]

__all__ = [
    "BytesLike",
    "HexOrBytes",
    "from_hex",
    "to_hex",
    "as_bytes",
    "u64be",
    "consteq",
]

_HEX_RE = re.compile(r"^(?:0[xX])?[0-9a-fA-F]*$")


def from_hex(s: str) -> bytes:
    """
    Convert a hex string (with optional ``0x``) to bytes.

    Strict rules:
    - No whitespace.
    - Only 0-9a-fA-F characters (plus optional prefix).
    - Even-length nibble count.
    """
    if not isinstance(s, str):
        raise TypeError("from_hex expects a str")
    if not _HEX_RE.fullmatch(s):
        raise ValueError("invalid hex string (characters or whitespace)")
    body = s[2:] if s.startswith(("0x", "0X")) else s
    if len(body) % 2 != 0:
        raise ValueError("hex string must have an even number of nibbles")
    return bytes.fromhex(body)


def to_hex(b: BytesLike, *, prefix: str = "") -> str:
    """Encode bytes as lowercase hex, unprefixed by default (beacon node convention)."""
    return (prefix or "") + as_bytes(b).hex()


def as_bytes(x: HexOrBytes) -> bytes:
    """Normalize bytes-like values to :class:`bytes`; hex strings are decoded."""
    if isinstance(x, bytes):
        return x
    if isinstance(x, (bytearray, memoryview)):
        return bytes(x)
    if isinstance(x, str):
        return from_hex(x)
    raise TypeError(f"expected bytes-like or hex str, got {type(x)!r}")


def u64be(n: int) -> bytes:
    """Encode *n* as an 8-byte big-endian unsigned integer."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"round must be an int, got {type(n)!r}")
    if n < 0 or n > MAX_ROUND:
        raise ValueError(f"round must be in [0, {MAX_ROUND}], got {n}")
    return n.to_bytes(ROUND_BYTES, "big", signed=False)


def consteq(a: BytesLike, b: BytesLike) -> bool:
    """Timing-safe equality for two bytes-like values."""
    return hmac.compare_digest(as_bytes(a), as_bytes(b))
