from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, NewType, Optional

from ..utils.bytes import HexOrBytes, as_bytes, to_hex

"""
Core typed primitives for beacon verification.

These are intentionally minimal and free of heavy dependencies so they can be
shared across the verifier, the transport client, the CLI and tests.

Types provided:
  • RoundId    : integer-typed identifier for a beacon round
  • RoundRecord: one beacon pulse as published by a node
  • Valid      : an authenticated (round index, randomness) pair
  • ChainInfo  : distributed public key plus chain metadata
"""

RoundId = NewType("RoundId", int)


def _field(d: Mapping[str, Any], *names: str) -> Any:
    for n in names:
        if n in d and d[n] is not None:
            return d[n]
    raise KeyError(f"missing field: {names[0]}")


@dataclass(frozen=True)
class RoundRecord:
    """
    One beacon round.

    Fields
    ------
    round              : RoundId
    previous_signature : bytes (empty for the first round)
    signature          : bytes
    randomness         : bytes (claimed by the publisher)
    """
    round: RoundId
    previous_signature: bytes
    signature: bytes
    randomness: bytes

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "RoundRecord":
        """
        Build from a node's JSON shape. Byte fields are hex, with or without 0x.
        Raises KeyError / ValueError on missing or malformed fields.
        """
        rnd = _field(d, "round", "round_id")
        if isinstance(rnd, bool) or not isinstance(rnd, int):
            raise ValueError(f"round must be an integer, got {rnd!r}")
        prev = d.get("previous_signature", d.get("previous")) or ""
        return cls(
            round=RoundId(rnd),
            previous_signature=as_bytes(prev),
            signature=as_bytes(_field(d, "signature")),
            randomness=as_bytes(_field(d, "randomness")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round": int(self.round),
            "randomness": to_hex(self.randomness),
            "signature": to_hex(self.signature),
            "previous_signature": to_hex(self.previous_signature),
        }


@dataclass(frozen=True)
class Valid:
    """A round whose signature and randomness verified."""
    round_index: RoundId
    randomness: bytes

    @property
    def index(self) -> int:
        return int(self.round_index)

    @property
    def value(self) -> bytes:
        return self.randomness

    def to_dict(self) -> Dict[str, Any]:
        return {"round": int(self.round_index), "randomness": to_hex(self.randomness)}


# The client hands verified rounds back under this name.
Randomness = Valid


@dataclass(frozen=True)
class ChainInfo:
    """Chain parameters as published by a beacon node's info endpoint."""
    public_key: bytes
    period: Optional[int] = None
    genesis_time: Optional[int] = None
    hash: Optional[str] = None
    scheme_id: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "ChainInfo":
        key: HexOrBytes = _field(d, "public_key", "key", "distKey")
        period = d.get("period")
        genesis = d.get("genesis_time")
        return cls(
            public_key=as_bytes(key),
            period=int(period) if period is not None else None,
            genesis_time=int(genesis) if genesis is not None else None,
            hash=d.get("hash"),
            scheme_id=d.get("schemeID") or d.get("scheme_id"),
        )

    @property
    def public_key_hex(self) -> str:
        return to_hex(self.public_key)
