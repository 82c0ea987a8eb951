"""
Beacon verification: types package

Typed primitives shared across the verifier, client and CLI:

  • core: RoundId, RoundRecord, Valid (alias Randomness), ChainInfo

Re-exported here for convenience:
    from beaconverify.types import RoundRecord, Valid
"""

from __future__ import annotations

from .core import ChainInfo, Randomness, RoundId, RoundRecord, Valid

__all__ = [
    "RoundId",
    "RoundRecord",
    "Valid",
    "Randomness",
    "ChainInfo",
]
