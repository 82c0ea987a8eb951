"""
beaconverify.utils
------------------

Light helpers shared across the verifier, client and CLI (hex/bytes
normalization, fixed-width round encoding, timing-safe comparison).

This package file deliberately avoids eager imports to keep dependency order
simple.
"""

__all__: list[str] = []
