"""
beaconverify.tests
------------------
Test package initializer for the beacon verifier.

Notes:
- Rounds are signed with a fixed, publicly known secret key. They are test
  fixtures only and MUST NOT be trusted as a real beacon.
"""

from __future__ import annotations

__all__: tuple[str, ...] = ()
