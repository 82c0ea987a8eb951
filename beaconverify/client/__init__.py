"""
beaconverify.client
-------------------

Transport collaborator: fetches the distributed key and round payloads from
a beacon node over HTTP and verifies them with the core.
"""

from __future__ import annotations

from .http import BeaconClient

__all__ = ["BeaconClient"]
