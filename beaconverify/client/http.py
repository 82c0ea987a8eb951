from __future__ import annotations

"""
beaconverify • client • HTTP

Synchronous client for a beacon node's public HTTP API. It fetches the
distributed public key and per-round payloads and hands them to the
verifier; it is the only part of the package that performs I/O.

Endpoints (conventions)
-----------------------
- GET {base}[/{chain_hash}]/info
    Returns JSON:
      {
        "public_key": "868f…",     # compressed G1 (hex)
        "period": 30,              # seconds between rounds
        "genesis_time": 1595431050,
        "hash": "8990…",           # chain hash (hex)
        "schemeID": "pedersen-bls-chained"
      }

- GET {base}[/{chain_hash}]/public/latest
- GET {base}[/{chain_hash}]/public/{round}
    Returns JSON:
      {
        "round": 367,
        "randomness": "3439…",          # claimed, 64 bytes (hex)
        "signature": "90957…",          # compressed G2 (hex)
        "previous_signature": "a1b2…"   # hex, may be empty
      }

This client:
- Performs exactly one request per call with a per-request timeout (1s default).
- Never retries; connection errors, timeouts, non-2xx statuses and malformed
  bodies surface as :class:`beaconverify.errors.TransportError`.
- Keeps an internal httpx.Client; safe to use as a context manager.

Usage
-----
    with BeaconClient("http://127.0.0.1:8081") as c:
        key = c.get_dist_key()
        rnd = c.get_randomness(key)
        print(rnd.index, rnd.value.hex())
"""

import logging
from typing import Any, Dict, Optional

import httpx

from ..beacon.verifier import RoundVerifier, ensure_valid
from ..config import BeaconConfig
from ..constants import DEFAULT_TIMEOUT_S
from ..errors import TransportError, VerifyFailure
from ..metrics import METRICS, Metrics, outcome_of
from ..scheme import DEFAULT_SCHEME, Scheme
from ..types.core import ChainInfo, Randomness, RoundRecord
from ..utils.bytes import HexOrBytes, to_hex

logger = logging.getLogger(__name__)


class BeaconClient:
    """
    Fetch-and-verify client for one beacon chain.
    """

    def __init__(
        self,
        base_url: str,
        *,
        chain_hash: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_S,
        scheme: Scheme = DEFAULT_SCHEME,
        metrics: Metrics = METRICS,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.chain_hash = chain_hash
        self.timeout = float(timeout)
        self.verifier = RoundVerifier(scheme)
        self.metrics = metrics

        self._own_client = client is None
        self._client = client or httpx.Client(
            base_url=self.base_url,
            headers={"Accept": "application/json"},
            timeout=self.timeout,
        )

    @classmethod
    def from_config(cls, cfg: BeaconConfig, **kwargs: Any) -> "BeaconClient":
        return cls(
            cfg.client.base_url,
            chain_hash=cfg.client.chain_hash,
            timeout=cfg.client.timeout_s,
            scheme=cfg.scheme.to_scheme(),
            **kwargs,
        )

    # --- context management

    def close(self) -> None:
        if self._own_client:
            self._client.close()

    def __enter__(self) -> "BeaconClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # --- high-level API

    def get_chain_info(self) -> ChainInfo:
        data = self._get_json(self._path("info"), endpoint="info")
        try:
            return ChainInfo.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            self.metrics.record_fetch_error("info")
            raise TransportError(url=self._url(self._path("info")), reason=f"bad chain info: {e}") from e

    def get_dist_key(self) -> str:
        """Return the distributed public key as hex."""
        try:
            return self.get_chain_info().public_key_hex
        except TransportError as e:
            logger.error("could not get distributed key: %s", e.reason)
            raise

    def get_round(self, round_id: Optional[int] = None) -> RoundRecord:
        """Fetch a round payload (latest when *round_id* is None), unverified."""
        which = "latest" if round_id is None else str(int(round_id))
        path = self._path("public", which)
        data = self._get_json(path, endpoint="public")
        try:
            return RoundRecord.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            self.metrics.record_fetch_error("public")
            raise TransportError(url=self._url(path), reason=f"bad round payload: {e}") from e

    def get_randomness(self, dist_key: HexOrBytes, round_id: Optional[int] = None) -> Randomness:
        """
        Fetch a round and verify it against *dist_key*.

        Returns the authenticated (index, value) pair. Raises the verification
        failure kind when the round does not verify, TransportError when the
        node could not be queried.
        """
        try:
            record = self.get_round(round_id)
        except TransportError as e:
            logger.error("could not get public randomness: %s", e.reason)
            raise

        with self.metrics.verify_timer():
            result = self.verifier.verify_record(dist_key, record)
        self.metrics.record_verification(outcome_of(result))

        if isinstance(result, VerifyFailure):
            logger.warning("Invalid Random Number: round=%d %s", int(record.round), result)
        else:
            logger.debug("verified round=%d randomness=%s", result.index, to_hex(result.value))
        return ensure_valid(result)

    # --- internals

    def _path(self, *parts: str) -> str:
        segs = ([self.chain_hash] if self.chain_hash else []) + list(parts)
        return "/" + "/".join(segs)

    def _url(self, path: str) -> str:
        return self.base_url + path

    def _get_json(self, path: str, *, endpoint: str) -> Dict[str, Any]:
        url = self._url(path)
        try:
            resp = self._client.get(path)
        except httpx.TimeoutException as e:
            self.metrics.record_fetch_error(endpoint)
            raise TransportError(url=url, reason=f"timeout after {self.timeout}s") from e
        except httpx.HTTPError as e:
            self.metrics.record_fetch_error(endpoint)
            raise TransportError(url=url, reason=f"request failed: {e}") from e

        if resp.status_code >= 400:
            self.metrics.record_fetch_error(endpoint)
            snippet = resp.text[:256]
            raise TransportError(url=url, reason=f"HTTP {resp.status_code}: {snippet}")
        try:
            data = resp.json()
        except ValueError as e:
            self.metrics.record_fetch_error(endpoint)
            raise TransportError(url=url, reason="response not JSON") from e
        if not isinstance(data, dict):
            self.metrics.record_fetch_error(endpoint)
            raise TransportError(url=url, reason="response is not a JSON object")
        return data


__all__ = ["BeaconClient"]
