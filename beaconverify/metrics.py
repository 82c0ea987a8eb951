"""
Prometheus metrics for beacon verification.

This module defines the instruments the transport client records after each
fetched round is verified:
  • verifications_total     : verification results per outcome
  • verify_seconds          : time spent in the verification pipeline
  • fetch_errors_total      : transport failures per endpoint

The verifier core records nothing; metrics belong to its callers.

Label cardinality is bounded: `outcome` takes one of the failure kinds or
"valid", and `endpoint` one of the node API paths the client calls.

Usage
-----
    from beaconverify.metrics import METRICS

    with METRICS.verify_timer():
        result = verifier.verify(...)
    METRICS.record_verification(outcome_of(result))

Pass your own registry to `Metrics` when running several clients or in tests.
"""

from __future__ import annotations

from contextlib import contextmanager
from time import perf_counter
from typing import Iterable

from prometheus_client import REGISTRY, Counter, Histogram

from .errors import VerifyFailure

# --------- Vocabularies (kept small for bounded cardinality) ---------

_OUTCOMES = (
    "valid",
    "decode_error",
    "signature_invalid",
    "ambiguous_round_binding",
    "randomness_mismatch",
)

_ENDPOINTS = (
    "info",
    "public",
)

# Two pairing checks in pure Python: tens of ms up to several seconds.
_VERIFY_BUCKETS = (
    0.01, 0.025, 0.05,
    0.1, 0.25, 0.5,
    1.0, 2.5, 5.0, 10.0, 30.0,
)


def outcome_of(result: object) -> str:
    """Map a verification result to its `outcome` label."""
    if isinstance(result, VerifyFailure):
        return result.kind
    return "valid"


class Metrics:
    """
    Container for the beacon verification Prometheus instruments.

    Args:
        namespace: Prometheus metric namespace (prefix).
        subsystem: Prometheus metric subsystem.
        registry:  Prometheus registry to register the metrics with.
    """

    def __init__(
        self,
        *,
        namespace: str = "beaconverify",
        subsystem: str = "client",
        registry=REGISTRY,
        verify_buckets: Iterable[float] = _VERIFY_BUCKETS,
    ) -> None:
        self.verifications_total = Counter(
            "verifications_total",
            "Number of fetched rounds verified, labeled by outcome.",
            labelnames=("outcome",),
            namespace=namespace,
            subsystem=subsystem,
            registry=registry,
        )
        self.fetch_errors_total = Counter(
            "fetch_errors_total",
            "Number of failed requests to the beacon node, labeled by endpoint.",
            labelnames=("endpoint",),
            namespace=namespace,
            subsystem=subsystem,
            registry=registry,
        )
        self.verify_seconds = Histogram(
            "verify_seconds",
            "Time spent verifying a round (seconds).",
            buckets=tuple(verify_buckets),
            namespace=namespace,
            subsystem=subsystem,
            registry=registry,
        )

    # ----- Recording helpers -------------------------------------------------

    def record_verification(self, outcome: str) -> None:
        if outcome not in _OUTCOMES:
            raise ValueError(f"unknown verification outcome: {outcome!r}")
        self.verifications_total.labels(outcome=outcome).inc()

    def record_fetch_error(self, endpoint: str) -> None:
        if endpoint not in _ENDPOINTS:
            raise ValueError(f"unknown endpoint: {endpoint!r}")
        self.fetch_errors_total.labels(endpoint=endpoint).inc()

    def observe_verify(self, seconds: float) -> None:
        self.verify_seconds.observe(float(seconds))

    @contextmanager
    def verify_timer(self):
        """
        Context manager to time a verification block.

            with METRICS.verify_timer():
                verifier.verify(...)
        """
        start = perf_counter()
        try:
            yield
        finally:
            self.observe_verify(perf_counter() - start)


# Singleton used by the default client
METRICS = Metrics()

__all__ = [
    "Metrics",
    "METRICS",
    "outcome_of",
]
