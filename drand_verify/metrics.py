"""
Prometheus metrics for beacon verification.

  • drand_verify_verifications_total{scheme,outcome}: verify calls per scheme and outcome
  • drand_verify_seconds{scheme}: wall time of a verify call

Label cardinality is bounded: three schemes and the outcomes below.

Usage
-----
    from drand_verify.metrics import METRICS

    with METRICS.verify_timer("rfc-g2"):
        ok = pk.verify(round, b"", signature)
    METRICS.record_verification("rfc-g2", "valid" if ok else "invalid")

Construct your own `Metrics` with a private registry for tests or to expose
the instruments under a different namespace.
"""

from __future__ import annotations

from contextlib import contextmanager
from time import perf_counter
from typing import Iterable

from prometheus_client import REGISTRY, Counter, Histogram

_OUTCOMES = (
    "valid",    # signature matches
    "invalid",  # signature decodes but does not match
    "error",    # malformed input, nothing was checked
)

# Pure-Python pairings take seconds; native engines milliseconds.
_VERIFY_BUCKETS = (
    0.001, 0.005, 0.01, 0.05,
    0.1, 0.25, 0.5,
    1.0, 2.5, 5.0, 10.0, 30.0,
)


class Metrics:
    """
    Container for the verifier's Prometheus instruments.

    Args:
        namespace: Prometheus metric namespace (prefix).
        subsystem: Prometheus metric subsystem.
        registry:  Prometheus registry to register the metrics with.
    """

    def __init__(
        self,
        *,
        namespace: str = "drand",
        subsystem: str = "verify",
        registry=REGISTRY,
        buckets: Iterable[float] = _VERIFY_BUCKETS,
    ) -> None:
        self.verifications_total = Counter(
            "verifications_total",
            "Number of beacon verifications, labeled by scheme and outcome.",
            labelnames=("scheme", "outcome"),
            namespace=namespace,
            subsystem=subsystem,
            registry=registry,
        )
        self.verify_seconds = Histogram(
            "seconds",
            "Time spent verifying a beacon signature (seconds).",
            labelnames=("scheme",),
            buckets=tuple(buckets),
            namespace=namespace,
            subsystem=subsystem,
            registry=registry,
        )

    def record_verification(self, scheme: str, outcome: str) -> None:
        """Increment the verification counter; unknown outcomes count as 'error'."""
        if outcome not in _OUTCOMES:
            outcome = "error"
        self.verifications_total.labels(scheme=scheme, outcome=outcome).inc()

    def observe_verify(self, scheme: str, seconds: float) -> None:
        self.verify_seconds.labels(scheme=scheme).observe(float(seconds))

    @contextmanager
    def verify_timer(self, scheme: str):
        start = perf_counter()
        try:
            yield
        finally:
            self.observe_verify(scheme, perf_counter() - start)


# Singleton used by the verifier
METRICS = Metrics()

__all__ = ["Metrics", "METRICS"]
