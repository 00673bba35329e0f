"""
drand_verify.tests
------------------
Test package for drand_verify.

Notes:
- Beacon vectors under drand_verify/test_vectors were taken from the public
  drand HTTP API; see the "source" field of each entry.
- Every full verification runs pure-Python pairings and costs seconds, so
  the Hypothesis profiles below keep example counts low for anything that
  touches the curve. Pure hashing properties override max_examples locally.

Environment knobs:
- HYPOTHESIS_PROFILE=dev|ci
- CI=true (auto-pick the 'ci' profile if HYPOTHESIS_PROFILE not set)
"""

from __future__ import annotations

import os

from hypothesis import HealthCheck, settings

settings.register_profile(
    "dev",
    settings(
        max_examples=10,
        deadline=None,
        suppress_health_check=(HealthCheck.too_slow,),
        derandomize=False,
    ),
)

settings.register_profile(
    "ci",
    settings(
        max_examples=25,
        deadline=None,
        suppress_health_check=(HealthCheck.too_slow,),
        derandomize=True,
    ),
)

_ci = (os.getenv("CI") or "").lower() not in ("", "0", "false", "no", "off")
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE") or ("ci" if _ci else "dev"))

__all__: tuple[str, ...] = ()
