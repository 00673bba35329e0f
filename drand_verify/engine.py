"""
drand_verify.engine
===================

The curve engine: the one place that touches BLS12-381 arithmetic.

Everything else in the package (point codec, hash-to-curve, pairing check,
scheme orchestration) is backend-agnostic and reaches the curve only through
the :class:`CurveEngine` capability interface returned by :func:`get_engine`.

- Backend: `py_ecc` (``optimized_bls12_381`` for group/pairing arithmetic,
  ``bls.g2_primitives`` for ZCash-style point (de)compression and
  ``bls.hash_to_curve`` for the RFC 9380 SSWU suites).
- Selection: by name through :data:`ENGINES`, resolved once per process from
  ``DRAND_VERIFY_ENGINE`` (default ``py_ecc``).

Public API
----------
- CurveEngine (Protocol)
- PyEccEngine
- ENGINES, get_engine(name=None)

Notes
-----
- Points are opaque objects owned by the engine. Callers never inspect them.
- Decompression always checks the flag bits, coordinate range and curve
  equation. The prime-order subgroup check is the expensive part and is the
  only thing `subgroup_check=False` skips.
"""

from __future__ import annotations

import hashlib
from functools import lru_cache
from typing import Any, Callable, Dict, Optional, Protocol

from py_ecc.bls.g2_primitives import (
    G1_to_pubkey,
    G2_to_signature,
    pubkey_to_G1,
    signature_to_G2,
)
from py_ecc.bls.hash_to_curve import hash_to_G1, hash_to_G2
from py_ecc.optimized_bls12_381 import (
    FQ12,
    G1 as _G1,
    G2 as _G2,
    curve_order as _R,
    eq as _eq,
    final_exponentiate as _final_exponentiate,
    is_inf as _is_inf,
    multiply as _multiply,
    neg as _neg,
    pairing as _pairing,
)

from .constants import G1_COMPRESSED_SIZE, G2_COMPRESSED_SIZE
from .errors import DecodingError
from .logging import get_logger

log = get_logger(__name__)

# We do not type the point internals (they are backend specific).
Point = Any

__all__ = [
    "Point",
    "CurveEngine",
    "PyEccEngine",
    "ENGINES",
    "get_engine",
]


class CurveEngine(Protocol):
    """Capabilities the verifier needs from an elliptic-curve backend."""

    name: str

    def decompress_g1(self, data: bytes, subgroup_check: bool = True) -> Point: ...

    def decompress_g2(self, data: bytes, subgroup_check: bool = True) -> Point: ...

    def compress_g1(self, point: Point) -> bytes: ...

    def compress_g2(self, point: Point) -> bytes: ...

    def hash_to_g1(self, message: bytes, dst: bytes) -> Point: ...

    def hash_to_g2(self, message: bytes, dst: bytes) -> Point: ...

    def g1_generator(self) -> Point: ...

    def g2_generator(self) -> Point: ...

    def points_equal(self, a: Point, b: Point) -> bool: ...

    def pairing_equal(self, p1: Point, q1: Point, p2: Point, q2: Point) -> bool: ...


class PyEccEngine:
    """
    BLS12-381 engine on top of py_ecc's optimized (projective) implementation.

    Pure Python: a full beacon verification costs a few seconds of CPU. All
    methods are deterministic and do not touch shared state.
    """

    name = "py_ecc"

    # -------------------------
    # Point codec
    # -------------------------
    # The length checks below duplicate `points.decode_fixed`; they guard
    # callers that use an engine directly.

    def decompress_g1(self, data: bytes, subgroup_check: bool = True) -> Point:
        if len(data) != G1_COMPRESSED_SIZE:
            raise DecodingError(f"G1 encoding must be {G1_COMPRESSED_SIZE} bytes")
        try:
            point = pubkey_to_G1(bytes(data))
        except ValueError as e:
            raise DecodingError(str(e)) from e
        if subgroup_check and not self._in_subgroup(point):
            raise DecodingError("G1 point is not in the prime-order subgroup")
        return point

    def decompress_g2(self, data: bytes, subgroup_check: bool = True) -> Point:
        if len(data) != G2_COMPRESSED_SIZE:
            raise DecodingError(f"G2 encoding must be {G2_COMPRESSED_SIZE} bytes")
        try:
            point = signature_to_G2(bytes(data))
        except ValueError as e:
            raise DecodingError(str(e)) from e
        if subgroup_check and not self._in_subgroup(point):
            raise DecodingError("G2 point is not in the prime-order subgroup")
        return point

    def compress_g1(self, point: Point) -> bytes:
        return bytes(G1_to_pubkey(point))

    def compress_g2(self, point: Point) -> bytes:
        return bytes(G2_to_signature(point))

    @staticmethod
    def _in_subgroup(point: Point) -> bool:
        # r * P == O  iff  P lies in the order-r subgroup
        return bool(_is_inf(_multiply(point, _R)))

    # -------------------------
    # Hash to curve (expand_message_xmd + SSWU, SHA-256)
    # -------------------------

    def hash_to_g1(self, message: bytes, dst: bytes) -> Point:
        return hash_to_G1(bytes(message), bytes(dst), hashlib.sha256)

    def hash_to_g2(self, message: bytes, dst: bytes) -> Point:
        return hash_to_G2(bytes(message), bytes(dst), hashlib.sha256)

    # -------------------------
    # Group constants
    # -------------------------

    def g1_generator(self) -> Point:
        return _G1

    def g2_generator(self) -> Point:
        return _G2

    def points_equal(self, a: Point, b: Point) -> bool:
        return bool(_eq(a, b))

    # -------------------------
    # Pairing
    # -------------------------

    def pairing_equal(self, p1: Point, q1: Point, p2: Point, q2: Point) -> bool:
        """
        Return True iff e(p1, q1) == e(p2, q2).

        Evaluated as FE(ML(-p1, q1) * ML(p2, q2)) == 1 so only one final
        exponentiation is paid. py_ecc's pairing takes (G2, G1).
        """
        looped = _pairing(q1, _neg(p1), final_exponentiate=False) * _pairing(
            q2, p2, final_exponentiate=False
        )
        return _final_exponentiate(looped) == FQ12.one()


# -------------------------
# Registry
# -------------------------

ENGINES: Dict[str, Callable[[], CurveEngine]] = {
    "py_ecc": PyEccEngine,
}


@lru_cache(maxsize=None)
def get_engine(name: Optional[str] = None) -> CurveEngine:
    """
    Return the engine registered under `name` (default: the configured one).

    Raises
    ------
    ValueError
        If no engine is registered under that name.
    """
    if name is None:
        from .config import load_config

        name = load_config().engine
    key = name.strip().lower()
    factory = ENGINES.get(key)
    if factory is None:
        raise ValueError(
            f"Unknown curve engine '{name}'. Available: {', '.join(sorted(ENGINES))}"
        )
    engine = factory()
    log.debug("curve engine selected: %s", engine.name)
    return engine
