"""
drand_verify.hashing
====================

SHA-256 helpers shared by message construction and randomness derivation.

The signed beacon message is

    SHA-256( previous_signature || round_be_u64 )

where ``previous_signature`` is empty on unchained networks.
See https://github.com/drand/drand-client/blob/master/wasm/chain/verify.go#L28-L33
"""

from __future__ import annotations

from hashlib import sha256 as _sha256
from typing import Union

from .constants import MAX_ROUND, ROUND_SIZE

BytesLike = Union[bytes, bytearray, memoryview]

__all__ = ["sha256", "round_to_bytes", "beacon_message", "check_round"]


def sha256(data: BytesLike) -> bytes:
    """Return SHA-256(data)."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("sha256 expects a bytes-like object")
    return _sha256(bytes(data)).digest()


def check_round(round: int) -> int:
    """Validate a round number as an unsigned 64-bit integer."""
    if isinstance(round, bool) or not isinstance(round, int):
        raise TypeError(f"round must be an int, got {type(round).__name__}")
    if not 0 <= round <= MAX_ROUND:
        raise ValueError(f"round must be in [0, 2**64), got {round}")
    return round


def round_to_bytes(round: int) -> bytes:
    return check_round(round).to_bytes(ROUND_SIZE, "big")


def beacon_message(round: int, previous_signature: BytesLike = b"") -> bytes:
    """Digest a beacon signs for `round` (chained when `previous_signature` is non-empty)."""
    if not isinstance(previous_signature, (bytes, bytearray, memoryview)):
        raise TypeError("previous_signature must be bytes-like")
    h = _sha256()
    h.update(bytes(previous_signature))
    h.update(round_to_bytes(round))
    return h.digest()
