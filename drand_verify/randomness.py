"""
Randomness derivation from a beacon signature.
"""

from __future__ import annotations

from .hashing import BytesLike, sha256

__all__ = ["derive_randomness"]


def derive_randomness(signature: BytesLike) -> bytes:
    """
    Return the 32-byte randomness of a beacon: SHA-256(signature).

    Nothing is validated here. Only trust the output for a signature that
    `verify` accepted.
    """
    return sha256(signature)
