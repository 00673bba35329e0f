"""
drand_verify constants.

This module centralizes:
- The two BLS12-381 source groups and their compressed point sizes
- Digest sizes used for the beacon message and the derived randomness
- Domain separation tags handed to hash-to-curve, one per scheme

Keep these stable; changing any of them invalidates every signature already
published by the networks that use them.
"""

from __future__ import annotations

from enum import Enum

# -----------------------------
# Groups / encodings
# -----------------------------

G1_COMPRESSED_SIZE: int = 48
G2_COMPRESSED_SIZE: int = 96


class Group(str, Enum):
    """Source group of a BLS12-381 point."""

    G1 = "g1"
    G2 = "g2"

    @property
    def compressed_size(self) -> int:
        return G1_COMPRESSED_SIZE if self is Group.G1 else G2_COMPRESSED_SIZE

    @property
    def other(self) -> "Group":
        return Group.G2 if self is Group.G1 else Group.G1


# SHA-256 output; both the signed message and the randomness are this long.
DIGEST_SIZE: int = 32

# Rounds are serialized big-endian into this many bytes before hashing.
ROUND_SIZE: int = 8
MAX_ROUND: int = (1 << (8 * ROUND_SIZE)) - 1

# -----------------------------
# Domain separation (hash-to-curve DSTs)
# -----------------------------

# Signatures on G2, as used by the chained and the first unchained networks.
LEGACY_DST: bytes = b"BLS_SIG_BLS12381G2_XMD:SHA-256_SSWU_RO_NUL_"

# Signatures on G1 per RFC 9380 / the BLS signature draft (quicknet).
RFC_G1_DST: bytes = b"BLS_SIG_BLS12381G1_XMD:SHA-256_SSWU_RO_NUL_"

# Fastnet hashes to G1 but was launched with the G2 tag. Every fastnet
# signature depends on this exact value, so it must stay the G2 tag.
FASTNET_DST: bytes = b"BLS_SIG_BLS12381G2_XMD:SHA-256_SSWU_RO_NUL_"

__all__ = [
    "G1_COMPRESSED_SIZE",
    "G2_COMPRESSED_SIZE",
    "Group",
    "DIGEST_SIZE",
    "ROUND_SIZE",
    "MAX_ROUND",
    "LEGACY_DST",
    "RFC_G1_DST",
    "FASTNET_DST",
]
