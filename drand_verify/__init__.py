"""
drand_verify: verification of drand randomness beacons.

Checks BLS signatures of drand beacons against a network's group public key
for the three deployed schemes (chained G1 keys, fastnet and RFC 9380 G2
keys) and derives the beacon randomness from a verified signature.

    from drand_verify import Pubkey, Scheme, derive_randomness

    pk = Pubkey.from_fixed(Scheme.CHAINED_G1, pubkey_bytes)
    if pk.verify(round, previous_signature, signature):
        randomness = derive_randomness(signature)
"""

from __future__ import annotations

from .version import __version__
from .constants import FASTNET_DST, LEGACY_DST, RFC_G1_DST, Group
from .errors import (
    DecodingError,
    DrandVerifyError,
    InvalidFieldPoint,
    InvalidLength,
    InvalidPoint,
    UnexpectedLength,
    VerificationError,
)
from .randomness import derive_randomness
from .verify import Pubkey, Scheme, g1_pubkey, g2_pubkey_fastnet, g2_pubkey_rfc, verify

__all__ = [
    "__version__",
    "Group",
    "LEGACY_DST",
    "RFC_G1_DST",
    "FASTNET_DST",
    "DrandVerifyError",
    "InvalidPoint",
    "InvalidLength",
    "UnexpectedLength",
    "DecodingError",
    "VerificationError",
    "InvalidFieldPoint",
    "derive_randomness",
    "Pubkey",
    "Scheme",
    "verify",
    "g1_pubkey",
    "g2_pubkey_fastnet",
    "g2_pubkey_rfc",
]
