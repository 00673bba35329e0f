"""
drand_verify.verify
===================

BLS verification of drand beacons for the three deployed schemes.

A scheme fixes which group carries the public key (the signature lives in
the other one) and which domain separation tag the message is hashed with:

    scheme       pubkey  signature  DST
    CHAINED_G1   G1      G2         LEGACY_DST
    FASTNET_G2   G2      G1         FASTNET_DST (the G2 tag, kept for compatibility)
    RFC_G2       G2      G1         RFC_G1_DST

All three share one algorithm, :func:`verify`:

1. message = SHA-256(previous_signature || round_be_u64)
2. H = hash_to_curve(message, scheme.dst, scheme.signature_group)
3. sigma = decode(signature)                (malformed -> InvalidFieldPoint)
4. G1 key: e(g1, sigma) == e(pk, H)
   G2 key: e(sigma, g2) == e(H, pk)

Usage
-----
    pk = Pubkey.from_fixed(Scheme.RFC_G2, bytes.fromhex(quicknet_pk_hex))
    ok = pk.verify(1000, b"", signature)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .config import load_config
from .constants import FASTNET_DST, G1_COMPRESSED_SIZE, G2_COMPRESSED_SIZE, LEGACY_DST, RFC_G1_DST, Group
from .engine import Point, get_engine
from .errors import InvalidFieldPoint, InvalidLength, InvalidPoint
from .hash_to_curve import hash_to_curve
from .hashing import BytesLike, beacon_message
from .logging import get_logger
from .metrics import METRICS
from .pairing import pairing_equal
from .points import decode_fixed, decode_variable, encode

log = get_logger(__name__)

__all__ = [
    "Scheme",
    "Pubkey",
    "verify",
    "g1_pubkey",
    "g2_pubkey_fastnet",
    "g2_pubkey_rfc",
]


class Scheme(Enum):
    """The closed set of signature schemes drand networks use."""

    CHAINED_G1 = ("chained-g1", Group.G1, LEGACY_DST)
    FASTNET_G2 = ("fastnet-g2", Group.G2, FASTNET_DST)
    RFC_G2 = ("rfc-g2", Group.G2, RFC_G1_DST)

    def __init__(self, label: str, pubkey_group: Group, dst: bytes) -> None:
        self.label = label
        self.pubkey_group = pubkey_group
        self.dst = dst

    @property
    def signature_group(self) -> Group:
        return self.pubkey_group.other

    @property
    def pubkey_size(self) -> int:
        return self.pubkey_group.compressed_size

    @property
    def signature_size(self) -> int:
        return self.signature_group.compressed_size


@dataclass(frozen=True)
class Pubkey:
    """
    A decoded group public key bound to its scheme.

    Build instances with the classmethods below; they guarantee the key
    decoded to a valid curve point before the object exists.
    """

    scheme: Scheme
    point: Point

    @classmethod
    def from_fixed(cls, scheme: Scheme, data: BytesLike) -> "Pubkey":
        """Checked decode of a compressed key of `scheme`'s pubkey group."""
        return cls(scheme, decode_fixed(data, scheme.pubkey_group, checked=True))

    @classmethod
    def from_fixed_unchecked(cls, scheme: Scheme, data: BytesLike) -> "Pubkey":
        """
        Like :meth:`from_fixed` without the subgroup check.

        Only for keys known to be valid (e.g. pinned in source or already
        validated); a key outside the subgroup breaks verification soundness.
        """
        return cls(scheme, decode_fixed(data, scheme.pubkey_group, checked=False))

    @classmethod
    def from_variable(cls, data: BytesLike, scheme: Optional[Scheme] = None) -> "Pubkey":
        """
        Decode a key of arbitrary length.

        With `scheme`, the length must match its pubkey group (UnexpectedLength
        otherwise). Without, 48 bytes select CHAINED_G1 and 96 bytes FASTNET_G2;
        any other length raises InvalidLength.
        """
        if scheme is None:
            size = len(data)
            if size == G1_COMPRESSED_SIZE:
                scheme = Scheme.CHAINED_G1
            elif size == G2_COMPRESSED_SIZE:
                scheme = Scheme.FASTNET_G2
            else:
                raise InvalidLength(actual=size)
        return cls(scheme, decode_variable(data, scheme.pubkey_group))

    def to_bytes(self) -> bytes:
        return encode(self.point, self.scheme.pubkey_group)

    def verify(self, round: int, previous_signature: BytesLike, signature: BytesLike) -> bool:
        """Shorthand for :func:`verify` with this key."""
        return verify(self, round, previous_signature, signature)

    def __repr__(self) -> str:
        return f"Pubkey(scheme={self.scheme.name}, key={self.to_bytes().hex()})"


def g1_pubkey(data: BytesLike) -> Pubkey:
    return Pubkey.from_variable(data, Scheme.CHAINED_G1)


def g2_pubkey_fastnet(data: BytesLike) -> Pubkey:
    return Pubkey.from_variable(data, Scheme.FASTNET_G2)


def g2_pubkey_rfc(data: BytesLike) -> Pubkey:
    return Pubkey.from_variable(data, Scheme.RFC_G2)


def verify(pk: Pubkey, round: int, previous_signature: BytesLike, signature: BytesLike) -> bool:
    """
    Check a beacon against `pk`.

    For unchained networks pass an empty `previous_signature`.

    Returns True for a valid signature and False for a well-formed signature
    that does not match. Raises InvalidFieldPoint when `signature` does not
    decode to a point of the scheme's signature group.
    """
    scheme = pk.scheme
    if not load_config().metrics_enabled:
        return _verify(pk, round, previous_signature, signature)

    with METRICS.verify_timer(scheme.label):
        try:
            ok = _verify(pk, round, previous_signature, signature)
        except InvalidFieldPoint:
            METRICS.record_verification(scheme.label, "error")
            raise
    METRICS.record_verification(scheme.label, "valid" if ok else "invalid")
    return ok


def _verify(pk: Pubkey, round: int, previous_signature: BytesLike, signature: BytesLike) -> bool:
    scheme = pk.scheme
    msg = beacon_message(round, previous_signature)
    msg_point = hash_to_curve(msg, scheme.dst, scheme.signature_group)

    try:
        sigma = decode_variable(signature, scheme.signature_group)
    except InvalidPoint as err:
        raise InvalidFieldPoint(field="signature", msg=str(err)) from err

    engine = get_engine()
    if scheme.pubkey_group is Group.G1:
        ok = pairing_equal(engine.g1_generator(), sigma, pk.point, msg_point)
    else:
        ok = pairing_equal(sigma, engine.g2_generator(), msg_point, pk.point)

    log.debug("beacon checked", extra={"scheme": scheme.label, "round": round, "valid": ok})
    return ok
