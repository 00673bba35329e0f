"""
Domain-separated hashing of messages onto G1 / G2.

Uses the RFC 9380 random-oracle suites BLS12381G1_XMD:SHA-256_SSWU_RO_ and
BLS12381G2_XMD:SHA-256_SSWU_RO_ (expand_message_xmd with SHA-256, simplified
SWU map, cofactor clearing). The result is a point in the prime-order
subgroup and depends only on ``(message, domain_tag, group)``.
"""

from __future__ import annotations

from .constants import Group
from .engine import Point, get_engine

__all__ = ["hash_to_curve", "hash_to_g1", "hash_to_g2"]


def _require_bytes(name: str, value: object) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} must be bytes-like, got {type(value).__name__}")
    return bytes(value)


def hash_to_g1(message: bytes, domain_tag: bytes) -> Point:
    return hash_to_curve(message, domain_tag, Group.G1)


def hash_to_g2(message: bytes, domain_tag: bytes) -> Point:
    return hash_to_curve(message, domain_tag, Group.G2)


def hash_to_curve(message: bytes, domain_tag: bytes, group: Group) -> Point:
    """Map `message` to a point of `group` under the domain separation tag `domain_tag`."""
    msg = _require_bytes("message", message)
    dst = _require_bytes("domain_tag", domain_tag)
    engine = get_engine()
    if group is Group.G1:
        return engine.hash_to_g1(msg, dst)
    return engine.hash_to_g2(msg, dst)
