"""
Compressed BLS12-381 point codec.

Decoding comes in three strengths:

- ``*_from_variable`` / :func:`decode_variable`: length check against the
  target group, then a fully checked decode. Use this for anything that comes
  from outside the process.
- ``*_from_fixed``: the caller already has exactly-sized bytes; checked unless
  ``checked=False``.
- ``*_from_fixed_unchecked``: skips the prime-order subgroup check, which is
  most of the decompression cost. Only for bytes that were validated upstream
  (e.g. a public key pinned in source). Never feed it untrusted input.
"""

from __future__ import annotations

from typing import Union

from .constants import G1_COMPRESSED_SIZE, G2_COMPRESSED_SIZE, Group
from .engine import Point, get_engine
from .errors import InvalidLength, UnexpectedLength

BytesLike = Union[bytes, bytearray, memoryview]

__all__ = [
    "g1_from_fixed",
    "g1_from_fixed_unchecked",
    "g1_from_variable",
    "g2_from_fixed",
    "g2_from_fixed_unchecked",
    "g2_from_variable",
    "decode_fixed",
    "decode_variable",
    "decode_any",
    "g1_to_bytes",
    "g2_to_bytes",
    "encode",
]


def _require_bytes(data: object) -> bytes:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"point encoding must be bytes-like, got {type(data).__name__}")
    return bytes(data)


def _require_len(data: bytes, expected: int) -> None:
    if len(data) != expected:
        raise UnexpectedLength(expected=expected, actual=len(data))


def decode_fixed(data: BytesLike, group: Group, checked: bool = True) -> Point:
    """
    Decode an exactly-sized compressed point of `group`.

    Raises UnexpectedLength for a wrong size and DecodingError for bytes that
    are not a valid point (or, when `checked`, not in the subgroup).
    """
    data = _require_bytes(data)
    _require_len(data, group.compressed_size)
    engine = get_engine()
    if group is Group.G1:
        return engine.decompress_g1(data, subgroup_check=checked)
    return engine.decompress_g2(data, subgroup_check=checked)


def decode_variable(data: BytesLike, group: Group) -> Point:
    """Length-checked, fully validated decode of a point in `group`."""
    return decode_fixed(data, group, checked=True)


def decode_any(data: BytesLike) -> Point:
    """Decode a point whose group is implied by its length (48 -> G1, 96 -> G2)."""
    size = len(_require_bytes(data))
    if size == G1_COMPRESSED_SIZE:
        return decode_variable(data, Group.G1)
    if size == G2_COMPRESSED_SIZE:
        return decode_variable(data, Group.G2)
    raise InvalidLength(actual=size)


def g1_from_fixed(data: BytesLike, checked: bool = True) -> Point:
    return decode_fixed(data, Group.G1, checked=checked)


def g1_from_fixed_unchecked(data: BytesLike) -> Point:
    """Like :func:`g1_from_fixed` without the subgroup check."""
    return decode_fixed(data, Group.G1, checked=False)


def g1_from_variable(data: BytesLike) -> Point:
    return decode_variable(data, Group.G1)


def g2_from_fixed(data: BytesLike, checked: bool = True) -> Point:
    return decode_fixed(data, Group.G2, checked=checked)


def g2_from_fixed_unchecked(data: BytesLike) -> Point:
    """Like :func:`g2_from_fixed` without the subgroup check."""
    return decode_fixed(data, Group.G2, checked=False)


def g2_from_variable(data: BytesLike) -> Point:
    return decode_variable(data, Group.G2)


def g1_to_bytes(point: Point) -> bytes:
    return get_engine().compress_g1(point)


def g2_to_bytes(point: Point) -> bytes:
    return get_engine().compress_g2(point)


def encode(point: Point, group: Group) -> bytes:
    """Compressed encoding of `point`; inverse of :func:`decode_fixed`."""
    return g1_to_bytes(point) if group is Group.G1 else g2_to_bytes(point)
