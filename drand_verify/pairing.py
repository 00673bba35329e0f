"""
Pairing equality check used by BLS verification.

    pairing_equal(p1, q1, p2, q2)  <=>  e(p1, q1) == e(p2, q2)

with p1, p2 in G1 and q1, q2 in G2. Instead of computing both pairings and
comparing two GT elements, the check runs one multi-input Miller loop over
(-p1, q1) and (p2, q2) and a single final exponentiation:

    FE(ML(-p1, q1) * ML(p2, q2)) == 1

which is the same equation by bilinearity at roughly half the cost.
See https://hackmd.io/@benjaminion/bls12-381#Final-exponentiation.
"""

from __future__ import annotations

from .engine import Point, get_engine

__all__ = ["pairing_equal"]


def pairing_equal(p1: Point, q1: Point, p2: Point, q2: Point) -> bool:
    return get_engine().pairing_equal(p1, q1, p2, q2)
