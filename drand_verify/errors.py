"""
drand_verify errors.

A small, typed hierarchy of exceptions raised while decoding points and
verifying beacons. Callers can catch the base `DrandVerifyError` to handle
every library failure, or catch the concrete subclasses:

- `InvalidPoint` and its subclasses: bytes that do not decode to a usable
  curve point (wrong length, not on the curve, not in the subgroup).
- `VerificationError` and its subclasses: a `verify` call that could not be
  evaluated because one of its inputs is malformed.

A signature that decodes fine but does not match is *not* an error; `verify`
returns ``False`` for it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class DrandVerifyError(Exception):
    """Base class for all drand_verify errors."""
    pass


class InvalidPoint(DrandVerifyError):
    """Base class for compressed point decoding failures."""
    pass


@dataclass
class InvalidLength(InvalidPoint):
    """
    Raised when the input length matches none of the known point sizes and
    the target group cannot be inferred from context.

    Attributes:
        actual: Number of bytes received.
    """
    actual: int

    def __str__(self) -> str:
        return (
            "Invalid input length for point (must be in compressed format): "
            f"Expected 48 or 96, actual: {self.actual}"
        )


@dataclass
class UnexpectedLength(InvalidPoint):
    """
    Raised when the input length differs from the size of the group being decoded.

    Attributes:
        expected: Compressed size of the target group (48 or 96).
        actual: Number of bytes received.
    """
    expected: int
    actual: int

    def __str__(self) -> str:
        return (
            "Invalid input length for point (must be in compressed format): "
            f"Expected {self.expected}, actual: {self.actual}"
        )


@dataclass
class DecodingError(InvalidPoint):
    """
    Raised when correctly sized bytes do not encode a valid group element
    (bad flag bits, non-canonical coordinate, off-curve or outside the subgroup).

    Attributes:
        reason: Optional detail from the curve engine.
    """
    reason: Optional[str] = None

    def __str__(self) -> str:
        return f"Invalid point: {self.reason}" if self.reason else "Invalid point"


class VerificationError(DrandVerifyError):
    """Base class for errors raised from a verify call."""
    pass


@dataclass
class InvalidFieldPoint(VerificationError):
    """
    Raised when a point-valued input of a verify call fails to decode.

    Attributes:
        field: Name of the offending input (e.g. 'signature').
        msg: Message of the underlying `InvalidPoint`.
    """
    field: str
    msg: str

    def __str__(self) -> str:
        return f"Invalid point for field {self.field}: {self.msg}"


__all__ = [
    "DrandVerifyError",
    "InvalidPoint",
    "InvalidLength",
    "UnexpectedLength",
    "DecodingError",
    "VerificationError",
    "InvalidFieldPoint",
]
