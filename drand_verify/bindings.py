"""
String-in / bool-out entry point for foreign callers.

The argument types are chosen so a binding stays trivial: hex strings instead
of binary data and a round that fits in 32 bits (JavaScript numbers cannot
carry a u64). Every failure, whatever its kind, comes back as a single
`VerifyBeaconError` with a human-readable message.
"""

from __future__ import annotations

from .errors import DrandVerifyError
from .verify import Pubkey, verify

__all__ = ["VerifyBeaconError", "verify_beacon"]

_MAX_U32 = (1 << 32) - 1


class VerifyBeaconError(DrandVerifyError):
    """Any failure of :func:`verify_beacon`; `str(err)` is the message."""
    pass


def _decode_hex(name: str, value: str) -> bytes:
    if not isinstance(value, str):
        raise VerifyBeaconError(f"{name} must be a hex string")
    try:
        return bytes.fromhex(value)
    except ValueError as e:
        raise VerifyBeaconError(f"{name}: {e}") from e


def verify_beacon(
    pk_hex: str,
    round: int,
    previous_signature_hex: str,
    signature_hex: str,
) -> bool:
    """
    Verify a beacon given as hex strings.

    The scheme follows the public key length: 48 bytes for chained/unchained
    G1 keys, 96 bytes for fastnet G2 keys.
    """
    if isinstance(round, bool) or not isinstance(round, int) or not 0 <= round <= _MAX_U32:
        raise VerifyBeaconError(f"round must be an unsigned 32-bit integer, got {round!r}")
    try:
        pk = Pubkey.from_variable(_decode_hex("public key", pk_hex))
        previous_signature = _decode_hex("previous_signature", previous_signature_hex)
        signature = _decode_hex("signature", signature_hex)
        return verify(pk, round, previous_signature, signature)
    except VerifyBeaconError:
        raise
    except DrandVerifyError as e:
        raise VerifyBeaconError(str(e)) from e
