"""
Known drand networks and the beacon record.

drand advertises a scheme ID in each chain's `/info`; :func:`scheme_from_id`
maps those IDs onto :class:`~drand_verify.verify.Scheme`. The presets in
:data:`NETWORKS` pin the group public keys of the public networks so callers
do not have to fetch (and trust) them at runtime.

Types provided:
  • Beacon:  one round's (round, signature, previous_signature)
  • Network: a named chain with its public key, scheme and chaining mode
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Mapping

from .hashing import BytesLike, check_round
from .randomness import derive_randomness
from .verify import Pubkey, Scheme, verify

__all__ = [
    "SCHEME_IDS",
    "scheme_from_id",
    "Beacon",
    "Network",
    "NETWORKS",
    "get_network",
]

SCHEME_IDS: Dict[str, Scheme] = {
    "pedersen-bls-chained": Scheme.CHAINED_G1,
    "pedersen-bls-unchained": Scheme.CHAINED_G1,
    "bls-unchained-on-g1": Scheme.FASTNET_G2,
    "bls-unchained-g1-rfc9380": Scheme.RFC_G2,
}


def scheme_from_id(scheme_id: str) -> Scheme:
    try:
        return SCHEME_IDS[scheme_id]
    except KeyError:
        raise ValueError(
            f"Unknown drand scheme '{scheme_id}'. Known: {', '.join(sorted(SCHEME_IDS))}"
        ) from None


def _hex(name: str, value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a hex string")
    s = value[2:] if value.startswith(("0x", "0X")) else value
    try:
        return bytes.fromhex(s)
    except ValueError as e:
        raise ValueError(f"{name} is not valid hex: {e}") from e


def _round(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.isdecimal():
        return int(value)
    raise ValueError(f"round must be an integer or a decimal string, got {value!r}")


@dataclass(frozen=True)
class Beacon:
    """
    A beacon as published by a drand node.

    Fields:
      round             : round number (u64)
      signature         : compressed signature point
      previous_signature: previous round's signature; empty when unchained
    """

    round: int
    signature: bytes
    previous_signature: bytes = b""

    def __post_init__(self) -> None:
        check_round(self.round)
        if not isinstance(self.signature, (bytes, bytearray)):
            raise TypeError("signature must be bytes")
        if not isinstance(self.previous_signature, (bytes, bytearray)):
            raise TypeError("previous_signature must be bytes")

    @classmethod
    def from_json(cls, obj: Mapping[str, Any]) -> "Beacon":
        """
        Build from a drand HTTP `/public/{round}` response body, e.g.:

          {"round": 72785, "randomness": "...", "signature": "...", "previous_signature": "..."}

        `randomness` is ignored; recompute it with :meth:`randomness` after verifying.
        """
        if not isinstance(obj, Mapping):
            raise TypeError("beacon JSON must be an object")
        missing = [k for k in ("round", "signature") if k not in obj]
        if missing:
            raise ValueError(f"beacon JSON missing required fields: {', '.join(missing)}")
        return cls(
            round=_round(obj["round"]),
            signature=_hex("signature", obj["signature"]),
            previous_signature=_hex("previous_signature", obj.get("previous_signature") or ""),
        )

    def randomness(self) -> bytes:
        return derive_randomness(self.signature)


@dataclass(frozen=True)
class Network:
    name: str
    chain_hash: str
    public_key: str
    scheme_id: str
    chained: bool

    @property
    def scheme(self) -> Scheme:
        return scheme_from_id(self.scheme_id)

    def pubkey(self) -> Pubkey:
        return _decode_pubkey(self.public_key, self.scheme)

    def verify(self, beacon: Beacon) -> bool:
        """Verify `beacon` against this network's key; see :func:`drand_verify.verify.verify`."""
        if not self.chained and beacon.previous_signature:
            raise ValueError(f"{self.name} is unchained; previous_signature must be empty")
        return verify(self.pubkey(), beacon.round, beacon.previous_signature, beacon.signature)

    def verify_raw(
        self, round: int, previous_signature: BytesLike, signature: BytesLike
    ) -> bool:
        return self.verify(Beacon(round, bytes(signature), bytes(previous_signature)))


@lru_cache(maxsize=None)
def _decode_pubkey(public_key_hex: str, scheme: Scheme) -> Pubkey:
    return Pubkey.from_fixed(scheme, bytes.fromhex(public_key_hex))


NETWORKS: Dict[str, Network] = {
    n.name: n
    for n in (
        # League of Entropy mainnet (https://api.drand.sh/info)
        Network(
            name="mainnet",
            chain_hash="8990e7a9aaed2ffed73dbd7092123d6f289930540d7651336225dc172e51b2ce",
            public_key=(
                "868f005eb8e6e4ca0a47c8a77ceaa5309a47978a7c71bc5cce96366b5d7a5699"
                "37c529eeda66c7293784a9402801af31"
            ),
            scheme_id="pedersen-bls-chained",
            chained=True,
        ),
        # https://pl-us.testnet.drand.sh/7672797f548f3f4748ac4bf3352fc6c6b6468c9ad40ad456a397545c6e2df5bf/info
        Network(
            name="testnet-unchained",
            chain_hash="7672797f548f3f4748ac4bf3352fc6c6b6468c9ad40ad456a397545c6e2df5bf",
            public_key=(
                "8200fc249deb0148eb918d6e213980c5d01acd7fc251900d9260136da3b54836"
                "ce125172399ddc69c4e3e11429b62c11"
            ),
            scheme_id="pedersen-bls-unchained",
            chained=False,
        ),
        # Unchained 3s mainnet launched 2023-03-01
        # https://api3.drand.sh/dbd506d6ef76e5f386f41c651dcb808c5bcbd75471cc4eafa3f4df7ad4e4c493/info
        Network(
            name="fastnet",
            chain_hash="dbd506d6ef76e5f386f41c651dcb808c5bcbd75471cc4eafa3f4df7ad4e4c493",
            public_key=(
                "a0b862a7527fee3a731bcb59280ab6abd62d5c0b6ea03dc4ddf6612fdfc9d01f"
                "01c31542541771903475eb1ec6615f8d0df0b8b6dce385811d6dcf8cbefb8759"
                "e5e616a3dfd054c928940766d9a5b9db91e3b697e5d70a975181e007f87fca5e"
            ),
            scheme_id="bls-unchained-on-g1",
            chained=False,
        ),
        # https://api.drand.sh/52db9ba70e0cc0f6eaf7803dd07447a1f5477735fd3f661792ba94600c84e971/info
        Network(
            name="quicknet",
            chain_hash="52db9ba70e0cc0f6eaf7803dd07447a1f5477735fd3f661792ba94600c84e971",
            public_key=(
                "83cf0f2896adee7eb8b5f01fcad3912212c437e0073e911fb90022d3e760183c"
                "8c4b450b6a0a6c3ac6a5776a2d1064510d1fec758c921cc22b0e17e63aaf4bcb"
                "5ed66304de9cf809bd274ca73bab4af5a6e9c76a4bc09e76eae8991ef5ece45a"
            ),
            scheme_id="bls-unchained-g1-rfc9380",
            chained=False,
        ),
    )
}


def get_network(name: str) -> Network:
    try:
        return NETWORKS[name]
    except KeyError:
        raise KeyError(f"Unknown network '{name}'. Known: {', '.join(sorted(NETWORKS))}") from None
