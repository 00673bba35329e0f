from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any, Dict, Tuple

import pytest
from py_ecc.bls.g2_primitives import G1_to_pubkey, G2_to_signature
from py_ecc.bls.hash_to_curve import hash_to_G1, hash_to_G2
from py_ecc.optimized_bls12_381 import G1, G2, multiply

from drand_verify.config import load_config
from drand_verify.constants import Group
from drand_verify.engine import get_engine
from drand_verify.hashing import beacon_message
from drand_verify.verify import Scheme

VECTORS_PATH = Path(__file__).resolve().parent.parent / "test_vectors" / "beacons.json"


def load_vectors() -> Dict[str, Any]:
    with open(VECTORS_PATH, "r", encoding="utf-8") as f:
        return json.load(f)


def sign(scheme: Scheme, sk: int, round: int, previous_signature: bytes = b"") -> Tuple[bytes, bytes]:
    """
    Produce (public_key, signature) for a beacon under `scheme` with secret `sk`.

    Built directly on py_ecc so the verifier is exercised against an
    independently assembled signature.
    """
    msg = beacon_message(round, previous_signature)
    if scheme.pubkey_group is Group.G1:
        pk = G1_to_pubkey(multiply(G1, sk))
        sig = G2_to_signature(multiply(hash_to_G2(msg, scheme.dst, hashlib.sha256), sk))
    else:
        pk = G2_to_signature(multiply(G2, sk))
        sig = G1_to_pubkey(multiply(hash_to_G1(msg, scheme.dst, hashlib.sha256), sk))
    return bytes(pk), bytes(sig)


@pytest.fixture(scope="session")
def vectors() -> Dict[str, Any]:
    return load_vectors()


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch):
    """Each test reads DRAND_VERIFY_* from a clean environment."""
    for key in ("ENGINE", "NETWORK", "LOG_LEVEL", "LOG_FORMAT", "METRICS"):
        monkeypatch.delenv("DRAND_VERIFY_" + key, raising=False)
    load_config.cache_clear()
    get_engine.cache_clear()
    yield
    load_config.cache_clear()
    get_engine.cache_clear()
