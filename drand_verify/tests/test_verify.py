from __future__ import annotations

import pytest
from py_ecc.bls import G2Basic

from drand_verify.constants import Group
from drand_verify.errors import InvalidFieldPoint, InvalidLength, UnexpectedLength, VerificationError
from drand_verify.hashing import beacon_message
from drand_verify.networks import scheme_from_id
from drand_verify.verify import Pubkey, Scheme, g1_pubkey, g2_pubkey_fastnet, g2_pubkey_rfc, verify

from .conftest import load_vectors, sign

pytestmark = pytest.mark.slow

_VECTORS = load_vectors()


def _cases(kind):
    for name, net in _VECTORS.items():
        for case in net[kind]:
            yield pytest.param(net, case, id=f"{name}-{case['round']}-{case.get('why', kind)}")


def _pubkey(net):
    return Pubkey.from_fixed(scheme_from_id(net["scheme"]), bytes.fromhex(net["public_key"]))


# -------------------------
# Published beacons
# -------------------------

@pytest.mark.parametrize("net, case", list(_cases("valid")))
def test_published_beacons_verify(net, case):
    pk = _pubkey(net)
    prev = bytes.fromhex(case["previous_signature"])
    sig = bytes.fromhex(case["signature"])
    assert verify(pk, case["round"], prev, sig) is True


@pytest.mark.parametrize("net, case", list(_cases("invalid")))
def test_tampered_beacons_do_not_verify(net, case):
    pk = _pubkey(net)
    prev = bytes.fromhex(case["previous_signature"])
    sig = bytes.fromhex(case["signature"])
    assert verify(pk, case["round"], prev, sig) is False


def test_g1_signature_rejected_under_rfc_tag():
    # Same key bytes, same signature; only the hash-to-curve tag differs.
    net = _VECTORS["g1-signatures-test"]
    case = net["valid"][0]
    pk_bytes = bytes.fromhex(net["public_key"])
    sig = bytes.fromhex(case["signature"])
    assert g2_pubkey_fastnet(pk_bytes).verify(case["round"], b"", sig) is True
    assert g2_pubkey_rfc(pk_bytes).verify(case["round"], b"", sig) is False


# -------------------------
# Self-signed beacons
# -------------------------

SK = 0x2D7C7D8A3F0E1B0C9E6B5A4F3E2D1C0B0A09080706050403020100FFEEDDCCBB


@pytest.mark.parametrize("scheme", list(Scheme))
def test_self_signed_unchained(scheme):
    pk_bytes, sig = sign(scheme, SK, 42)
    pk = Pubkey.from_fixed(scheme, pk_bytes)
    assert pk.verify(42, b"", sig)
    assert not pk.verify(43, b"", sig)


def test_self_signed_chained():
    prev = bytes.fromhex(_VECTORS["mainnet"]["valid"][0]["signature"])
    pk_bytes, sig = sign(Scheme.CHAINED_G1, SK, 7, prev)
    pk = g1_pubkey(pk_bytes)
    assert pk.verify(7, prev, sig)
    assert not pk.verify(7, b"", sig)


def test_fastnet_and_rfc_differ_only_in_tag():
    pk_bytes, sig = sign(Scheme.RFC_G2, SK, 9)
    assert g2_pubkey_rfc(pk_bytes).verify(9, b"", sig)
    assert not g2_pubkey_fastnet(pk_bytes).verify(9, b"", sig)


def test_agrees_with_standard_bls_over_beacon_message():
    # The chained scheme is plain min-pubkey-size BLS over the beacon digest.
    sk = 1234567890
    prev = b"\x01" * 96
    msg = beacon_message(5, prev)
    pk = g1_pubkey(bytes(G2Basic.SkToPk(sk)))
    sig = bytes(G2Basic.Sign(sk, msg))
    assert pk.verify(5, prev, sig)


# -------------------------
# Malformed signatures
# -------------------------

def test_wrong_signature_length_is_field_error():
    pk_bytes, sig = sign(Scheme.RFC_G2, SK, 1)
    pk = g2_pubkey_rfc(pk_bytes)
    with pytest.raises(InvalidFieldPoint) as ei:
        pk.verify(1, b"", sig[:-1])
    assert ei.value.field == "signature"
    assert str(ei.value) == (
        "Invalid point for field signature: Invalid input length for point "
        "(must be in compressed format): Expected 48, actual: 47"
    )
    assert isinstance(ei.value, VerificationError)
    assert isinstance(ei.value.__cause__, UnexpectedLength)


def test_garbage_signature_is_field_error():
    pk = g1_pubkey(bytes.fromhex(_VECTORS["mainnet"]["public_key"]))
    with pytest.raises(InvalidFieldPoint):
        pk.verify(1, b"", bytes(96))


# -------------------------
# Scheme and Pubkey
# -------------------------

def test_scheme_shapes():
    assert Scheme.CHAINED_G1.pubkey_group is Group.G1
    assert Scheme.CHAINED_G1.signature_group is Group.G2
    assert (Scheme.CHAINED_G1.pubkey_size, Scheme.CHAINED_G1.signature_size) == (48, 96)
    for scheme in (Scheme.FASTNET_G2, Scheme.RFC_G2):
        assert scheme.pubkey_group is Group.G2
        assert (scheme.pubkey_size, scheme.signature_size) == (96, 48)


def test_pubkey_from_variable_dispatches_on_length():
    g1 = bytes.fromhex(_VECTORS["mainnet"]["public_key"])
    g2 = bytes.fromhex(_VECTORS["fastnet"]["public_key"])
    assert Pubkey.from_variable(g1).scheme is Scheme.CHAINED_G1
    assert Pubkey.from_variable(g2).scheme is Scheme.FASTNET_G2
    assert Pubkey.from_variable(g2, Scheme.RFC_G2).scheme is Scheme.RFC_G2
    assert Pubkey.from_variable(g1).to_bytes() == g1
    with pytest.raises(InvalidLength):
        Pubkey.from_variable(g1 + b"\x00")
    with pytest.raises(UnexpectedLength):
        g2_pubkey_rfc(g1)


def test_pubkey_unchecked_and_repr():
    g1 = bytes.fromhex(_VECTORS["mainnet"]["public_key"])
    pk = Pubkey.from_fixed_unchecked(Scheme.CHAINED_G1, g1)
    assert pk.to_bytes() == g1
    assert repr(pk) == f"Pubkey(scheme=CHAINED_G1, key={g1.hex()})"


def test_verify_unaffected_by_cli_settings(monkeypatch):
    from drand_verify.config import load_config
    from drand_verify.engine import get_engine

    monkeypatch.setenv("DRAND_VERIFY_LOG_FORMAT", "bogus")
    monkeypatch.setenv("DRAND_VERIFY_LOG_LEVEL", "LOUD")
    monkeypatch.setenv("DRAND_VERIFY_NETWORK", "")
    load_config.cache_clear()
    get_engine.cache_clear()

    net = _VECTORS["testnet-unchained"]
    case = net["valid"][0]
    pk = g1_pubkey(bytes.fromhex(net["public_key"]))
    assert pk.verify(case["round"], b"", bytes.fromhex(case["signature"])) is True
