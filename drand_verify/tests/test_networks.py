from __future__ import annotations

import hashlib

import pytest

from drand_verify.networks import NETWORKS, SCHEME_IDS, Beacon, get_network, scheme_from_id
from drand_verify.verify import Scheme

from .conftest import load_vectors

_VECTORS = load_vectors()


def test_scheme_ids():
    assert scheme_from_id("pedersen-bls-chained") is Scheme.CHAINED_G1
    assert scheme_from_id("pedersen-bls-unchained") is Scheme.CHAINED_G1
    assert scheme_from_id("bls-unchained-on-g1") is Scheme.FASTNET_G2
    assert scheme_from_id("bls-unchained-g1-rfc9380") is Scheme.RFC_G2
    assert set(SCHEME_IDS.values()) == set(Scheme)
    with pytest.raises(ValueError, match="bls-unchained-on-g2"):
        scheme_from_id("bls-unchained-on-g2")


def test_presets_are_consistent():
    for name, net in NETWORKS.items():
        assert net.name == name
        assert len(bytes.fromhex(net.chain_hash)) == 32
        assert len(bytes.fromhex(net.public_key)) == net.scheme.pubkey_size
    assert NETWORKS["mainnet"].chained
    assert not NETWORKS["quicknet"].chained


@pytest.mark.parametrize("name", ["mainnet", "testnet-unchained", "fastnet", "quicknet"])
def test_preset_keys_match_vectors(name):
    assert NETWORKS[name].public_key == _VECTORS[name]["public_key"]
    assert NETWORKS[name].scheme is scheme_from_id(_VECTORS[name]["scheme"])


def test_get_network_unknown():
    with pytest.raises(KeyError, match="Unknown network"):
        get_network("devnet")


def test_beacon_from_json():
    b = Beacon.from_json(
        {
            "round": 72785,
            "randomness": "ignored",
            "signature": "0x" + "ab" * 96,
            "previous_signature": "cd" * 96,
        }
    )
    assert b.round == 72785
    assert b.signature == b"\xab" * 96
    assert b.previous_signature == b"\xcd" * 96


def test_beacon_from_json_unchained_and_errors():
    b = Beacon.from_json({"round": 1, "signature": "00"})
    assert b.previous_signature == b""
    with pytest.raises(ValueError, match="signature"):
        Beacon.from_json({"round": 1})
    with pytest.raises(ValueError, match="not valid hex"):
        Beacon.from_json({"round": 1, "signature": "zz"})
    with pytest.raises(TypeError):
        Beacon.from_json([1, "00"])


def test_beacon_validates_fields():
    with pytest.raises(ValueError):
        Beacon(round=-1, signature=b"")
    with pytest.raises(TypeError):
        Beacon(round=1, signature="00")


def test_unchained_network_rejects_previous_signature():
    with pytest.raises(ValueError, match="unchained"):
        NETWORKS["quicknet"].verify(Beacon(round=1, signature=bytes(48), previous_signature=b"\x01"))


@pytest.mark.slow
def test_network_verifies_published_beacon():
    case = _VECTORS["mainnet"]["valid"][0]
    beacon = Beacon.from_json(case)
    net = get_network("mainnet")
    assert net.verify(beacon)
    assert beacon.randomness() == hashlib.sha256(beacon.signature).digest()


@pytest.mark.slow
def test_network_verify_raw():
    case = _VECTORS["testnet-unchained"]["valid"][0]
    net = get_network("testnet-unchained")
    assert net.verify_raw(case["round"], b"", bytes.fromhex(case["signature"]))


def test_beacon_from_json_round_types():
    assert Beacon.from_json({"round": "72785", "signature": "00"}).round == 72785
    for bad in (72785.9, 72785.0, True, "72785.9", "-1", None):
        with pytest.raises(ValueError, match="round"):
            Beacon.from_json({"round": bad, "signature": "00"})
