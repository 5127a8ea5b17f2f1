from starknet_py.constants import EC_ORDER
from starknet_py.net.signer.stark_curve_signer import KeyPair

from account_bootstrap import keys
from account_bootstrap.keys import generate_key_pair


def test_generate_key_pair_within_curve_order():
    key_pair = generate_key_pair()
    assert 0 < key_pair.private_key < EC_ORDER
    assert key_pair.public_key == KeyPair.from_private_key(key_pair.private_key).public_key


def test_generate_key_pair_is_random():
    assert generate_key_pair().private_key != generate_key_pair().private_key


def test_generate_key_pair_skips_zero(monkeypatch):
    draws = iter([bytes(32), (5).to_bytes(32, "big")])
    monkeypatch.setattr(keys.os, "urandom", lambda n: next(draws))
    assert generate_key_pair().private_key == 5
