"""Stark curve key material for new accounts."""

import os

from starknet_py.constants import EC_ORDER
from starknet_py.net.signer.stark_curve_signer import KeyPair


def generate_key_pair() -> KeyPair:
    """Generate a random Stark curve key pair"""
    private_key = 0
    # Reduce within curve order; zero is not a valid private key
    while private_key == 0:
        private_key = int.from_bytes(os.urandom(32), "big") % EC_ORDER
    return KeyPair.from_private_key(private_key)
