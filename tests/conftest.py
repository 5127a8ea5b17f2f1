"""
Pytest fixtures for the account bootstrap tests.
"""
import pytest
from starknet_py.net.signer.stark_curve_signer import KeyPair

from account_bootstrap import poller
from account_bootstrap.config import Settings
from tests.helpers import TEST_PRIVATE_KEY, TEST_RPC_URL


@pytest.fixture
def key_pair():
    return KeyPair.from_private_key(TEST_PRIVATE_KEY)


@pytest.fixture
def settings(tmp_path):
    return Settings(rpc_url=TEST_RPC_URL, env_file=tmp_path / ".env", poll_interval=5.0, max_attempts=3)


@pytest.fixture(autouse=True)
def sleeps(monkeypatch):
    """Make polling instantaneous and record requested delays."""
    delays = []

    async def _sleep(delay, *_a, **_kw):
        delays.append(delay)

    monkeypatch.setattr(poller.asyncio, "sleep", _sleep)
    return delays
