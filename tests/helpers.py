"""
Fakes and builders shared by the account bootstrap tests.
"""
import asyncio
from types import SimpleNamespace

from starknet_py.net.client_models import ResourceBounds, ResourceBoundsMapping

TEST_RPC_URL = "http://localhost:9944"
TEST_PRIVATE_KEY = 0x077E56C6DC32D40A67F6F7E6625C8DC5E570ABE49C0A24E9202E4AE906ABCC07
TEST_TX_HASH = 0x5A1E
SEPOLIA_CHAIN_ID = "0x534e5f5345504f4c4941"


def receipt(finality="ACCEPTED_ON_L2", execution="SUCCEEDED", block_number=42, revert_reason=None):
    return SimpleNamespace(
        transaction_hash=TEST_TX_HASH,
        finality_status=finality,
        execution_status=execution,
        block_number=block_number,
        revert_reason=revert_reason,
    )


def resource_bounds(l1_gas=(0, 0), l2_gas=(0, 0), l1_data_gas=(0, 0)):
    return ResourceBoundsMapping(
        l1_gas=ResourceBounds(max_amount=l1_gas[0], max_price_per_unit=l1_gas[1]),
        l2_gas=ResourceBounds(max_amount=l2_gas[0], max_price_per_unit=l2_gas[1]),
        l1_data_gas=ResourceBounds(max_amount=l1_data_gas[0], max_price_per_unit=l1_data_gas[1]),
    )


class FakeClient:
    """Stands in for FullNodeClient and records every RPC method called.

    ``receipts`` is consumed one item per receipt lookup; an exception
    instance is raised instead of returned. The last item repeats.
    """

    def __init__(self, receipts=None, block=None, status=None, deploy_error=None, chain_id=SEPOLIA_CHAIN_ID):
        self.receipts = list(receipts or [])
        self.block = block
        self.status = status
        self.deploy_error = deploy_error
        self.chain_id = chain_id
        self.calls = []
        self.deployed = []

    def count(self, method):
        return sum(1 for name in self.calls if name == method)

    async def get_chain_id(self):
        self.calls.append("get_chain_id")
        if isinstance(self.chain_id, Exception):
            raise self.chain_id
        return self.chain_id

    async def get_transaction_receipt(self, tx_hash):
        self.calls.append("get_transaction_receipt")
        item = self.receipts.pop(0) if len(self.receipts) > 1 else self.receipts[0]
        if isinstance(item, Exception):
            raise item
        return item

    async def deploy_account(self, transaction):
        self.calls.append("deploy_account")
        if self.deploy_error is not None:
            raise self.deploy_error
        self.deployed.append(transaction)
        return SimpleNamespace(transaction_hash=TEST_TX_HASH, address=0xACC)

    async def get_block_with_tx_hashes(self, block_hash=None, block_number=None):
        self.calls.append("get_block_with_tx_hashes")
        return self.block

    async def get_transaction_status(self, tx_hash):
        self.calls.append("get_transaction_status")
        return self.status


def run(coro):
    return asyncio.run(coro)
