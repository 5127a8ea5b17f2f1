"""
Deploy a freshly generated OpenZeppelin account.

The deployer generates keys, precomputes the account address, builds and
estimates the DEPLOY_ACCOUNT transaction, stores the credentials, waits until
the operator has funded the address, submits, and waits for confirmation.
"""

import enum
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional

import aiohttp
from starknet_py.net.account.account import Account
from starknet_py.net.client_errors import ClientError
from starknet_py.net.client_models import TransactionReceipt
from starknet_py.net.full_node_client import FullNodeClient
from starknet_py.net.models import StarknetChainId
from starknet_py.net.models.transaction import DeployAccountV3
from starknet_py.net.signer.stark_curve_signer import KeyPair

from account_bootstrap.address import precompute_address
from account_bootstrap.config import Settings
from account_bootstrap.credentials import credential_entries, save_credentials
from account_bootstrap.errors import (
    ConfirmationTimeout,
    CredentialStoreError,
    NetworkError,
    TransactionRejectedError,
)
from account_bootstrap.fees import format_strk, fri_to_strk, overall_fee
from account_bootstrap.keys import generate_key_pair
from account_bootstrap.poller import status_name, wait_for_confirmation

logger = logging.getLogger(__name__)

RPC_ERRORS = (ClientError, aiohttp.ClientError)


class DeploymentState(enum.Enum):
    INIT = "init"
    KEYS_GENERATED = "keys_generated"
    ADDRESS_COMPUTED = "address_computed"
    TX_BUILT = "tx_built"
    CREDENTIALS_SAVED = "credentials_saved"
    AWAITING_FUNDING = "awaiting_funding"
    SUBMITTED = "submitted"
    CONFIRMING = "confirming"
    CONFIRMED = "confirmed"
    CONFIRMATION_UNKNOWN = "confirmation_unknown"
    FAILED = "failed"


@dataclass
class DeploymentResult:
    state: DeploymentState
    key_pair: KeyPair
    address: int
    fee_strk: Decimal
    transaction_hash: Optional[int] = None
    receipt: Optional[TransactionReceipt] = None
    failure_reason: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.state in (DeploymentState.CONFIRMED, DeploymentState.CONFIRMATION_UNKNOWN)


def _print_progress(_attempt: int):
    print(".", end="", flush=True)


def confirm_funding(prompt: str):
    """Block until the operator presses Enter.

    A closed or non-interactive stdin counts as confirmation.
    """
    try:
        input(prompt)
    except EOFError:
        print()
        logger.debug("stdin closed while waiting for funding, continuing")


class AccountDeployer:
    """Runs the deploy-account flow against one node.

    ``wait_for_funding`` is called with a prompt and must return once the
    precomputed address holds enough STRK; it defaults to ``confirm_funding``.
    """

    def __init__(
        self,
        client: FullNodeClient,
        settings: Settings,
        key_pair_factory: Callable[[], KeyPair] = generate_key_pair,
        wait_for_funding: Callable[[str], object] = confirm_funding,
        fee_multiplier=1,
    ):
        self.client = client
        self.settings = settings
        self.key_pair_factory = key_pair_factory
        self.wait_for_funding = wait_for_funding
        self.fee_multiplier = fee_multiplier
        self.state = DeploymentState.INIT

    def _advance(self, state: DeploymentState):
        logger.debug("Deployment state %s -> %s", self.state.value, state.value)
        self.state = state

    async def _chain_id(self):
        try:
            chain_id = int(await self.client.get_chain_id(), 16)
        except RPC_ERRORS as e:
            raise NetworkError(f"Failed to connect to {self.settings.rpc_url}: {e}") from e
        try:
            return StarknetChainId(chain_id)
        except ValueError:
            # Devnets may use their own chain id
            return chain_id

    async def build_transaction(self, key_pair: KeyPair):
        """Precompute the address and build a signed, fee-estimated transaction."""
        class_hash = self.settings.class_hash
        address = precompute_address(key_pair.public_key, class_hash)
        self._advance(DeploymentState.ADDRESS_COMPUTED)

        account = Account(
            address=address,
            client=self.client,
            key_pair=key_pair,
            chain=await self._chain_id(),
        )
        try:
            transaction = await account.sign_deploy_account_v3(
                class_hash=class_hash,
                contract_address_salt=key_pair.public_key,
                constructor_calldata=[key_pair.public_key],
                auto_estimate=True,
            )
        except RPC_ERRORS as e:
            raise NetworkError(f"Failed to estimate deploy account fee: {e}") from e

        self._advance(DeploymentState.TX_BUILT)
        return address, transaction

    def save_credentials(self, key_pair: KeyPair, address: int):
        entries = credential_entries(
            key_pair.private_key, key_pair.public_key, address, self.settings.class_hash
        )
        try:
            save_credentials(self.settings.env_file, entries)
        except CredentialStoreError as e:
            print(f"Warning: Failed to save credentials to {self.settings.env_file}: {e}")
            return
        self._advance(DeploymentState.CREDENTIALS_SAVED)
        print(f"Credentials saved to {self.settings.env_file} file")

    async def submit(self, transaction: DeployAccountV3) -> int:
        try:
            response = await self.client.deploy_account(transaction)
        except RPC_ERRORS as e:
            raise NetworkError(f"Error sending transaction: {e}") from e

        self._advance(DeploymentState.SUBMITTED)
        print("Deploy transaction submitted!")
        print(f"Transaction hash: {hex(response.transaction_hash)}")
        print(f"Contract address: {hex(response.address)}")
        return response.transaction_hash

    async def run(self) -> DeploymentResult:
        """Run the whole flow. Fatal errors propagate as BootstrapError."""
        key_pair = self.key_pair_factory()
        self._advance(DeploymentState.KEYS_GENERATED)
        print(f"Generated public key: {hex(key_pair.public_key)}")
        print(f"Generated private key: {hex(key_pair.private_key)}")

        address, transaction = await self.build_transaction(key_pair)
        print(f"Precomputed address: {hex(address)}")

        self.save_credentials(key_pair, address)

        fee = fri_to_strk(overall_fee(transaction.resource_bounds, transaction.tip, self.fee_multiplier))
        result = DeploymentResult(state=self.state, key_pair=key_pair, address=address, fee_strk=fee)

        self._advance(DeploymentState.AWAITING_FUNDING)
        print("\nThe account needs STRK to deploy.")
        print(f"Send approximately {format_strk(fee)} STRK to: {hex(address)}")
        print(f"You can use the Starknet faucet: {self.settings.faucet_url}")
        self.wait_for_funding("\nPress Enter after funding the account...")

        result.transaction_hash = await self.submit(transaction)

        self._advance(DeploymentState.CONFIRMING)
        print("Waiting for confirmation", end="", flush=True)
        try:
            receipt = await wait_for_confirmation(
                self.client,
                result.transaction_hash,
                poll_interval=self.settings.poll_interval,
                max_attempts=self.settings.max_attempts,
                on_attempt=_print_progress,
            )
        except ConfirmationTimeout as e:
            self._advance(DeploymentState.CONFIRMATION_UNKNOWN)
            print(f"\nWarning: Could not confirm transaction: {e}")
            print("Check the transaction status on Voyager or Starkscan.")
        except TransactionRejectedError as e:
            self._advance(DeploymentState.FAILED)
            result.failure_reason = e.reason or str(e)
            print(f"\nError: {e}")
        else:
            result.receipt = receipt
            if status_name(receipt.execution_status) == "REVERTED":
                self._advance(DeploymentState.FAILED)
                result.failure_reason = receipt.revert_reason or "reverted"
                print(f"\nError: Deploy transaction reverted: {result.failure_reason}")
            else:
                self._advance(DeploymentState.CONFIRMED)
                print("\n\nAccount deployed successfully!")
                print(f"Block number: {receipt.block_number}")
                print(f"Status: {status_name(receipt.finality_status)}")

        result.state = self.state
        return result
