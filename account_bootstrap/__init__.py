"""
Bootstrap a fresh Starknet account: generate keys, precompute the address,
wait for funding, deploy, and confirm.
"""

from account_bootstrap.address import parse_felt, precompute_address
from account_bootstrap.config import Settings, load_settings
from account_bootstrap.deploy import AccountDeployer, DeploymentResult, DeploymentState
from account_bootstrap.fees import format_strk, fri_to_strk, overall_fee
from account_bootstrap.keys import generate_key_pair

__version__ = "0.1.0"

__all__ = [
    "AccountDeployer",
    "DeploymentResult",
    "DeploymentState",
    "Settings",
    "format_strk",
    "fri_to_strk",
    "generate_key_pair",
    "load_settings",
    "overall_fee",
    "parse_felt",
    "precompute_address",
]
