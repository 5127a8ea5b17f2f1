"""
Command line entry point.

    starknet-account deploy-account [--env-file .env] [--class-hash 0x...]
    starknet-account tx-status [--tx-hash 0x...]
"""

import argparse
import asyncio
import dataclasses
import logging
import math
import sys

from starknet_py.net.full_node_client import FullNodeClient

from account_bootstrap.address import parse_felt
from account_bootstrap.config import DEFAULT_ENV_FILE, Settings, load_settings
from account_bootstrap.deploy import AccountDeployer
from account_bootstrap.errors import BootstrapError
from account_bootstrap.inspector import inspect_latest_transaction, inspect_transaction, print_report

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {text}")
    return value


def non_negative_float(text: str) -> float:
    value = float(text)
    if not (math.isfinite(value) and value >= 0):
        raise argparse.ArgumentTypeError(f"must be a finite non-negative number, got {text}")
    return value


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--env-file", default=DEFAULT_ENV_FILE,
                        help=f"Env file with STARKNET_RPC_URL; credentials are saved here (default: {DEFAULT_ENV_FILE})")
    common.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    parser = argparse.ArgumentParser(
        prog="starknet-account",
        description="Create and deploy a new Starknet account",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    deploy = commands.add_parser("deploy-account", parents=[common], help="Generate keys and deploy an account contract")
    deploy.add_argument("--class-hash", default=None,
                        help="Account class hash (default: OpenZeppelin account on Sepolia)")
    deploy.add_argument("--poll-interval", type=non_negative_float, default=None,
                        help="Seconds between confirmation checks (default: 5)")
    deploy.add_argument("--max-attempts", type=positive_int, default=None,
                        help="Confirmation checks before giving up (default: 60)")

    status = commands.add_parser("tx-status", parents=[common], help="Show the status of a transaction in the latest block")
    status.add_argument("--tx-hash", default=None,
                        help="Inspect this transaction instead of the first one in the latest block")
    return parser


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    overrides = {}
    if getattr(args, "class_hash", None) is not None:
        overrides["class_hash"] = parse_felt(args.class_hash, "class hash")
    if getattr(args, "poll_interval", None) is not None:
        overrides["poll_interval"] = args.poll_interval
    if getattr(args, "max_attempts", None) is not None:
        overrides["max_attempts"] = args.max_attempts
    return dataclasses.replace(settings, **overrides)


async def _deploy_account(client: FullNodeClient, settings: Settings) -> int:
    result = await AccountDeployer(client, settings).run()
    return EXIT_OK if result.succeeded else EXIT_FAILURE


async def _tx_status(client: FullNodeClient, args: argparse.Namespace) -> int:
    if args.tx_hash is not None:
        report = await inspect_transaction(client, parse_felt(args.tx_hash, "transaction hash"))
    else:
        report = await inspect_latest_transaction(client)
    print_report(report)
    return EXIT_OK


def main(argv=None, client_factory=FullNodeClient) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        settings = _apply_overrides(load_settings(args.env_file), args)
        client = client_factory(node_url=settings.rpc_url)
        if args.command == "deploy-account":
            return asyncio.run(_deploy_account(client, settings))
        return asyncio.run(_tx_status(client, args))
    except BootstrapError as e:
        logger.debug("Aborting on %s", type(e).__name__, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
