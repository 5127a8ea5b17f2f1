#!/usr/bin/env python3
"""
Create a new account on Starknet and deploy it.

Reads STARKNET_RPC_URL from the environment or .env, prints the generated
keys and the address to fund, then deploys once you press Enter.
"""

import sys

from account_bootstrap.cli import main

if __name__ == "__main__":
    sys.exit(main(["deploy-account", *sys.argv[1:]]))
