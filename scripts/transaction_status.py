#!/usr/bin/env python3
"""
Print the finality and execution status of the first transaction in the
latest block (or of --tx-hash).
"""

import sys

from account_bootstrap.cli import main

if __name__ == "__main__":
    sys.exit(main(["tx-status", *sys.argv[1:]]))
