"""
Configuration loaded once at startup.

Values come from the process environment and an optional .env file; the
environment wins, so a value exported in the shell overrides the file.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional
from urllib.parse import urlparse

from dotenv import dotenv_values

from account_bootstrap.errors import ConfigError

logger = logging.getLogger(__name__)

# OpenZeppelin account class hash on Sepolia
OZ_ACCOUNT_CLASS_HASH = 0x61DAC032F228ABEF9C6626F995015233097AE253A7F72D68552DB02F2971B8F

DEFAULT_ENV_FILE = ".env"
DEFAULT_FAUCET_URL = "https://starknet-faucet.vercel.app/"
DEFAULT_POLL_INTERVAL = 5.0
DEFAULT_MAX_ATTEMPTS = 60  # 5 seconds * 60 = 5 minutes


@dataclass(frozen=True)
class Settings:
    rpc_url: str
    env_file: Path = Path(DEFAULT_ENV_FILE)
    class_hash: int = OZ_ACCOUNT_CLASS_HASH
    faucet_url: str = DEFAULT_FAUCET_URL
    poll_interval: float = DEFAULT_POLL_INTERVAL
    max_attempts: int = DEFAULT_MAX_ATTEMPTS


def load_settings(
    env_file=DEFAULT_ENV_FILE, environ: Optional[Mapping[str, str]] = None
) -> Settings:
    """Build Settings from ``env_file`` and ``environ`` (defaults to os.environ).

    Raises ConfigError if STARKNET_RPC_URL is unset or is not an http(s) URL.
    """
    env_path = Path(env_file)
    if environ is None:
        environ = os.environ

    values = {}
    if env_path.is_file():
        values.update(
            {k: v for k, v in dotenv_values(env_path).items() if v is not None}
        )
    else:
        print(f"Warning: {env_path} file not found, using environment variables")
    values.update(environ)

    rpc_url = (values.get("STARKNET_RPC_URL") or "").strip()
    if not rpc_url:
        raise ConfigError("STARKNET_RPC_URL environment variable is not set")
    if urlparse(rpc_url).scheme not in ("http", "https"):
        raise ConfigError(f"STARKNET_RPC_URL is not an http(s) URL: {rpc_url}")

    faucet_url = values.get("STARKNET_FAUCET_URL") or DEFAULT_FAUCET_URL
    logger.debug("Loaded settings from %s (rpc=%s)", env_path, rpc_url)
    return Settings(rpc_url=rpc_url, env_file=env_path, faucet_url=faucet_url)
