"""
Persist generated account credentials to a .env-style file.

Writes are read-merge-write: existing keys survive, keys written by this run
replace older values, and the file is written sorted by key.
"""

import io
import logging
from pathlib import Path
from typing import Dict, Mapping

from dotenv.parser import parse_stream

from account_bootstrap.errors import CredentialStoreError

logger = logging.getLogger(__name__)

PRIVATE_KEY_VAR = "ACCOUNT_PRIVATE_KEY"
PUBLIC_KEY_VAR = "ACCOUNT_PUBLIC_KEY"
ADDRESS_VAR = "ACCOUNT_ADDRESS"
CLASS_HASH_VAR = "ACCOUNT_CLASS_HASH"


def credential_entries(private_key: int, public_key: int, address: int, class_hash: int) -> Dict[str, str]:
    return {
        PRIVATE_KEY_VAR: hex(private_key),
        PUBLIC_KEY_VAR: hex(public_key),
        ADDRESS_VAR: hex(address),
        CLASS_HASH_VAR: hex(class_hash),
    }


def _raw_value(binding) -> str:
    # text after the first "=" exactly as written, minus the line ending
    line = binding.original.string
    return line.split("=", 1)[1].rstrip("\r\n") if "=" in line else ""


def read_env_file(path) -> Dict[str, str]:
    """Read KEY=VALUE pairs from ``path``; a missing file reads as empty.

    Values are kept verbatim (quotes, ``${VAR}`` references and inline
    comments included) so entries this run does not touch are written back
    unchanged.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as e:
        raise CredentialStoreError(f"cannot read {path}: {e}") from e

    return {
        binding.key: _raw_value(binding)
        for binding in parse_stream(io.StringIO(text))
        if binding.key is not None and not binding.error
    }


def merge_entries(existing: Mapping[str, str], new: Mapping[str, str]) -> Dict[str, str]:
    merged = dict(existing)
    merged.update(new)
    return merged


def render_env(entries: Mapping[str, str]) -> str:
    return "".join(f"{key}={entries[key]}\n" for key in sorted(entries))


def save_credentials(path, entries: Mapping[str, str]) -> Dict[str, str]:
    """Merge ``entries`` into the file at ``path`` and return what was written.

    Raises CredentialStoreError if the file cannot be read or written.
    """
    path = Path(path)
    merged = merge_entries(read_env_file(path), entries)
    try:
        path.write_text(render_env(merged), encoding="utf-8")
    except OSError as e:
        raise CredentialStoreError(f"cannot write {path}: {e}") from e

    logger.debug("Wrote %d keys to %s", len(merged), path)
    return merged
