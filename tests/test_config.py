from pathlib import Path

import pytest

from account_bootstrap.config import (
    DEFAULT_FAUCET_URL,
    DEFAULT_MAX_ATTEMPTS,
    OZ_ACCOUNT_CLASS_HASH,
    load_settings,
)
from account_bootstrap.errors import ConfigError


def test_reads_rpc_url_from_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("STARKNET_RPC_URL=https://rpc.example.com\n")

    settings = load_settings(env_file, environ={})

    assert settings.rpc_url == "https://rpc.example.com"
    assert settings.env_file == Path(env_file)
    assert settings.class_hash == OZ_ACCOUNT_CLASS_HASH
    assert settings.faucet_url == DEFAULT_FAUCET_URL
    assert settings.max_attempts == DEFAULT_MAX_ATTEMPTS


def test_environment_overrides_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("STARKNET_RPC_URL=https://file.example.com\n")

    settings = load_settings(env_file, environ={"STARKNET_RPC_URL": "http://env.example.com"})

    assert settings.rpc_url == "http://env.example.com"


def test_missing_env_file_warns(tmp_path, capsys):
    settings = load_settings(tmp_path / ".env", environ={"STARKNET_RPC_URL": "http://localhost:9944"})
    assert settings.rpc_url == "http://localhost:9944"
    assert "Warning:" in capsys.readouterr().out


def test_faucet_url_override(tmp_path):
    settings = load_settings(tmp_path / ".env", environ={
        "STARKNET_RPC_URL": "http://localhost:9944",
        "STARKNET_FAUCET_URL": "https://faucet.example.com",
    })
    assert settings.faucet_url == "https://faucet.example.com"


@pytest.mark.parametrize("environ", [{}, {"STARKNET_RPC_URL": ""}, {"STARKNET_RPC_URL": "   "}])
def test_missing_rpc_url_is_config_error(tmp_path, environ):
    with pytest.raises(ConfigError, match="STARKNET_RPC_URL"):
        load_settings(tmp_path / ".env", environ=environ)


def test_non_http_rpc_url_is_config_error(tmp_path):
    with pytest.raises(ConfigError, match="http"):
        load_settings(tmp_path / ".env", environ={"STARKNET_RPC_URL": "localhost:9944"})
