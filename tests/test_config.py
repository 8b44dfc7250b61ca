import os
from pathlib import Path

import pytest

from redirect_chain.config import Config, load_config, parse_bool, parse_list


def test_defaults(monkeypatch):
    for name in ("RCH_MAX_CHAIN_LENGTH", "RCH_STRICT", "RCH_NO_HEAD_DOMAINS", "RCH_HEAD_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    config = load_config(env_file=None)
    assert config.max_chain_length == 20
    assert config.head_timeout == 3.0
    assert config.strict is True
    assert config.extra_no_head_domains == []


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("RCH_MAX_CHAIN_LENGTH", "7")
    monkeypatch.setenv("RCH_STRICT", "false")
    monkeypatch.setenv("RCH_NO_HEAD_DOMAINS", "files.example, cdn.example")
    config = load_config(env_file=None)
    assert config.max_chain_length == 7
    assert config.strict is False
    assert config.extra_no_head_domains == ["files.example", "cdn.example"]


def test_env_file_is_loaded(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("RCH_GET_TIMEOUT", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("RCH_GET_TIMEOUT=4.5\n")
    config = load_config(env_file=str(env_file))
    os.environ.pop("RCH_GET_TIMEOUT", None)
    assert config.get_timeout == 4.5


def test_invalid_chain_length_rejected(monkeypatch):
    monkeypatch.setenv("RCH_MAX_CHAIN_LENGTH", "0")
    with pytest.raises(ValueError):
        load_config(env_file=None)


def test_build_policy_adds_extra_domains():
    policy = Config(extra_no_head_domains=["files.example"]).build_policy()
    assert policy.contains("files.example")
    assert policy.contains("mega.nz")


def test_parse_helpers():
    assert parse_bool("Yes")
    assert not parse_bool("off")
    assert parse_list(None) == []
    assert parse_list("a,,b") == ["a", "b"]
