"""
Tests for VoteConfig.
"""

import pytest

from eosio_vote.config import (
    DEFAULT_EXPIRE_SECONDS,
    DEFAULT_PRODUCERS_LIMIT,
    LOCAL_ENDPOINT,
    VoteConfig,
)
from eosio_vote.runtime.errors import ConfigError


class TestVoteConfig:

    def test_defaults(self):
        config = VoteConfig()
        assert config.endpoint == LOCAL_ENDPOINT
        assert config.expire_seconds == DEFAULT_EXPIRE_SECONDS == 600
        assert config.producers_limit == DEFAULT_PRODUCERS_LIMIT == 5000
        assert (config.producers_account, config.producers_scope, config.producers_table) == (
            "eosio", "eosio", "producers")
        assert (config.vote_contract, config.vote_action, config.permission) == (
            "eosio", "voteproducer", "active")

    @pytest.mark.parametrize("kwargs", [
        {"endpoint": ""},
        {"timeout": 0},
        {"expire_seconds": -1},
        {"producers_limit": 0},
    ])
    def test_validation(self, kwargs):
        with pytest.raises(ConfigError):
            VoteConfig(**kwargs)

    def test_frozen(self):
        with pytest.raises(Exception):
            VoteConfig().endpoint = "http://other"

    def test_local(self):
        assert VoteConfig.local(timeout=3.0) == VoteConfig(timeout=3.0)

    def test_with_endpoint(self):
        config = VoteConfig(timeout=3.0).with_endpoint("https://api.example.com")
        assert config.endpoint == "https://api.example.com"
        assert config.timeout == 3.0


class TestFromEnv:

    def test_reads_prefixed_values(self):
        config = VoteConfig.from_env(environ={
            "EOSIO_VOTE_ENDPOINT": "https://api.example.com",
            "EOSIO_VOTE_TIMEOUT": "12.5",
            "EOSIO_VOTE_EXPIRE_SECONDS": "120",
            "EOSIO_VOTE_PRODUCERS_LIMIT": "50",
            "EOSIO_VOTE_VERIFY_SSL": "no",
            "EOSIO_VOTE_DEBUG": "1",
        })
        assert config.endpoint == "https://api.example.com"
        assert config.timeout == 12.5
        assert config.expire_seconds == 120
        assert config.producers_limit == 50
        assert config.verify_ssl is False
        assert config.debug is True

    def test_empty_environment(self):
        assert VoteConfig.from_env(environ={}) == VoteConfig()

    def test_keyword_overrides(self):
        config = VoteConfig.from_env(environ={"EOSIO_VOTE_TIMEOUT": "12"}, timeout=1.0)
        assert config.timeout == 1.0

    def test_custom_prefix(self):
        config = VoteConfig.from_env(prefix="APP_", environ={"APP_ENDPOINT": "http://x"})
        assert config.endpoint == "http://x"

    @pytest.mark.parametrize("key,value", [
        ("EOSIO_VOTE_TIMEOUT", "soon"),
        ("EOSIO_VOTE_EXPIRE_SECONDS", "1.5"),
        ("EOSIO_VOTE_DEBUG", "maybe"),
    ])
    def test_bad_values(self, key, value):
        with pytest.raises(ConfigError, match=key):
            VoteConfig.from_env(environ={key: value})

    def test_os_environ(self, monkeypatch):
        monkeypatch.setenv("EOSIO_VOTE_ENDPOINT", "http://from-env")
        assert VoteConfig.from_env().endpoint == "http://from-env"
