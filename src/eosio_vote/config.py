"""
Client configuration.

One explicit configuration object is passed to every operation (or held by
a VoteSession); nothing is kept in module-level state.
"""

from __future__ import annotations
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .runtime.errors import ConfigError

LOCAL_ENDPOINT = "http://127.0.0.1:8888"
DEFAULT_EXPIRE_SECONDS = 600
DEFAULT_PRODUCERS_LIMIT = 5000
ENV_PREFIX = "EOSIO_VOTE_"


@dataclass(frozen=True)
class VoteConfig:
    """Configuration for chain access and vote transactions."""

    endpoint: str = LOCAL_ENDPOINT
    timeout: float = 30.0
    verify_ssl: bool = True
    user_agent: str = "eosio-vote-python/1.0.0"
    debug: bool = False

    # Producer list table
    producers_account: str = "eosio"
    producers_scope: str = "eosio"
    producers_table: str = "producers"
    producers_limit: int = DEFAULT_PRODUCERS_LIMIT

    # Vote action
    vote_contract: str = "eosio"
    vote_action: str = "voteproducer"
    permission: str = "active"
    expire_seconds: int = DEFAULT_EXPIRE_SECONDS

    def __post_init__(self):
        if not self.endpoint:
            raise ConfigError("endpoint must not be empty")
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")
        if self.expire_seconds <= 0:
            raise ConfigError(f"expire_seconds must be positive, got {self.expire_seconds}")
        if self.producers_limit <= 0:
            raise ConfigError(f"producers_limit must be positive, got {self.producers_limit}")

    @classmethod
    def local(cls, **kwargs) -> VoteConfig:
        """Configuration for a nodeos on localhost."""
        return cls(endpoint=LOCAL_ENDPOINT, **kwargs)

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, environ: Optional[Mapping[str, str]] = None,
                 **kwargs) -> VoteConfig:
        """
        Build a configuration from environment variables.

        Recognized variables (with the prefix): ENDPOINT, TIMEOUT,
        EXPIRE_SECONDS, PRODUCERS_LIMIT, VERIFY_SSL, DEBUG. Keyword arguments
        take precedence over the environment.

        Raises:
            ConfigError: If a numeric or boolean value cannot be parsed
        """
        env = os.environ if environ is None else environ
        values = {}

        endpoint = env.get(prefix + "ENDPOINT")
        if endpoint:
            values["endpoint"] = endpoint
        for key, parse in (("TIMEOUT", float), ("EXPIRE_SECONDS", int), ("PRODUCERS_LIMIT", int)):
            raw = env.get(prefix + key)
            if raw is None or raw == "":
                continue
            try:
                values[key.lower()] = parse(raw)
            except ValueError as e:
                raise ConfigError(f"Invalid {prefix + key}: {raw!r}", cause=e)
        for key in ("VERIFY_SSL", "DEBUG"):
            raw = env.get(prefix + key)
            if raw is not None and raw != "":
                values[key.lower()] = _parse_bool(prefix + key, raw)

        values.update(kwargs)
        return cls(**values)

    def with_endpoint(self, endpoint: str) -> VoteConfig:
        return replace(self, endpoint=endpoint)


def _parse_bool(name: str, raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ConfigError(f"Invalid {name}: {raw!r}")
