"""
Vote session facade.

VoteSession is the single process-scoped entry point for a UI shell: it owns
one chain client built from an explicit VoteConfig and exposes the pipeline
steps as request/response methods returning Outcome values.

Example:
    ```python
    from eosio_vote import VoteConfig, VoteSession

    with VoteSession(VoteConfig(endpoint="https://api.example.com")) as session:
        reference = session.fetch_chain_reference()
        if not reference.ok:
            show_error(reference.error.message)
            return

        signed = session.sign_vote(private_key, "myaccount1", ["producer1"], reference.value)
        if signed.ok:
            review(signed.value.to_json())
            result = session.broadcast(signed.value)
    ```
"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Union

import requests

from .api_client import ChainClient
from .config import VoteConfig
from .runtime.classify import ErrorContext, classify
from .runtime.errors import Outcome
from .signers.credential import SigningCredential
from .tx.execute import broadcast, sign_vote
from .tx.header import ChainReference, SignedTransaction, build_header
from .tx.reference import fetch_chain_reference, list_producers
from .tx.voting import VoteIntent


class VoteSession:
    """
    Explicit-lifecycle context for the vote pipeline.

    Sign and broadcast are independent outcomes: a signed transaction stays
    valid (until it expires) when a later broadcast fails.
    """

    def __init__(self, config: Optional[VoteConfig] = None, session: Optional[requests.Session] = None,
                 client: Optional[ChainClient] = None):
        """
        Initialize the session.

        Args:
            config: Network and vote parameters (default: local node)
            session: Optional requests.Session shared with the chain client
            client: Optional preconstructed chain client
        """
        self.config = config or VoteConfig()
        self.client = client or ChainClient(self.config, session=session)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> VoteSession:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def list_producers(self) -> Outcome[List[Dict[str, Any]]]:
        """List registered producers."""
        return list_producers(self.client, self.config)

    def fetch_chain_reference(self) -> Outcome[ChainReference]:
        """Fetch chain id and last irreversible block reference data."""
        return fetch_chain_reference(self.client)

    def sign_vote(
        self,
        private_key: Union[str, bytes, bytearray, SigningCredential],
        voter: str,
        producers: Iterable[str],
        reference: ChainReference,
        proxy: str = "",
        now: Optional[datetime] = None,
        required_keys: Optional[Iterable[str]] = None,
    ) -> Outcome[SignedTransaction]:
        """
        Sign a producer vote against a chain reference.

        The header is computed here with the configured expiration window.
        The key is released before this returns.

        Args:
            private_key: Key text/bytes or a credential; released on return
            voter: Voting account
            producers: Producers to vote for
            reference: Chain reference from fetch_chain_reference()
            proxy: Proxy account instead of producers
            now: Signing time (default: current UTC time)
            required_keys: Public keys the key must match, if known

        Returns:
            Outcome carrying the signed transaction or a classified error
        """
        credential = (
            private_key if isinstance(private_key, SigningCredential) else SigningCredential(private_key)
        )
        try:
            intent = VoteIntent(voter=voter, proxy=proxy, producers=list(producers))
            header = build_header(reference, self.config.expire_seconds, now or datetime.now(timezone.utc))
        except Exception as e:
            credential.release()
            return Outcome.failure(classify(e, ErrorContext.SIGN, account=voter))

        return sign_vote(
            intent,
            header,
            reference.chain_id,
            credential,
            config=self.config,
            required_keys=required_keys,
        )

    def broadcast(self, signed: Union[SignedTransaction, str]) -> Outcome[str]:
        """Submit a signed transaction (or its JSON text) once."""
        return broadcast(self.client, signed)
