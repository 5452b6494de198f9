"""
EOSIO Chain API Client

Thin client for the nodeos chain plugin HTTP API covering the calls the
vote pipeline needs: chain info, block lookup, table rows and transaction
push. One attempt per call; retry policy belongs to the caller.
"""

from __future__ import annotations
import json
import logging
from typing import Any, Dict, Optional, Union

import requests

from .config import VoteConfig
from .runtime.errors import RpcError

logger = logging.getLogger(__name__)


class ChainClient:
    """
    Chain API client.

    Failed calls raise RpcError. For HTTP error replies the error message is
    the raw response body so that callers can inspect the nodeos error
    envelope.
    """

    def __init__(self, config: Union[str, VoteConfig], session: Optional[requests.Session] = None):
        """
        Initialize the chain client.

        Args:
            config: Either an endpoint URL string or a VoteConfig object
            session: Optional requests.Session for connection pooling
        """
        if isinstance(config, str):
            self.config = VoteConfig(endpoint=config)
        else:
            self.config = config

        if self.config.debug:
            logger.setLevel(logging.DEBUG)

        self._base_url = self.config.endpoint.rstrip('/')
        self._session = session or requests.Session()
        self._owns_session = session is None

    @property
    def endpoint(self) -> str:
        """Get the API endpoint."""
        return self._base_url

    def close(self) -> None:
        """Close the HTTP session if owned by this client."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> ChainClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # =========================================================================
    # Low-level call
    # =========================================================================

    def _call(self, method: str, body: Optional[Dict[str, Any]] = None) -> Any:
        """
        POST to /v1/chain/<method>.

        Args:
            method: Chain API method name
            body: JSON request body

        Returns:
            Decoded JSON response

        Raises:
            RpcError: If the call fails
        """
        url = f"{self._base_url}/v1/chain/{method}"
        logger.debug("Request: %s -> %s", method, json.dumps(body))

        try:
            response = self._session.post(
                url,
                data=json.dumps(body if body is not None else {}),
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                    "User-Agent": self.config.user_agent,
                },
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
        except requests.exceptions.RequestException as e:
            raise RpcError(f"HTTP request failed: {e}", cause=e)

        if not 200 <= response.status_code < 300:
            raise RpcError(
                response.text or f"HTTP {response.status_code}: {response.reason}",
                status_code=response.status_code,
            )

        try:
            result = response.json()
        except ValueError as e:
            raise RpcError(f"Invalid JSON response: {e}", status_code=response.status_code, cause=e)

        logger.debug("Response: %s <- %s", method, result)
        return result

    # =========================================================================
    # Chain API
    # =========================================================================

    def get_info(self) -> Dict[str, Any]:
        """
        Get chain head information.

        Returns:
            Chain info including chain_id and last_irreversible_block_num
        """
        return self._call("get_info", {})

    def get_block(self, block_num_or_id: Union[int, str]) -> Dict[str, Any]:
        """
        Get a block by number or id.

        Returns:
            Block including block_num and ref_block_prefix
        """
        return self._call("get_block", {"block_num_or_id": block_num_or_id})

    def get_table_rows(self, code: str, scope: str, table: str, limit: int = 10,
                       json_rows: bool = True, lower_bound: Optional[str] = None) -> Dict[str, Any]:
        """
        Query rows of a contract table.

        Returns:
            Dictionary with ``rows`` and ``more``
        """
        body: Dict[str, Any] = {
            "json": json_rows,
            "code": code,
            "scope": scope,
            "table": table,
            "limit": limit,
        }
        if lower_bound is not None:
            body["lower_bound"] = lower_bound
        return self._call("get_table_rows", body)

    def push_transaction(self, packed: Dict[str, Any]) -> Dict[str, Any]:
        """
        Push a packed, signed transaction.

        Args:
            packed: ``{signatures, compression, packed_context_free_data, packed_trx}``

        Returns:
            Result including transaction_id
        """
        return self._call("push_transaction", packed)
