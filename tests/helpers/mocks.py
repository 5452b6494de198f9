"""
Mock implementations for testing.

Provides a mock chain client with configurable responses and failures,
and a fake HTTP response for transport-level tests.
"""

from __future__ import annotations
import json
from typing import Any, Dict, List, Optional, Tuple

from eosio_vote.config import VoteConfig


class MockChainClient:
    """
    Stand-in for ChainClient.

    Each method returns the configured response, or raises it when it is an
    exception. Calls are recorded in order.
    """

    def __init__(self, config: Optional[VoteConfig] = None):
        self.config = config or VoteConfig()
        self.responses: Dict[str, Any] = {}
        self.calls: List[Tuple[Any, ...]] = []
        self.closed = False

    def set_response(self, method: str, value: Any) -> None:
        self.responses[method] = value

    def set_error(self, method: str, error: BaseException) -> None:
        self.responses[method] = error

    def called(self, method: str) -> bool:
        return any(call[0] == method for call in self.calls)

    def _respond(self, method: str, *args: Any) -> Any:
        self.calls.append((method,) + args)
        value = self.responses.get(method)
        if isinstance(value, BaseException):
            raise value
        return value

    def get_info(self) -> Any:
        return self._respond("get_info")

    def get_block(self, block_num_or_id: Any) -> Any:
        return self._respond("get_block", block_num_or_id)

    def get_table_rows(self, code: str, scope: str, table: str, limit: int = 10,
                       json_rows: bool = True, lower_bound: Optional[str] = None) -> Any:
        return self._respond("get_table_rows", code, scope, table, limit)

    def push_transaction(self, packed: Dict[str, Any]) -> Any:
        return self._respond("push_transaction", packed)

    def close(self) -> None:
        self.closed = True


class FakeResponse:
    """Minimal requests.Response replacement."""

    def __init__(self, status_code: int = 200, body: Any = None, text: Optional[str] = None,
                 reason: str = "OK"):
        self.status_code = status_code
        self._body = body
        self.reason = reason
        if text is None:
            text = json.dumps(body) if body is not None else ""
        self.text = text

    def json(self) -> Any:
        if self._body is None:
            raise ValueError("No JSON object could be decoded")
        return self._body
