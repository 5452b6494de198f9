"""
Vote transaction construction.

Signing and broadcast live in ``eosio_vote.tx.execute``.
"""

from .header import (
    ChainReference,
    TransactionHeader,
    SignedTransaction,
    build_header,
    format_expiration,
)
from .voting import VoteIntent, build_vote_action, MAX_PRODUCERS
from .reference import fetch_chain_reference, list_producers

__all__ = [
    "ChainReference",
    "TransactionHeader",
    "SignedTransaction",
    "build_header",
    "format_expiration",
    "VoteIntent",
    "build_vote_action",
    "MAX_PRODUCERS",
    "fetch_chain_reference",
    "list_producers",
]
