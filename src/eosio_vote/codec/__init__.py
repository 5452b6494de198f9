"""
Binary encoding for EOSIO transactions.
"""

from .writer import BinaryWriter
from .transaction_codec import (
    serialize_transaction,
    serialize_vote_data,
    signing_digest,
    expiration_to_epoch,
    validate_name,
)

__all__ = [
    "BinaryWriter",
    "serialize_transaction",
    "serialize_vote_data",
    "signing_digest",
    "expiration_to_epoch",
    "validate_name",
]
