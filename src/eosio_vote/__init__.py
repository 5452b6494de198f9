"""
EOSIO Producer Vote Client

This package builds, signs and broadcasts ``eosio::voteproducer``
transactions: it fetches chain reference data, derives the transaction
header, signs locally with a scoped credential and submits the signed
transaction as a separate step, classifying every failure into a
user-facing error.
"""

# Order matters: tx must be initialized before signers and tx.execute.
from .runtime.errors import *
from .runtime.classify import ErrorContext, classify
from .runtime.name import encode_name, decode_name, is_valid_name
from .config import VoteConfig
from .api_client import ChainClient
from .crypto import PrivateKey, PublicKey, Signature
from .tx import *
from .signers import SigningCredential, Signer, LocalSigner
from .tx.execute import sign_vote, broadcast, pack_transaction
from .facade import VoteSession

__version__ = "1.0.0"
__all__ = [
    # Configuration and client
    "VoteConfig",
    "ChainClient",
    "VoteSession",

    # Errors
    "ErrorCategory",
    "ClassifiedError",
    "ErrorContext",
    "classify",
    "Outcome",
    "OutcomeError",
    "VoteClientError",
    "ConfigError",
    "RpcError",
    "NameEncodingError",
    "SignerError",
    "SignerAssertionError",
    "CredentialReleasedError",

    # Names and keys
    "encode_name",
    "decode_name",
    "is_valid_name",
    "PrivateKey",
    "PublicKey",
    "Signature",

    # Transactions
    "ChainReference",
    "TransactionHeader",
    "SignedTransaction",
    "VoteIntent",
    "build_header",
    "build_vote_action",
    "fetch_chain_reference",
    "list_producers",
    "sign_vote",
    "broadcast",
    "pack_transaction",

    # Signing
    "SigningCredential",
    "Signer",
    "LocalSigner",
]
