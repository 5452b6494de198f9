"""Runtime helpers for the EOSIO vote client"""

from .errors import (
    ErrorCategory, ClassifiedError, Outcome, OutcomeError,
    VoteClientError, ConfigError, RpcError, NameEncodingError,
    SignerError, SignerAssertionError, CredentialReleasedError,
)
from .name import encode_name, decode_name, is_valid_name
from .classify import ErrorContext, classify

__all__ = [
    "ErrorCategory",
    "ClassifiedError",
    "Outcome",
    "OutcomeError",
    "VoteClientError",
    "ConfigError",
    "RpcError",
    "NameEncodingError",
    "SignerError",
    "SignerAssertionError",
    "CredentialReleasedError",
    "encode_name",
    "decode_name",
    "is_valid_name",
    "ErrorContext",
    "classify",
]
