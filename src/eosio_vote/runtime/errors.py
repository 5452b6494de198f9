"""
EOSIO Vote Error Model

This module provides the error handling framework for the vote client:
the exception hierarchy raised by the lower layers (RPC, codec, signer)
and the user-facing classified errors returned by the pipeline.
"""

from __future__ import annotations
from typing import Optional, Dict, Any, Generic, TypeVar
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict

__all__ = [
    "ErrorCategory",
    "ClassifiedError",
    "VoteClientError",
    "ConfigError",
    "RpcError",
    "NameEncodingError",
    "SignerError",
    "SignerAssertionError",
    "CredentialReleasedError",
    "OutcomeError",
    "Outcome",
]

class ErrorCategory(str, Enum):
    """User-facing failure categories."""

    # Chain reference
    CHAIN_INFO_UNAVAILABLE = "ChainInfoUnavailable"
    BLOCK_DATA_UNAVAILABLE = "BlockDataUnavailable"
    EMPTY_CHAIN_INFO = "EmptyChainInfo"
    EMPTY_BLOCK_DATA = "EmptyBlockData"

    # Signing
    INVALID_ACCOUNT_NAME = "InvalidAccountName"
    KEY_MISMATCH = "KeyMismatch"
    ASSERTION_FAILURE = "AssertionFailure"
    SIGN_FAILURE = "SignFailure"

    # Broadcast
    ACCOUNT_DOES_NOT_EXIST = "AccountDoesNotExist"
    UNAUTHORIZED_KEY = "UnauthorizedKey"
    DETAILED_BROADCAST_ERROR = "DetailedBroadcastError"
    BROADCAST_ERROR_CODE = "BroadcastErrorCode"
    UNKNOWN_BROADCAST_ERROR = "UnknownBroadcastError"
    BROADCAST_FAILURE = "BroadcastFailure"

    # Producer list
    PRODUCERS_UNAVAILABLE = "ProducersUnavailable"


class ClassifiedError(BaseModel):
    """A normalized, user-facing failure."""

    model_config = ConfigDict(frozen=True)

    category: ErrorCategory
    message: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {"category": self.category.value, "message": self.message}

    def __str__(self) -> str:
        return f"[{self.category.value}] {self.message}"


class VoteClientError(Exception):
    """
    Base class for all vote client errors.

    Carries a message, optional structured details and the underlying cause.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result: Dict[str, Any] = {"name": type(self).__name__, "message": self.message}
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class ConfigError(VoteClientError):
    """Invalid configuration value."""
    pass


class RpcError(VoteClientError):
    """
    Chain RPC failure.

    For HTTP error replies the message is the raw response body, which nodeos
    fills with a JSON error envelope.
    """

    def __init__(self, message: str, status_code: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[BaseException] = None):
        super().__init__(message, details, cause)
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"RpcError({self.status_code}): {self.message}"
        return f"RpcError: {self.message}"


class NameEncodingError(VoteClientError):
    """Account name that cannot be encoded."""

    def __init__(self, message: str, account: str = "", field: str = ""):
        super().__init__(message, {"account": account, "field": field})
        self.account = account
        self.field = field


class SignerError(VoteClientError):
    """Base exception for signer operations."""
    pass


class SignerAssertionError(SignerError, AssertionError):
    """Assertion raised by key handling (bad key material, key mismatch)."""
    pass


class CredentialReleasedError(SignerError):
    """Credential used after it was released."""

    def __init__(self, message: str = "Signing credential has been released"):
        super().__init__(message)


class OutcomeError(VoteClientError):
    """Raised by Outcome.unwrap() on a failed outcome."""

    def __init__(self, error: ClassifiedError):
        super().__init__(error.message, {"category": error.category.value})
        self.error = error


T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of a pipeline operation: exactly one of value or error."""

    value: Optional[T] = None
    error: Optional[ClassifiedError] = None

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: ClassifiedError) -> Outcome[T]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        """Check if the operation succeeded."""
        return self.error is None

    def unwrap(self) -> T:
        """
        Return the value of a successful outcome.

        Raises:
            OutcomeError: If the outcome is a failure
        """
        if self.error is not None:
            raise OutcomeError(self.error)
        return self.value
