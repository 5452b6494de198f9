"""
Transaction header types.

Provides ChainReference (the recent irreversible block a transaction is
bound to), TransactionHeader (the on-wire header fields), SignedTransaction
and the pure header builder.
"""

from __future__ import annotations
import json
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..codec.transaction_codec import EXPIRATION_FORMAT

REF_BLOCK_NUM_MASK = 0xFFFF


class ChainReference(BaseModel):
    """
    Chain identity and reference block data.

    Produced fresh for every signing attempt and never persisted.
    """

    model_config = ConfigDict(frozen=True)

    chain_id: str = Field(..., min_length=1, description="Chain id (hex)")
    block_num: int = Field(..., ge=0, description="Last irreversible block number")
    ref_block_prefix: int = Field(..., ge=0, le=0xFFFFFFFF, description="Reference block prefix")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chain_id": self.chain_id,
            "block_num": self.block_num,
            "ref_block_prefix": self.ref_block_prefix,
        }


class TransactionHeader(BaseModel):
    """
    On-wire transaction header.

    Only valid together with the ChainReference it was derived from, and
    only until its expiration.
    """

    model_config = ConfigDict(frozen=True)

    expiration: str = Field(..., description="UTC timestamp, whole seconds, no offset")
    ref_block_num: int = Field(..., ge=0, le=REF_BLOCK_NUM_MASK)
    ref_block_prefix: int = Field(..., ge=0, le=0xFFFFFFFF)
    max_net_usage_words: int = Field(default=0, ge=0)
    max_cpu_usage_ms: int = Field(default=0, ge=0, le=0xFF)
    delay_sec: int = Field(default=0, ge=0)

    @field_validator('expiration')
    @classmethod
    def validate_expiration(cls, v: str) -> str:
        """Expiration must be ``YYYY-MM-DDTHH:MM:SS``."""
        datetime.strptime(v, EXPIRATION_FORMAT)
        return v

    def expires_at(self) -> datetime:
        return datetime.strptime(self.expiration, EXPIRATION_FORMAT).replace(tzinfo=timezone.utc)

    def is_expired(self, at: Optional[datetime] = None) -> bool:
        """Check if the expiration time has passed."""
        return _as_utc(at or datetime.now(timezone.utc)) >= self.expires_at()

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class SignedTransaction(BaseModel):
    """
    Signed, unbroadcast transaction.

    Only the transaction portion of the signer's result; re-serialized as-is
    for broadcast.
    """

    compression: str = "none"
    transaction: Dict[str, Any]
    signatures: List[str] = Field(default_factory=list)

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.model_dump(), indent=indent)

    @classmethod
    def from_json(cls, text: str) -> SignedTransaction:
        return cls.model_validate(json.loads(text))


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_expiration(dt: datetime) -> str:
    """Format a time as an expiration string, dropping sub-second precision."""
    return _as_utc(dt).replace(microsecond=0).strftime(EXPIRATION_FORMAT)


def build_header(ref: ChainReference, expire_seconds: int, now: datetime) -> TransactionHeader:
    """
    Derive the transaction header from chain reference data.

    Pure: the same inputs always give the same header. The reference block
    number is the low 16 bits of the block number. Resource limits are left
    at zero for the network to decide.

    Args:
        ref: Chain reference the transaction is bound to
        expire_seconds: Expiration window in seconds
        now: Current time; naive values are taken as UTC

    Returns:
        Transaction header
    """
    return TransactionHeader(
        expiration=format_expiration(_as_utc(now) + timedelta(seconds=expire_seconds)),
        ref_block_num=ref.block_num & REF_BLOCK_NUM_MASK,
        ref_block_prefix=ref.ref_block_prefix,
        max_net_usage_words=0,
        max_cpu_usage_ms=0,
        delay_sec=0,
    )
