"""
Producer vote intent and action construction.

``voteproducer`` requires the producer list to be unique and sorted by
encoded name value, and a voter either votes for producers or delegates to
a proxy, never both.
"""

from __future__ import annotations
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..codec.transaction_codec import serialize_vote_data, validate_name
from ..runtime.name import encode_name, is_valid_name

MAX_PRODUCERS = 30


class VoteIntent(BaseModel):
    """
    What the user wants to vote for.

    The voter name is not validated here; an invalid voter surfaces as an
    invalid authorization actor when the transaction is signed.
    """

    model_config = ConfigDict(frozen=True)

    voter: str
    proxy: str = ""
    producers: List[str] = Field(default_factory=list)

    @field_validator('producers', mode='before')
    @classmethod
    def normalize_producers(cls, v: Any) -> List[str]:
        """Deduplicate and sort producers by encoded name value."""
        if v is None:
            return []
        if isinstance(v, (str, bytes)):
            raise ValueError(f"Producers must be a list of account names, got {type(v).__name__}")
        producers = list(v)
        for producer in producers:
            if not is_valid_name(producer):
                raise ValueError(f"Invalid producer account name: {producer!r}")
        unique = set(producers)
        if len(unique) > MAX_PRODUCERS:
            raise ValueError(f"At most {MAX_PRODUCERS} producers can be voted for, got {len(unique)}")
        return sorted(unique, key=encode_name)

    @model_validator(mode='after')
    def check_proxy_or_producers(self) -> VoteIntent:
        if self.proxy and self.producers:
            raise ValueError("A vote either names producers or a proxy, not both")
        return self


def build_vote_action(intent: VoteIntent, contract: str = "eosio", action: str = "voteproducer",
                      permission: str = "active") -> Dict[str, Any]:
    """
    Build the vote action in its JSON form.

    Args:
        intent: Vote intent
        contract: System contract account
        action: Vote action name
        permission: Voter permission used for authorization

    Returns:
        Action dictionary with hex-encoded data

    Raises:
        NameEncodingError: If an account name cannot be encoded
    """
    validate_name(intent.voter, "permission_level.actor")
    return {
        "account": contract,
        "name": action,
        "authorization": [{"actor": intent.voter, "permission": permission}],
        "data": serialize_vote_data(intent.voter, intent.proxy, intent.producers).hex(),
    }
