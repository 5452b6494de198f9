"""
Vote signing and broadcast.

Signing and broadcasting are separate, independently reported steps: a
successfully signed transaction is handed back to the caller for review and
only submitted when ``broadcast`` is called with it.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, Optional, Union

from ..api_client import ChainClient
from ..codec.transaction_codec import serialize_transaction
from ..config import VoteConfig
from ..runtime.classify import BROADCAST_FAILURE_MESSAGE, ErrorContext, classify
from ..runtime.errors import ClassifiedError, ErrorCategory, Outcome
from ..signers.credential import SigningCredential
from ..signers.local import LocalSigner
from .header import SignedTransaction, TransactionHeader
from .voting import VoteIntent, build_vote_action

logger = logging.getLogger(__name__)


def sign_vote(
    intent: VoteIntent,
    header: TransactionHeader,
    chain_id: str,
    credential: SigningCredential,
    config: Optional[VoteConfig] = None,
    required_keys: Optional[Iterable[str]] = None,
) -> Outcome[SignedTransaction]:
    """
    Build and sign the vote transaction without broadcasting it.

    The header is used verbatim. The credential is released when this
    returns, whether signing succeeded or not.

    Args:
        intent: Voter and producers
        header: Header computed from the chain reference
        chain_id: Chain id the header's reference block belongs to
        credential: Private key, released on return
        config: Vote contract, action and permission names
        required_keys: Public keys the credential must match, if known

    Returns:
        Outcome carrying the signed transaction or a classified error
    """
    config = config or VoteConfig()
    try:
        signer = LocalSigner(credential, lambda: header, chain_id, required_keys=required_keys)
        action = build_vote_action(
            intent,
            contract=config.vote_contract,
            action=config.vote_action,
            permission=config.permission,
        )
        signed = signer.transaction([action], broadcast=False, sign=True)
    except Exception as e:
        return Outcome.failure(classify(e, ErrorContext.SIGN, account=intent.voter))
    finally:
        credential.release()

    logger.info("Signed vote for %s (%d producer(s), proxy %r)",
                intent.voter, len(intent.producers), intent.proxy)
    return Outcome.success(signed)


def pack_transaction(signed: SignedTransaction) -> Dict[str, Any]:
    """Build the push_transaction request body for a signed transaction."""
    return {
        "signatures": list(signed.signatures),
        "compression": signed.compression,
        "packed_context_free_data": "",
        "packed_trx": serialize_transaction(signed.transaction).hex(),
    }


def broadcast(client: ChainClient, signed: Union[SignedTransaction, str]) -> Outcome[str]:
    """
    Submit a signed transaction once.

    The transaction is round-tripped through its JSON text before packing.
    There is no retry: a failed push may still have been accepted.

    Args:
        client: Chain API client
        signed: Signed transaction or its JSON text

    Returns:
        Outcome carrying the transaction id or a classified error
    """
    try:
        text = signed if isinstance(signed, str) else signed.to_json()
        transaction = SignedTransaction.from_json(text)
        result = client.push_transaction(pack_transaction(transaction))
    except Exception as e:
        return Outcome.failure(classify(e, ErrorContext.BROADCAST))

    transaction_id = result.get("transaction_id") if isinstance(result, dict) else None
    if not transaction_id:
        logger.warning("push_transaction returned no transaction id: %r", result)
        return Outcome.failure(ClassifiedError(
            category=ErrorCategory.UNKNOWN_BROADCAST_ERROR,
            message=f"{BROADCAST_FAILURE_MESSAGE} - Unknown EOS Error",
        ))

    logger.info("Broadcast transaction %s", transaction_id)
    return Outcome.success(transaction_id)
