"""
Base signer interface.

A signer is parameterized by a header provider (a synchronous callback
returning the precomputed TransactionHeader) and the chain id. It assembles
the transaction around the given actions with that header verbatim, signs
locally and never broadcasts.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List

from ..codec.transaction_codec import serialize_transaction, signing_digest
from ..crypto.secp256k1 import Signature
from ..runtime.errors import SignerError
from ..tx.header import SignedTransaction, TransactionHeader

logger = logging.getLogger(__name__)

HeaderProvider = Callable[[], TransactionHeader]


class Signer(ABC):
    """Offline transaction signer."""

    def __init__(self, header_provider: HeaderProvider, chain_id: str):
        self.header_provider = header_provider
        self.chain_id = chain_id

    @abstractmethod
    def sign_digest(self, digest: bytes) -> Signature:
        """
        Sign a 32-byte transaction digest.

        Raises:
            SignerError: If signing fails
        """
        pass

    def transaction(self, actions: List[Dict[str, Any]], *, broadcast: bool = False,
                    sign: bool = True) -> SignedTransaction:
        """
        Build and sign a transaction.

        Args:
            actions: Actions in JSON form
            broadcast: Must be False; broadcasting is a separate step
            sign: Whether to attach a signature

        Returns:
            Signed, unbroadcast transaction
        """
        if broadcast:
            raise SignerError("Signers do not broadcast; submit the signed transaction separately")

        header = self.header_provider()
        transaction: Dict[str, Any] = header.to_dict()
        transaction.update({
            "context_free_actions": [],
            "actions": actions,
            "transaction_extensions": [],
        })

        signatures: List[str] = []
        if sign:
            packed = serialize_transaction(transaction)
            digest = signing_digest(self.chain_id, packed)
            signatures.append(self.sign_digest(digest).to_string())
            logger.debug("Signed transaction with %d action(s), expiration %s",
                         len(actions), header.expiration)

        return SignedTransaction(transaction=transaction, signatures=signatures)
