"""
Local secp256k1 signer backed by a SigningCredential.
"""

from __future__ import annotations
from typing import Iterable, Optional

from ..crypto.secp256k1 import PublicKey, Signature
from ..runtime.errors import SignerAssertionError
from .credential import SigningCredential
from .signer import HeaderProvider, Signer


class LocalSigner(Signer):
    """
    Signs with the key held by a credential.

    The key is parsed only for the duration of each signature. When
    ``required_keys`` is given, the credential's public key must be one of
    them.
    """

    def __init__(self, credential: SigningCredential, header_provider: HeaderProvider,
                 chain_id: str, required_keys: Optional[Iterable[str]] = None):
        super().__init__(header_provider, chain_id)
        self._credential = credential
        self._required_keys = (
            {PublicKey.from_string(k) for k in required_keys} if required_keys is not None else None
        )

    def sign_digest(self, digest: bytes) -> Signature:
        key = self._credential.private_key()
        try:
            if self._required_keys is not None and key.public_key() not in self._required_keys:
                raise SignerAssertionError("Invalid public key")
            return key.sign(digest)
        finally:
            del key
