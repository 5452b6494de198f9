"""
Scoped signing credential.

Holds a private key in a mutable buffer for the duration of one signing
call. ``release()`` overwrites the buffer with zeros and drops it; the
credential is unusable afterwards.
"""

from __future__ import annotations
from typing import Optional, Union

from ..crypto.secp256k1 import PrivateKey
from ..runtime.errors import CredentialReleasedError


class SigningCredential:
    """
    Private key material with an explicit, guaranteed release.

    Use as a context manager, or call release() in a finally block.
    A bytearray passed in is owned by the credential and zeroed on release.
    """

    def __init__(self, secret: Union[str, bytes, bytearray]):
        if isinstance(secret, bytearray):
            self._secret: Optional[bytearray] = secret
        elif isinstance(secret, str):
            self._secret = bytearray(secret.strip().encode("utf-8"))
        else:
            self._secret = bytearray(secret)

    @property
    def released(self) -> bool:
        return self._secret is None

    def private_key(self) -> PrivateKey:
        """
        Parse the held key.

        Raises:
            CredentialReleasedError: If the credential was released
            SignerAssertionError: If the key is malformed
        """
        if self._secret is None:
            raise CredentialReleasedError()
        return PrivateKey.from_string(self._secret.decode("utf-8", errors="replace"))

    def release(self) -> None:
        """Zero and drop the key material. Safe to call more than once."""
        secret = self._secret
        if secret is None:
            return
        for i in range(len(secret)):
            secret[i] = 0
        self._secret = None

    def __enter__(self) -> SigningCredential:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self.released else "<redacted>"
        return f"SigningCredential({state})"
