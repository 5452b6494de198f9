"""
Transaction signers for the EOSIO vote client.
"""

from .credential import SigningCredential
from .signer import Signer, HeaderProvider
from .local import LocalSigner

__all__ = [
    "SigningCredential",
    "Signer",
    "HeaderProvider",
    "LocalSigner",
]
