"""
Cryptographic primitives for EOSIO transaction signing.
"""

from .secp256k1 import PrivateKey, PublicKey, Signature, ripemd160, is_canonical

__all__ = [
    "PrivateKey",
    "PublicKey",
    "Signature",
    "ripemd160",
    "is_canonical",
]
