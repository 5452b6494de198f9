"""
SECP256K1 keys and signatures in EOSIO string formats.

Private keys: legacy WIF (``5...``) or ``PVT_K1_...``.
Public keys: legacy ``EOS...`` or ``PUB_K1_...``.
Signatures: compact recoverable ``SIG_K1_...``.

Checksums are the leading four bytes of RIPEMD-160 over the key data
(suffixed with ``K1`` for the typed formats); WIF uses double SHA-256.
"""

from __future__ import annotations
import hashlib
from typing import Optional

import base58
from ecdsa import SigningKey, VerifyingKey, SECP256k1
from ecdsa.util import sigencode_string_canonize, sigdecode_string

from ..runtime.errors import SignerAssertionError, SignerError

LEGACY_PUBLIC_PREFIX = "EOS"
PUBLIC_K1_PREFIX = "PUB_K1_"
PRIVATE_K1_PREFIX = "PVT_K1_"
SIGNATURE_K1_PREFIX = "SIG_K1_"
WIF_VERSION = 0x80
MAX_SIGN_ATTEMPTS = 64


def ripemd160(data: bytes) -> bytes:
    """RIPEMD-160 digest."""
    ripemd = hashlib.new('ripemd160')
    ripemd.update(data)
    return ripemd.digest()


def _k1_checksum(data: bytes) -> bytes:
    return ripemd160(data + b"K1")[:4]


def _b58decode(value: str, what: str) -> bytes:
    try:
        return base58.b58decode(value)
    except ValueError as e:
        raise SignerAssertionError(f"Invalid {what} format", cause=e)


def is_canonical(rs: bytes) -> bool:
    """Check the r||s canonical form nodeos accepts."""
    return (
        not (rs[0] & 0x80)
        and not (rs[0] == 0 and not (rs[1] & 0x80))
        and not (rs[32] & 0x80)
        and not (rs[32] == 0 and not (rs[33] & 0x80))
    )


class PublicKey:
    """Compressed secp256k1 public key."""

    def __init__(self, verifying_key: VerifyingKey):
        self._verifying_key = verifying_key

    @classmethod
    def from_bytes(cls, data: bytes) -> PublicKey:
        try:
            return cls(VerifyingKey.from_string(data, curve=SECP256k1))
        except Exception as e:
            raise SignerAssertionError("Invalid public key", cause=e)

    @classmethod
    def from_string(cls, value: str) -> PublicKey:
        """Parse an ``EOS...`` or ``PUB_K1_...`` public key."""
        if value.startswith(PUBLIC_K1_PREFIX):
            raw = _b58decode(value[len(PUBLIC_K1_PREFIX):], "public key")
            key, checksum = raw[:-4], raw[-4:]
            expected = _k1_checksum(key)
        elif value.startswith(LEGACY_PUBLIC_PREFIX):
            raw = _b58decode(value[len(LEGACY_PUBLIC_PREFIX):], "public key")
            key, checksum = raw[:-4], raw[-4:]
            expected = ripemd160(key)[:4]
        else:
            raise SignerAssertionError("Invalid public key format")
        if len(key) != 33 or checksum != expected:
            raise SignerAssertionError("Invalid public key checksum")
        return cls.from_bytes(key)

    def to_bytes(self) -> bytes:
        """Get the 33-byte compressed encoding."""
        return self._verifying_key.to_string("compressed")

    def to_string(self, legacy: bool = True) -> str:
        """Encode as ``EOS...`` (legacy) or ``PUB_K1_...``."""
        key = self.to_bytes()
        if legacy:
            return LEGACY_PUBLIC_PREFIX + base58.b58encode(key + ripemd160(key)[:4]).decode("ascii")
        return PUBLIC_K1_PREFIX + base58.b58encode(key + _k1_checksum(key)).decode("ascii")

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PublicKey):
            return self.to_bytes() == other.to_bytes()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.to_bytes())

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"PublicKey('{self.to_string()}')"


class PrivateKey:
    """secp256k1 private key. Never printed."""

    def __init__(self, secret: bytes):
        if len(secret) != 32:
            raise SignerAssertionError(f"Private key must be 32 bytes, got {len(secret)}")
        secexp = int.from_bytes(secret, "big")
        if not 1 <= secexp < SECP256k1.order:
            raise SignerAssertionError("Private key out of range")
        self._signing_key = SigningKey.from_string(secret, curve=SECP256k1)

    @classmethod
    def from_string(cls, value: str) -> PrivateKey:
        """Parse a legacy WIF or ``PVT_K1_...`` private key."""
        value = value.strip()
        if value.startswith(PRIVATE_K1_PREFIX):
            raw = _b58decode(value[len(PRIVATE_K1_PREFIX):], "private key")
            key, checksum = raw[:-4], raw[-4:]
            if len(key) != 32 or checksum != _k1_checksum(key):
                raise SignerAssertionError("Invalid private key checksum")
            return cls(key)

        raw = _b58decode(value, "private key")
        if len(raw) != 37:
            raise SignerAssertionError("Invalid private key format")
        payload, checksum = raw[:-4], raw[-4:]
        if hashlib.sha256(hashlib.sha256(payload).digest()).digest()[:4] != checksum:
            raise SignerAssertionError("Invalid private key checksum")
        if payload[0] != WIF_VERSION:
            raise SignerAssertionError(f"Expected version {WIF_VERSION}, instead got {payload[0]}")
        return cls(payload[1:])

    def to_wif(self) -> str:
        """Encode as legacy WIF."""
        payload = bytes([WIF_VERSION]) + self._signing_key.to_string()
        checksum = hashlib.sha256(hashlib.sha256(payload).digest()).digest()[:4]
        return base58.b58encode(payload + checksum).decode("ascii")

    def public_key(self) -> PublicKey:
        return PublicKey(self._signing_key.get_verifying_key())

    def sign(self, digest: bytes) -> Signature:
        """
        Sign a 32-byte digest.

        Deterministic (RFC 6979) signing, retried with extra entropy until the
        signature is canonical.

        Args:
            digest: 32-byte digest

        Returns:
            Recoverable compact signature
        """
        if len(digest) != 32:
            raise SignerError(f"Digest must be 32 bytes, got {len(digest)}")

        expected = self.public_key().to_bytes()
        for nonce in range(MAX_SIGN_ATTEMPTS):
            entropy = nonce.to_bytes(32, "big") if nonce else b""
            rs = self._signing_key.sign_digest_deterministic(
                digest,
                hashfunc=hashlib.sha256,
                sigencode=sigencode_string_canonize,
                extra_entropy=entropy,
            )
            if not is_canonical(rs):
                continue
            return Signature(rs, _recovery_id(rs, digest, expected))
        raise SignerError(f"No canonical signature after {MAX_SIGN_ATTEMPTS} attempts")

    def __repr__(self) -> str:
        return "PrivateKey(<redacted>)"


def _recovery_id(rs: bytes, digest: bytes, expected: bytes) -> int:
    candidates = VerifyingKey.from_public_key_recovery_with_digest(
        rs, digest, SECP256k1, hashfunc=hashlib.sha256, sigdecode=sigdecode_string
    )
    for recid, candidate in enumerate(candidates):
        if candidate.to_string("compressed") == expected:
            return recid
    raise SignerError("Unable to determine signature recovery id")


class Signature:
    """Compact recoverable signature."""

    def __init__(self, rs: bytes, recovery_id: int):
        if len(rs) != 64:
            raise SignerError(f"Signature must be 64 bytes, got {len(rs)}")
        self.rs = rs
        self.recovery_id = recovery_id

    @classmethod
    def from_string(cls, value: str) -> Signature:
        """Parse a ``SIG_K1_...`` signature."""
        if not value.startswith(SIGNATURE_K1_PREFIX):
            raise SignerError("Invalid signature format")
        raw = _b58decode(value[len(SIGNATURE_K1_PREFIX):], "signature")
        data, checksum = raw[:-4], raw[-4:]
        if len(data) != 65 or checksum != _k1_checksum(data):
            raise SignerError("Invalid signature checksum")
        return cls(data[1:], data[0] - 31)

    def to_bytes(self) -> bytes:
        """Compact form: header byte (recovery id + 31) followed by r||s."""
        return bytes([self.recovery_id + 31]) + self.rs

    def to_string(self) -> str:
        data = self.to_bytes()
        return SIGNATURE_K1_PREFIX + base58.b58encode(data + _k1_checksum(data)).decode("ascii")

    def recover(self, digest: bytes) -> PublicKey:
        """Recover the signing public key from a digest."""
        candidates = VerifyingKey.from_public_key_recovery_with_digest(
            self.rs, digest, SECP256k1, hashfunc=hashlib.sha256, sigdecode=sigdecode_string
        )
        return PublicKey(candidates[self.recovery_id])

    def verify(self, digest: bytes, public_key: PublicKey) -> bool:
        """Check the signature against a digest and public key."""
        try:
            return public_key._verifying_key.verify_digest(self.rs, digest, sigdecode=sigdecode_string)
        except Exception:
            return False

    def __str__(self) -> str:
        return self.to_string()
