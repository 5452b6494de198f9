from .mocks import MockChainClient, FakeResponse
from .factories import (
    DEV_PRIVATE_KEY,
    DEV_PUBLIC_KEY,
    CHAIN_ID,
    FIXED_NOW,
    mk_reference,
    mk_header,
    mk_error_envelope,
)

__all__ = [
    "MockChainClient",
    "FakeResponse",
    "DEV_PRIVATE_KEY",
    "DEV_PUBLIC_KEY",
    "CHAIN_ID",
    "FIXED_NOW",
    "mk_reference",
    "mk_header",
    "mk_error_envelope",
]
