"""
Binary Writer for EOSIO wire encoding.

Integers are little-endian; variable-length integers are unsigned LEB128
(varuint32); account names are packed uint64 values.
"""

import struct
from typing import List

from ..runtime.name import encode_name


class BinaryWriter:
    """
    Append-only binary writer.

    Provides the primitive encodings used by packed transactions.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb: List[int] = []

    def u8(self, v: int) -> None:
        """Write unsigned 8-bit integer."""
        self._bb.append(v & 0xFF)

    def u16le(self, v: int) -> None:
        """Write unsigned 16-bit integer in little-endian format."""
        self._bb.extend(struct.pack('<H', v & 0xFFFF))

    def u32le(self, v: int) -> None:
        """
        Write unsigned 32-bit integer in little-endian format.

        Args:
            v: Integer value to write as 32-bit little-endian
        """
        self._bb.extend(struct.pack('<I', v & 0xFFFFFFFF))

    def u64le(self, v: int) -> None:
        """
        Write unsigned 64-bit integer in little-endian format.

        Args:
            v: Integer value to write as 64-bit little-endian
        """
        self._bb.extend(struct.pack('<Q', v & 0xFFFFFFFFFFFFFFFF))

    def bytes(self, v: bytes) -> None:
        """Write raw bytes without length prefix."""
        self._bb.extend(v)

    def len_prefixed_bytes(self, v: bytes) -> None:
        """
        Write bytes with length prefix using varuint32.

        Args:
            v: Bytes to write with length prefix
        """
        self.varuint32(len(v))
        self.bytes(v)

    def varuint32(self, v: int) -> None:
        """
        Write unsigned varint in LEB128 format.

        Args:
            v: Unsigned integer value (must fit in 32 bits)
        """
        if not 0 <= v <= 0xFFFFFFFF:
            raise ValueError(f"varuint32 out of range: {v}")
        x = v
        while x >= 0x80:
            self.u8((x & 0x7F) | 0x80)
            x >>= 7
        self.u8(x)

    def name(self, v: str) -> None:
        """Write an account name as its packed uint64 value."""
        self.u64le(encode_name(v))

    def to_bytes(self) -> bytes:
        """Return accumulated bytes as immutable bytes object."""
        return bytes(self._bb)
