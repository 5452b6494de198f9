"""
EOSIO account name codec.

Account names are up to 13 characters packed base-32 into a uint64:
five bits per character for the first twelve, four bits for the thirteenth.
"""

import re

from .errors import NameEncodingError

NAME_CHARMAP = ".12345abcdefghijklmnopqrstuvwxyz"
NAME_PATTERN = re.compile(r"^[.1-5a-z]{0,12}[.1-5a-j]?$")


def is_valid_name(name: str) -> bool:
    """Check whether a string is an encodable account name."""
    return isinstance(name, str) and NAME_PATTERN.match(name) is not None


def _char_to_symbol(c: str) -> int:
    if "a" <= c <= "z":
        return ord(c) - ord("a") + 6
    if "1" <= c <= "5":
        return ord(c) - ord("1") + 1
    return 0


def encode_name(name: str) -> int:
    """
    Encode an account name as its uint64 value.

    Args:
        name: Account name

    Returns:
        Encoded name

    Raises:
        NameEncodingError: If the name is not a valid account name
    """
    if not is_valid_name(name):
        raise NameEncodingError(
            f"Invalid name {name!r}: names must be at most 13 characters "
            f"from {NAME_CHARMAP} (13th character limited to .12345abcdefghij)",
            account=name if isinstance(name, str) else repr(name),
        )

    value = 0
    for i in range(13):
        c = _char_to_symbol(name[i]) if i < len(name) else 0
        if i < 12:
            value |= (c & 0x1F) << (64 - 5 * (i + 1))
        else:
            value |= c & 0x0F
    return value


def decode_name(value: int) -> str:
    """Decode a uint64 back into its account name, trailing dots stripped."""
    if not 0 <= value <= 0xFFFFFFFFFFFFFFFF:
        raise NameEncodingError(f"Name value out of range: {value}")

    chars = []
    tmp = value
    for i in range(13):
        mask = 0x0F if i == 0 else 0x1F
        chars.append(NAME_CHARMAP[tmp & mask])
        tmp >>= 4 if i == 0 else 5
    return "".join(reversed(chars)).rstrip(".")
