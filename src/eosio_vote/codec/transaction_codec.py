"""
Packed transaction encoding.

Serializes the JSON form of a transaction into the binary layout nodeos
expects in ``packed_trx`` and computes the digest that gets signed.
"""

from __future__ import annotations
import hashlib
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Sequence

from ..runtime.errors import NameEncodingError
from ..runtime.name import encode_name
from .writer import BinaryWriter

EXPIRATION_FORMAT = "%Y-%m-%dT%H:%M:%S"


@contextmanager
def _field(path: str) -> Iterator[None]:
    """Re-raise name errors with the field path they occurred at."""
    try:
        yield
    except NameEncodingError as e:
        if e.field:
            raise
        raise NameEncodingError(f"{path}: {e.message}", account=e.account, field=path) from e


def expiration_to_epoch(expiration: str) -> int:
    """Convert a ``YYYY-MM-DDTHH:MM:SS`` UTC timestamp to epoch seconds."""
    dt = datetime.strptime(expiration, EXPIRATION_FORMAT).replace(tzinfo=timezone.utc)
    return int(dt.timestamp())


def validate_name(name: str, path: str) -> int:
    """Encode a name, reporting failures against the given field path."""
    with _field(path):
        return encode_name(name)


def serialize_vote_data(voter: str, proxy: str, producers: Sequence[str]) -> bytes:
    """
    Serialize ``voteproducer`` action data.

    Args:
        voter: Voting account
        proxy: Proxy account, empty when not proxying
        producers: Producer accounts, already sorted and unique

    Returns:
        Packed action data
    """
    writer = BinaryWriter()
    with _field("voteproducer.voter"):
        writer.name(voter)
    with _field("voteproducer.proxy"):
        writer.name(proxy)
    writer.varuint32(len(producers))
    with _field("voteproducer.producers"):
        for producer in producers:
            writer.name(producer)
    return writer.to_bytes()


def _write_actions(writer: BinaryWriter, actions: List[Dict[str, Any]]) -> None:
    writer.varuint32(len(actions))
    for action in actions:
        with _field("action.account"):
            writer.name(action["account"])
        with _field("action.name"):
            writer.name(action["name"])
        authorization = action.get("authorization", [])
        writer.varuint32(len(authorization))
        for level in authorization:
            with _field("permission_level.actor"):
                writer.name(level["actor"])
            with _field("permission_level.permission"):
                writer.name(level["permission"])
        data = action.get("data", "")
        writer.len_prefixed_bytes(bytes.fromhex(data) if isinstance(data, str) else bytes(data))


def serialize_transaction(transaction: Dict[str, Any]) -> bytes:
    """
    Serialize a transaction in its JSON form to packed bytes.

    Args:
        transaction: Transaction with header fields and actions

    Returns:
        Packed transaction bytes
    """
    writer = BinaryWriter()
    writer.u32le(expiration_to_epoch(transaction["expiration"]))
    writer.u16le(transaction["ref_block_num"])
    writer.u32le(transaction["ref_block_prefix"])
    writer.varuint32(transaction.get("max_net_usage_words", 0))
    writer.u8(transaction.get("max_cpu_usage_ms", 0))
    writer.varuint32(transaction.get("delay_sec", 0))
    _write_actions(writer, transaction.get("context_free_actions", []))
    _write_actions(writer, transaction.get("actions", []))
    # transaction_extensions are not produced by this client
    writer.varuint32(0)
    return writer.to_bytes()


def signing_digest(chain_id: str, packed_trx: bytes) -> bytes:
    """
    Compute the digest signed for a transaction.

    sha256(chain_id || packed_trx || context-free data hash), where the
    context-free data hash is 32 zero bytes when there is none.
    """
    return hashlib.sha256(bytes.fromhex(chain_id) + packed_trx + bytes(32)).digest()
