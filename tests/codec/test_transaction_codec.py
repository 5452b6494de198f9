"""
Tests for the binary writer and packed transaction encoding.
"""

import hashlib
import struct

import pytest

from eosio_vote.codec import (
    BinaryWriter,
    serialize_transaction,
    serialize_vote_data,
    signing_digest,
    expiration_to_epoch,
    validate_name,
)
from eosio_vote.runtime.errors import NameEncodingError
from eosio_vote.runtime.name import encode_name
from helpers import CHAIN_ID


def _tx(**overrides):
    tx = {
        "expiration": "2018-06-01T00:00:00",
        "ref_block_num": 0x5678,
        "ref_block_prefix": 555,
        "max_net_usage_words": 0,
        "max_cpu_usage_ms": 0,
        "delay_sec": 0,
        "context_free_actions": [],
        "actions": [{
            "account": "eosio",
            "name": "voteproducer",
            "authorization": [{"actor": "alice", "permission": "active"}],
            "data": serialize_vote_data("alice", "", ["bp1"]).hex(),
        }],
        "transaction_extensions": [],
    }
    tx.update(overrides)
    return tx


class TestBinaryWriter:

    def test_fixed_width_integers(self):
        w = BinaryWriter()
        w.u8(0x1FF)
        w.u16le(0x1234)
        w.u32le(0xDEADBEEF)
        w.u64le(1)
        assert w.to_bytes() == b"\xff" + b"\x34\x12" + b"\xef\xbe\xad\xde" + b"\x01" + b"\x00" * 7

    @pytest.mark.parametrize("value,encoded", [
        (0, b"\x00"),
        (127, b"\x7f"),
        (128, b"\x80\x01"),
        (300, b"\xac\x02"),
        (0xFFFFFFFF, b"\xff\xff\xff\xff\x0f"),
    ])
    def test_varuint32(self, value, encoded):
        w = BinaryWriter()
        w.varuint32(value)
        assert w.to_bytes() == encoded

    def test_varuint32_range(self):
        with pytest.raises(ValueError):
            BinaryWriter().varuint32(1 << 32)

    def test_len_prefixed_and_name(self):
        w = BinaryWriter()
        w.len_prefixed_bytes(b"abc")
        w.name("eosio")
        assert w.to_bytes() == b"\x03abc" + struct.pack("<Q", encode_name("eosio"))


class TestVoteData:

    def test_layout(self):
        data = serialize_vote_data("alice", "", ["bp1", "bp2"])
        assert len(data) == 8 + 8 + 1 + 16
        assert data[:8] == struct.pack("<Q", encode_name("alice"))
        assert data[8:16] == b"\x00" * 8
        assert data[16] == 2

    def test_proxy_vote(self):
        data = serialize_vote_data("alice", "proxy1", [])
        assert data[8:16] == struct.pack("<Q", encode_name("proxy1"))
        assert data[16] == 0

    def test_invalid_producer_reports_field(self):
        with pytest.raises(NameEncodingError) as exc_info:
            serialize_vote_data("alice", "", ["BAD"])
        assert exc_info.value.field == "voteproducer.producers"
        assert "voteproducer.producers" in exc_info.value.message

    def test_validate_name_reports_path(self):
        assert validate_name("alice", "permission_level.actor") == encode_name("alice")
        with pytest.raises(NameEncodingError) as exc_info:
            validate_name("Alice", "permission_level.actor")
        assert "permission_level.actor" in exc_info.value.message
        assert exc_info.value.account == "Alice"


class TestTransaction:

    def test_expiration_to_epoch(self):
        assert expiration_to_epoch("1970-01-01T00:00:10") == 10
        assert expiration_to_epoch("2018-06-01T00:00:00") == 1527811200

    def test_header_layout(self):
        packed = serialize_transaction(_tx())
        assert packed[:4] == struct.pack("<I", 1527811200)
        assert packed[4:6] == struct.pack("<H", 0x5678)
        assert packed[6:10] == struct.pack("<I", 555)
        # net words, cpu ms, delay, no context free actions, one action
        assert packed[10:15] == b"\x00\x00\x00\x00\x01"
        assert packed[-1:] == b"\x00"

    def test_action_layout(self):
        tx = _tx()
        packed = serialize_transaction(tx)
        action = packed[15:-1]
        data = bytes.fromhex(tx["actions"][0]["data"])
        assert action[:8] == struct.pack("<Q", encode_name("eosio"))
        assert action[8:16] == struct.pack("<Q", encode_name("voteproducer"))
        assert action[16] == 1
        assert action[17:25] == struct.pack("<Q", encode_name("alice"))
        assert action[25:33] == struct.pack("<Q", encode_name("active"))
        assert action[33] == len(data)
        assert action[34:] == data

    def test_invalid_actor_reports_permission_level(self):
        tx = _tx()
        tx["actions"][0]["authorization"][0]["actor"] = "Alice!"
        with pytest.raises(NameEncodingError) as exc_info:
            serialize_transaction(tx)
        assert "permission_level.actor" in exc_info.value.message

    def test_signing_digest(self):
        packed = serialize_transaction(_tx())
        expected = hashlib.sha256(bytes.fromhex(CHAIN_ID) + packed + b"\x00" * 32).digest()
        assert signing_digest(CHAIN_ID, packed) == expected
        assert len(expected) == 32
