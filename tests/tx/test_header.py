"""
Tests for header derivation from chain reference data.
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from eosio_vote.tx.header import (
    ChainReference,
    SignedTransaction,
    TransactionHeader,
    build_header,
    format_expiration,
)
from helpers import CHAIN_ID, FIXED_NOW, mk_reference


class TestBuildHeader:

    def test_expiration_window(self, reference):
        header = build_header(reference, 600, FIXED_NOW)
        assert header.expiration == "2018-06-10T12:10:00"

    def test_zero_window(self, reference):
        assert build_header(reference, 0, FIXED_NOW).expiration == "2018-06-10T12:00:00"

    def test_sub_seconds_truncated(self, reference):
        now = datetime(2018, 6, 10, 12, 0, 0, 999999, tzinfo=timezone.utc)
        assert build_header(reference, 1, now).expiration == "2018-06-10T12:00:01"

    def test_offset_time_converted_to_utc(self, reference):
        tz = timezone(timedelta(hours=2))
        now = datetime(2018, 6, 10, 14, 0, 0, tzinfo=tz)
        assert build_header(reference, 600, now).expiration == "2018-06-10T12:10:00"

    def test_naive_time_taken_as_utc(self, reference):
        assert build_header(reference, 600, datetime(2018, 6, 10, 12, 0, 0)).expiration == "2018-06-10T12:10:00"

    # Protocol compatibility assumption, not verified here: the target network
    # resolves the reference block from its low 16 bits plus the prefix.
    # Check against the target nodeos version before relying on it.
    @pytest.mark.parametrize("block_num,ref_block_num", [
        (0, 0),
        (100, 100),
        (0xFFFF, 0xFFFF),
        (0x10000, 0),
        (0x12345678, 0x5678),
    ])
    def test_ref_block_num_is_low_16_bits(self, block_num, ref_block_num):
        header = build_header(mk_reference(block_num=block_num), 600, FIXED_NOW)
        assert header.ref_block_num == ref_block_num

    def test_prefix_and_limits(self):
        header = build_header(mk_reference(ref_block_prefix=0xDEADBEEF), 600, FIXED_NOW)
        assert header.ref_block_prefix == 0xDEADBEEF
        assert header.max_net_usage_words == 0
        assert header.max_cpu_usage_ms == 0
        assert header.delay_sec == 0

    def test_pure(self, reference):
        assert build_header(reference, 600, FIXED_NOW) == build_header(reference, 600, FIXED_NOW)

    def test_to_dict_keys(self, header):
        assert set(header.to_dict()) == {
            "expiration", "ref_block_num", "ref_block_prefix",
            "max_net_usage_words", "max_cpu_usage_ms", "delay_sec",
        }


class TestExpiry:

    def test_is_expired(self, header):
        assert not header.is_expired(FIXED_NOW)
        assert header.is_expired(FIXED_NOW + timedelta(seconds=600))
        assert header.expires_at() == datetime(2018, 6, 10, 12, 10, 0, tzinfo=timezone.utc)

    def test_format_expiration(self):
        assert format_expiration(FIXED_NOW) == "2018-06-10T12:00:00"


class TestModels:

    def test_reference_validation(self):
        with pytest.raises(ValidationError):
            ChainReference(chain_id="", block_num=1, ref_block_prefix=1)
        with pytest.raises(ValidationError):
            ChainReference(chain_id=CHAIN_ID, block_num=-1, ref_block_prefix=1)
        with pytest.raises(ValidationError):
            ChainReference(chain_id=CHAIN_ID, block_num=1, ref_block_prefix=1 << 32)

    def test_header_rejects_bad_expiration(self):
        with pytest.raises(ValidationError):
            TransactionHeader(expiration="2018-06-10 12:10:00", ref_block_num=1, ref_block_prefix=1)

    def test_header_rejects_wide_ref_block_num(self):
        with pytest.raises(ValidationError):
            TransactionHeader(expiration="2018-06-10T12:10:00", ref_block_num=0x10000, ref_block_prefix=1)

    def test_signed_transaction_json(self, header):
        signed = SignedTransaction(transaction=header.to_dict(), signatures=["SIG_K1_x"])
        restored = SignedTransaction.from_json(signed.to_json())
        assert restored == signed
        assert restored.compression == "none"
