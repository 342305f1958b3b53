"""
Block selector parsing: every input is either a BlockKey, an invalid
selector, or a recognized-but-unsupported one.
"""

import pytest

from seth_rpc.client import (
    BlockKey,
    BlockKeyKind,
    BlockKeyParseError,
    BlockKeyParseErrorKind,
)
from seth_rpc.rpc.errors import RPCError, RPCErrorCode
from seth_rpc.rpc.modules.account import validate_block_key


def classify(raw):
    try:
        BlockKey.parse(raw)
        return "parsed"
    except BlockKeyParseError as e:
        return e.kind.value


class TestBlockKeyParse:
    def test_tags(self):
        assert BlockKey.parse("latest") == BlockKey.latest()
        assert BlockKey.parse("pending") == BlockKey.pending()

    def test_number(self):
        key = BlockKey.parse("0x1b4")
        assert key.kind is BlockKeyKind.NUMBER
        assert key.number == 436
        assert key.block_hash is None

    def test_number_zero(self):
        assert BlockKey.parse("0x0").number == 0

    def test_number_u64_max(self):
        assert BlockKey.parse("0x" + "f" * 16).number == 2 ** 64 - 1

    def test_hash(self):
        raw = "0x" + "ab" * 32
        key = BlockKey.parse(raw)
        assert key.kind is BlockKeyKind.HASH
        assert key.block_hash == bytes.fromhex("ab" * 32)
        assert key.number is None
        assert str(key) == raw

    @pytest.mark.parametrize("raw", ["earliest", "safe", "finalized"])
    def test_unsupported_tags(self, raw):
        with pytest.raises(BlockKeyParseError) as exc:
            BlockKey.parse(raw)
        assert exc.value.kind is BlockKeyParseErrorKind.UNSUPPORTED
        assert exc.value.is_unsupported

    @pytest.mark.parametrize("raw", [
        "",
        "0x",
        "12",
        "Latest",
        "LATEST",
        "0xzz",
        "0x1_0",
        "0x 10",
        "0x" + "1" + "0" * 16,     # 2**64 overflows u64
        "0x" + "ab" * 33,          # too long for a hash
    ])
    def test_invalid(self, raw):
        with pytest.raises(BlockKeyParseError) as exc:
            BlockKey.parse(raw)
        assert exc.value.kind is BlockKeyParseErrorKind.INVALID

    @pytest.mark.parametrize("raw", [None, 12, 1.5, ["latest"]])
    def test_non_string_invalid(self, raw):
        with pytest.raises(BlockKeyParseError) as exc:
            BlockKey.parse(raw)
        assert exc.value.kind is BlockKeyParseErrorKind.INVALID

    def test_outcomes_are_exhaustive_and_disjoint(self):
        samples = ["latest", "pending", "earliest", "safe", "0x1", "0x" + "0" * 64,
                   "nope", "0x", "0xg", "-1", "0x" + "f" * 17]
        outcomes = {raw: classify(raw) for raw in samples}
        assert set(outcomes.values()) == {"parsed", "invalid", "unsupported"}
        assert outcomes["earliest"] == "unsupported"
        assert outcomes["0x1"] == "parsed"
        assert outcomes["nope"] == "invalid"

    def test_leading_zeros_accepted(self):
        assert BlockKey.parse("0x0010").number == 16

    def test_str_roundtrip_tags(self):
        assert str(BlockKey.latest()) == "latest"
        assert str(BlockKey.at_number(255)) == "0xff"

    def test_constructors_reject_bad_values(self):
        with pytest.raises(ValueError):
            BlockKey.at_number(-1)
        with pytest.raises(ValueError):
            BlockKey.at_number(2 ** 64)
        with pytest.raises(ValueError):
            BlockKey.at_hash(b"\x00" * 31)


class TestValidateBlockKey:
    def test_success(self):
        assert validate_block_key("latest") == BlockKey.latest()
        assert validate_block_key("0x2").number == 2

    def test_malformed_is_invalid_params(self):
        with pytest.raises(RPCError) as exc:
            validate_block_key("yesterday")
        assert exc.value.code == RPCErrorCode.INVALID_PARAMS
        assert exc.value.message == "Failed to parse block number"

    def test_unsupported_is_not_implemented(self):
        with pytest.raises(RPCError) as exc:
            validate_block_key("earliest")
        assert exc.value.code == RPCErrorCode.METHOD_NOT_SUPPORTED
        assert exc.value.message == "Not implemented"
