"""
eth_* account method tests

Parameter validators, the method table, and every handler against a mocked
ledger client.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from seth_rpc.client import Account, BlockKey
from seth_rpc.exceptions import ClientError
from seth_rpc.rpc.errors import RPCError, RPCErrorCode
from seth_rpc.rpc.modules import build_method_table
from seth_rpc.rpc.modules.account import (
    ACCOUNT_USAGE,
    STORAGE_USAGE,
    accounts,
    call,
    get_balance,
    get_code,
    get_method_list,
    get_storage_at,
    parse_params,
    sign,
    validate_account_address,
    validate_storage_address,
)

ADDRESS = "0x" + "a" * 40


# ===================================================================
# FIXTURES
# ===================================================================

@pytest.fixture
def client():
    """Ledger client mock with no account anywhere."""
    mock = MagicMock()
    mock.get_account = AsyncMock(return_value=None)
    mock.get_storage_at = AsyncMock(return_value=None)
    return mock


def assert_invalid_params(exc_info, message=None):
    assert exc_info.value.code == RPCErrorCode.INVALID_PARAMS
    if message is not None:
        assert exc_info.value.message == message


# ===================================================================
# VALIDATORS
# ===================================================================

class TestValidateAccountAddress:
    def test_returns_suffix(self):
        assert validate_account_address(ADDRESS) == "a" * 40

    @pytest.mark.parametrize("length", [n for n in range(0, 64) if n != 42])
    def test_wrong_length(self, length):
        with pytest.raises(RPCError) as exc:
            validate_account_address("0" * length)
        assert_invalid_params(exc, f"Invalid address length: {length} != 42")

    def test_no_alphabet_check(self):
        # Length is the only rule; hex validity is left to the ledger client
        weird = "zz" + "g" * 40
        assert validate_account_address(weird) == "g" * 40


class TestValidateStorageAddress:
    @pytest.mark.parametrize("position", ["", "0", "0x", "0x1", "0x123", "0x12345"])
    def test_too_short_or_odd(self, position):
        with pytest.raises(RPCError) as exc:
            validate_storage_address(position)
        assert_invalid_params(exc, f"Invalid storage position: {position}")

    @pytest.mark.parametrize("position", ["0x00", "0x0001", "0x" + "f" * 64, "abcd"])
    def test_returns_suffix(self, position):
        assert validate_storage_address(position) == position[2:]


class TestParseParams:
    def test_exact_arity(self):
        assert parse_params(["a", "b"], 2, ACCOUNT_USAGE) == ("a", "b")

    @pytest.mark.parametrize("params", [
        None,
        [],
        [ADDRESS],
        [ADDRESS, "latest", "extra"],
        {"address": ADDRESS, "block": "latest"},
        [ADDRESS, 1],
        "latest",
    ])
    def test_shape_mismatch(self, params):
        with pytest.raises(RPCError) as exc:
            parse_params(params, 2, ACCOUNT_USAGE)
        assert_invalid_params(exc, ACCOUNT_USAGE)


# ===================================================================
# METHOD TABLE
# ===================================================================

class TestMethodTable:
    def test_names_in_order(self):
        names = [name for name, _ in get_method_list()]
        assert names == [
            "eth_getBalance",
            "eth_getStorageAt",
            "eth_getCode",
            "eth_sign",
            "eth_call",
            "eth_accounts",
        ]

    def test_build_method_table(self):
        table = build_method_table()
        assert table == get_method_list()
        assert dict(table)["eth_getCode"] is get_code


# ===================================================================
# HANDLERS
# ===================================================================

class TestGetBalance:
    @pytest.mark.asyncio
    async def test_balance(self, client):
        client.get_account.return_value = Account(balance=10)
        result = await get_balance([ADDRESS, "latest"], client)
        assert result == "0xa"
        client.get_account.assert_awaited_once_with("a" * 40, BlockKey.latest())

    @pytest.mark.asyncio
    async def test_zero_balance(self, client):
        client.get_account.return_value = Account(balance=0)
        assert await get_balance([ADDRESS, "0x5"], client) == "0x0"
        client.get_account.assert_awaited_once_with("a" * 40, BlockKey.at_number(5))

    @pytest.mark.asyncio
    async def test_missing_account_is_null(self, client):
        assert await get_balance([ADDRESS, "latest"], client) is None

    @pytest.mark.asyncio
    async def test_wrong_arity(self, client):
        with pytest.raises(RPCError) as exc:
            await get_balance([ADDRESS], client)
        assert_invalid_params(exc, ACCOUNT_USAGE)
        client.get_account.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_block_checked_before_address(self, client):
        with pytest.raises(RPCError) as exc:
            await get_balance(["0x12", "tomorrow"], client)
        assert_invalid_params(exc, "Failed to parse block number")

    @pytest.mark.asyncio
    async def test_unsupported_block(self, client):
        with pytest.raises(RPCError) as exc:
            await get_balance([ADDRESS, "earliest"], client)
        assert exc.value.code == RPCErrorCode.METHOD_NOT_SUPPORTED
        client.get_account.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_bad_address(self, client):
        with pytest.raises(RPCError) as exc:
            await get_balance(["0x1234", "latest"], client)
        assert_invalid_params(exc, "Invalid address length: 6 != 42")
        client.get_account.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_client_failure_is_opaque(self, client):
        client.get_account.side_effect = ClientError("connection to 10.0.0.7:4004 refused")
        with pytest.raises(RPCError) as exc:
            await get_balance([ADDRESS, "latest"], client)
        assert exc.value.code == RPCErrorCode.INTERNAL_ERROR
        assert exc.value.message == "Internal error"
        assert "10.0.0.7" not in str(exc.value.to_dict())

    @pytest.mark.asyncio
    async def test_unexpected_client_exception_is_opaque(self, client):
        client.get_account.side_effect = RuntimeError("segfault in backend")
        with pytest.raises(RPCError) as exc:
            await get_balance([ADDRESS, "latest"], client)
        assert exc.value.code == RPCErrorCode.INTERNAL_ERROR
        assert "segfault" not in exc.value.message


class TestGetStorageAt:
    @pytest.mark.asyncio
    async def test_value(self, client):
        client.get_storage_at.return_value = b"\x00\x00\x01\xff"
        result = await get_storage_at([ADDRESS, "0x00", "latest"], client)
        assert result == "0x000001ff"
        client.get_storage_at.assert_awaited_once_with("a" * 40, "00", BlockKey.latest())

    @pytest.mark.asyncio
    async def test_missing_is_null(self, client):
        assert await get_storage_at([ADDRESS, "0x01", "pending"], client) is None
        client.get_storage_at.assert_awaited_once_with("a" * 40, "01", BlockKey.pending())

    @pytest.mark.asyncio
    async def test_short_position_never_reaches_client(self, client):
        with pytest.raises(RPCError) as exc:
            await get_storage_at([ADDRESS, "0x1", "latest"], client)
        assert_invalid_params(exc, "Invalid storage position: 0x1")
        client.get_storage_at.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_wrong_arity(self, client):
        with pytest.raises(RPCError) as exc:
            await get_storage_at([ADDRESS, "latest"], client)
        assert_invalid_params(exc, STORAGE_USAGE)

    @pytest.mark.asyncio
    async def test_client_failure_is_opaque(self, client):
        client.get_storage_at.side_effect = ClientError("state root mismatch")
        with pytest.raises(RPCError) as exc:
            await get_storage_at([ADDRESS, "0x00", "latest"], client)
        assert exc.value.code == RPCErrorCode.INTERNAL_ERROR
        assert exc.value.message == "Internal error"


class TestGetCode:
    @pytest.mark.asyncio
    async def test_code(self, client):
        client.get_account.return_value = Account(balance=1, code=bytes.fromhex("6080604052"))
        assert await get_code([ADDRESS, "latest"], client) == "0x6080604052"

    @pytest.mark.asyncio
    async def test_empty_code(self, client):
        client.get_account.return_value = Account(balance=1)
        assert await get_code([ADDRESS, "latest"], client) == "0x"

    @pytest.mark.asyncio
    async def test_missing_is_null(self, client):
        assert await get_code([ADDRESS, "0x" + "11" * 32], client) is None
        key = client.get_account.await_args.args[1]
        assert key.block_hash == bytes.fromhex("11" * 32)

    @pytest.mark.asyncio
    async def test_client_failure_is_opaque(self, client):
        client.get_account.side_effect = ClientError("timeout")
        with pytest.raises(RPCError) as exc:
            await get_code([ADDRESS, "latest"], client)
        assert exc.value.code == RPCErrorCode.INTERNAL_ERROR


class TestNotImplemented:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("handler", [sign, call, accounts])
    @pytest.mark.parametrize("params", [None, [], [ADDRESS, "0xdead"], {"to": ADDRESS}])
    async def test_always_not_implemented(self, handler, params, client):
        with pytest.raises(RPCError) as exc:
            await handler(params, client)
        assert exc.value.code == RPCErrorCode.METHOD_NOT_SUPPORTED
        assert exc.value.message == "Not implemented"
        assert client.method_calls == []
        client.get_account.assert_not_awaited()
        client.get_storage_at.assert_not_awaited()
