"""
Seth eth_* Account Methods

Ethereum JSON-RPC account queries answered from the ledger's state:

    eth_getBalance    [address, block]            → QUANTITY | null
    eth_getStorageAt  [address, position, block]  → DATA | null
    eth_getCode       [address, block]            → DATA | null

eth_sign, eth_call and eth_accounts are registered so callers get a
"Not implemented" error instead of "Method not found".

Every handler has the signature ``async handler(params, client)`` and either
returns a JSON value or raises `RPCError`.
"""

from typing import Any, Awaitable, Callable, List, Sequence, Tuple

from ...client import BlockKey, BlockKeyParseError, ValidatorClient
from ...constants import ADDRESS_HEX_LENGTH, MIN_STORAGE_POSITION_LENGTH
from ...encoding import bytes_to_hex_str, hex_prefix, num_to_hex
from ...logger import get_logger
from ..errors import internal_error, invalid_params, not_implemented

logger = get_logger(__name__)

RequestHandler = Callable[[Any, ValidatorClient], Awaitable[Any]]

ACCOUNT_USAGE = "Takes [address: DATA(20), block: QUANTITY|TAG]"
STORAGE_USAGE = "Takes [address: DATA(20), position: QUANTITY, block: QUANTITY|TAG]"


def get_method_list() -> List[Tuple[str, RequestHandler]]:
    """Method name → handler pairs, in registration order."""
    return [
        ("eth_getBalance", get_balance),
        ("eth_getStorageAt", get_storage_at),
        ("eth_getCode", get_code),
        ("eth_sign", sign),
        ("eth_call", call),
        ("eth_accounts", accounts),
    ]


# ─── Validation ───────────────────────────────────────────────────────────────

def parse_params(params: Any, count: int, usage: str) -> Tuple[str, ...]:
    """
    Unpack positional params into exactly *count* strings.

    Raises:
        RPCError: invalid params carrying *usage* on any shape mismatch
    """
    if not isinstance(params, (list, tuple)) or len(params) != count:
        raise invalid_params(usage)
    if not all(isinstance(p, str) for p in params):
        raise invalid_params(usage)
    return tuple(params)


def validate_block_key(block: str) -> BlockKey:
    """
    Resolve a QUANTITY|TAG block selector.

    Malformed selectors are invalid params; well-formed selectors for a mode
    the ledger does not serve (e.g. "earliest") are not implemented.
    """
    try:
        return BlockKey.parse(block)
    except BlockKeyParseError as e:
        if e.is_unsupported:
            raise not_implemented() from e
        raise invalid_params("Failed to parse block number") from e


def validate_account_address(address: str) -> str:
    """Check a DATA(20) address by length only and strip its prefix."""
    if len(address) != ADDRESS_HEX_LENGTH:
        raise invalid_params(
            f"Invalid address length: {len(address)} != {ADDRESS_HEX_LENGTH}"
        )
    return address[2:]


def validate_storage_address(position: str) -> str:
    """Check a storage position by length and parity only and strip its prefix."""
    if len(position) < MIN_STORAGE_POSITION_LENGTH or len(position) % 2 != 0:
        raise invalid_params(f"Invalid storage position: {position}")
    return position[2:]


# ─── Handlers ─────────────────────────────────────────────────────────────────

async def get_balance(params: Sequence[str], client: ValidatorClient) -> Any:
    logger.info("eth_getBalance")
    address, block = parse_params(params, 2, ACCOUNT_USAGE)

    key = validate_block_key(block)
    address = validate_account_address(address)

    try:
        account = await client.get_account(address, key)
    except Exception as e:
        logger.error(f"eth_getBalance: ledger query failed: {e}")
        raise internal_error() from e

    if account is None:
        return None
    return num_to_hex(account.balance)


async def get_storage_at(params: Sequence[str], client: ValidatorClient) -> Any:
    logger.info("eth_getStorageAt")
    address, position, block = parse_params(params, 3, STORAGE_USAGE)

    key = validate_block_key(block)
    account_address = validate_account_address(address)
    storage_address = validate_storage_address(position)

    try:
        value = await client.get_storage_at(account_address, storage_address, key)
    except Exception as e:
        logger.error(f"eth_getStorageAt: ledger query failed: {e}")
        raise internal_error() from e

    if value is None:
        return None
    return hex_prefix(bytes_to_hex_str(value))


async def get_code(params: Sequence[str], client: ValidatorClient) -> Any:
    logger.info("eth_getCode")
    address, block = parse_params(params, 2, ACCOUNT_USAGE)

    key = validate_block_key(block)
    address = validate_account_address(address)

    try:
        account = await client.get_account(address, key)
    except Exception as e:
        logger.error(f"eth_getCode: ledger query failed: {e}")
        raise internal_error() from e

    if account is None:
        return None
    return hex_prefix(bytes_to_hex_str(account.code))


async def sign(params: Any, client: ValidatorClient) -> Any:
    raise not_implemented()


async def call(params: Any, client: ValidatorClient) -> Any:
    raise not_implemented()


async def accounts(params: Any, client: ValidatorClient) -> Any:
    raise not_implemented()
