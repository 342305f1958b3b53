"""
In-memory ledger client.

Keeps every committed block as an immutable snapshot of accounts and
storage, plus one mutable pending snapshot. Used for local development
and by the test suite in place of a running validator.
"""

import hashlib
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..encoding import hex_str_to_bytes
from ..exceptions import ClientError
from ..logger import get_logger
from .types import Account, BlockKey, BlockKeyKind
from .validator import ValidatorClient

logger = get_logger(__name__)

StorageSlot = Tuple[str, int]


@dataclass
class _Snapshot:
    """Ledger state as of one block."""

    number: int
    block_hash: bytes
    accounts: Dict[str, Account] = field(default_factory=dict)
    storage: Dict[StorageSlot, bytes] = field(default_factory=dict)

    def copy(self) -> "_Snapshot":
        return _Snapshot(self.number, self.block_hash, dict(self.accounts), dict(self.storage))


def _block_hash(number: int, parent: bytes) -> bytes:
    return hashlib.sha256(parent + number.to_bytes(8, "big")).digest()


class MemoryValidatorClient(ValidatorClient):
    """
    Ledger client backed by Python dictionaries.

    Writes go to the pending snapshot; `commit()` seals it as the next
    block. Block 0 is an empty genesis block.
    """

    def __init__(self) -> None:
        genesis = _Snapshot(0, _block_hash(0, b"\x00" * 32))
        self._blocks: List[_Snapshot] = [genesis]
        self._by_hash: Dict[bytes, _Snapshot] = {genesis.block_hash: genesis}
        self._pending = genesis.copy()

    # ── writes ──

    def set_account(self, address: str, account: Account) -> None:
        self._pending.accounts[self._normalize_address(address)] = account

    def set_storage(self, address: str, position: str, value: bytes) -> None:
        key = (self._normalize_address(address), self._normalize_position(position))
        self._pending.storage[key] = bytes(value)

    def commit(self) -> int:
        """Seal pending state as a new block and return its number."""
        head = self._blocks[-1]
        number = head.number + 1
        block = self._pending.copy()
        block.number = number
        block.block_hash = _block_hash(number, head.block_hash)
        self._blocks.append(block)
        self._by_hash[block.block_hash] = block
        self._pending = block.copy()
        logger.debug(f"Committed block {number} ({len(block.accounts)} accounts)")
        return number

    @property
    def head(self) -> int:
        return self._blocks[-1].number

    def block_hash(self, number: int) -> bytes:
        return self._blocks[number].block_hash

    # ── ValidatorClient ──

    async def get_account(self, address: str, at: BlockKey) -> Optional[Account]:
        snapshot = self._resolve(at)
        return snapshot.accounts.get(self._normalize_address(address))

    async def get_storage_at(self, address: str, position: str, at: BlockKey) -> Optional[bytes]:
        snapshot = self._resolve(at)
        key = (self._normalize_address(address), self._normalize_position(position))
        return snapshot.storage.get(key)

    # ── internals ──

    def _resolve(self, at: BlockKey) -> _Snapshot:
        if at.kind is BlockKeyKind.LATEST:
            return self._blocks[-1]
        if at.kind is BlockKeyKind.PENDING:
            return self._pending
        if at.kind is BlockKeyKind.NUMBER:
            if at.number >= len(self._blocks):
                raise ClientError(f"Unknown block number {at.number} (head is {self.head})")
            return self._blocks[at.number]
        snapshot = self._by_hash.get(at.block_hash)
        if snapshot is None:
            raise ClientError(f"Unknown block hash {at}")
        return snapshot

    @staticmethod
    def _normalize_address(address: str) -> str:
        try:
            raw = hex_str_to_bytes(address)
        except ValueError as e:
            raise ClientError(f"Malformed account address {address!r}: {e}") from e
        if len(raw) != 20:
            raise ClientError(f"Account address must be 20 bytes, got {len(raw)}")
        return raw.hex()

    @staticmethod
    def _normalize_position(position: str) -> int:
        try:
            return int.from_bytes(hex_str_to_bytes(position), "big")
        except ValueError as e:
            raise ClientError(f"Malformed storage position {position!r}: {e}") from e
