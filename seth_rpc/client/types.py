"""
Ledger Client Types

Block selectors and account records exchanged between the RPC handlers and
the ledger client.
"""

import string
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..constants import BLOCK_HASH_LENGTH, HEX_PREFIX, MAX_BLOCK_NUMBER


class BlockKeyKind(Enum):
    LATEST = "latest"
    PENDING = "pending"
    NUMBER = "number"
    HASH = "hash"


class BlockKeyParseErrorKind(Enum):
    """Why a block selector could not be turned into a BlockKey."""

    # Not a block selector at all
    INVALID = "invalid"
    # A well-formed selector for a mode the ledger does not offer
    UNSUPPORTED = "unsupported"


class BlockKeyParseError(ValueError):
    """Raised by `BlockKey.parse`; `kind` tells malformed from unsupported."""

    def __init__(self, kind: BlockKeyParseErrorKind, raw: object):
        super().__init__(f"{kind.value} block key: {raw!r}")
        self.kind = kind
        self.raw = raw

    @property
    def is_unsupported(self) -> bool:
        return self.kind is BlockKeyParseErrorKind.UNSUPPORTED


# Tags Ethereum clients accept that this ledger has no snapshot for
UNSUPPORTED_TAGS = frozenset({"earliest", "safe", "finalized"})

_HEX_DIGITS = frozenset(string.hexdigits)


@dataclass(frozen=True)
class BlockKey:
    """
    Selects the ledger snapshot a state query targets.

    Exactly one of four variants: latest, pending, a block number (u64) or a
    32-byte block hash. Build with the classmethods, or from wire format with
    `BlockKey.parse`.
    """

    kind: BlockKeyKind
    value: Union[int, bytes, None] = None

    @classmethod
    def latest(cls) -> "BlockKey":
        return cls(BlockKeyKind.LATEST)

    @classmethod
    def pending(cls) -> "BlockKey":
        return cls(BlockKeyKind.PENDING)

    @classmethod
    def at_number(cls, number: int) -> "BlockKey":
        if not 0 <= number <= MAX_BLOCK_NUMBER:
            raise ValueError(f"Block number out of range: {number}")
        return cls(BlockKeyKind.NUMBER, number)

    @classmethod
    def at_hash(cls, block_hash: bytes) -> "BlockKey":
        if len(block_hash) != BLOCK_HASH_LENGTH:
            raise ValueError(
                f"Block hash must be {BLOCK_HASH_LENGTH} bytes, got {len(block_hash)}"
            )
        return cls(BlockKeyKind.HASH, bytes(block_hash))

    @classmethod
    def parse(cls, raw: str) -> "BlockKey":
        """
        Parse a wire-format block selector (QUANTITY|TAG).

        Accepts "latest", "pending", a `0x` hex block number that fits in
        64 bits, or a `0x` hex 32-byte block hash.

        Raises:
            BlockKeyParseError: with kind UNSUPPORTED for recognized tags this
                ledger cannot serve, INVALID for everything else.
        """
        if not isinstance(raw, str):
            raise BlockKeyParseError(BlockKeyParseErrorKind.INVALID, raw)

        if raw == "latest":
            return cls.latest()
        if raw == "pending":
            return cls.pending()
        if raw in UNSUPPORTED_TAGS:
            raise BlockKeyParseError(BlockKeyParseErrorKind.UNSUPPORTED, raw)

        if not raw.startswith(HEX_PREFIX):
            raise BlockKeyParseError(BlockKeyParseErrorKind.INVALID, raw)
        digits = raw[len(HEX_PREFIX):]
        # int(x, 16) tolerates "_" and whitespace, so check the alphabet first
        if not digits or not _HEX_DIGITS.issuperset(digits):
            raise BlockKeyParseError(BlockKeyParseErrorKind.INVALID, raw)

        if len(digits) == 2 * BLOCK_HASH_LENGTH:
            return cls.at_hash(bytes.fromhex(digits))

        number = int(digits, 16)
        if number > MAX_BLOCK_NUMBER:
            raise BlockKeyParseError(BlockKeyParseErrorKind.INVALID, raw)
        return cls.at_number(number)

    @property
    def number(self) -> Optional[int]:
        return self.value if self.kind is BlockKeyKind.NUMBER else None

    @property
    def block_hash(self) -> Optional[bytes]:
        return self.value if self.kind is BlockKeyKind.HASH else None

    def __str__(self) -> str:
        if self.kind is BlockKeyKind.NUMBER:
            return hex(self.value)
        if self.kind is BlockKeyKind.HASH:
            return HEX_PREFIX + self.value.hex()
        return self.kind.value


@dataclass(frozen=True)
class Account:
    """
    Account state as reported by the ledger.

    Attributes:
        balance: Balance in the ledger's smallest unit
        code: Contract bytecode (empty for externally owned accounts)
        nonce: Account nonce
    """

    balance: int = 0
    code: bytes = b""
    nonce: int = 0
