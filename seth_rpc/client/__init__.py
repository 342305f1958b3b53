"""
Seth RPC Ledger Client

Query interface to the ledger that backs the eth_* methods.
"""

from .types import (
    Account,
    BlockKey,
    BlockKeyKind,
    BlockKeyParseError,
    BlockKeyParseErrorKind,
)
from .validator import ValidatorClient
from .memory import MemoryValidatorClient

__all__ = [
    "Account",
    "BlockKey",
    "BlockKeyKind",
    "BlockKeyParseError",
    "BlockKeyParseErrorKind",
    "ValidatorClient",
    "MemoryValidatorClient",
]
