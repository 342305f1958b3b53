"""
Ledger Client Interface

The RPC handlers never talk to the ledger directly. They call a
`ValidatorClient`, which answers account and storage queries against a
resolved `BlockKey`.
"""

from abc import ABC, abstractmethod
from typing import Optional

from .types import Account, BlockKey


class ValidatorClient(ABC):
    """
    Abstract query interface to the backing ledger.

    Implementations must be safe to call from several in-flight requests at
    once; each handler makes exactly one call per request.

    Addresses and storage positions arrive as bare hex strings (no `0x`
    prefix). They are length-checked by the RPC layer but not otherwise
    validated.
    """

    @abstractmethod
    async def get_account(self, address: str, at: BlockKey) -> Optional[Account]:
        """
        Fetch an account.

        Args:
            address: 40-character account address, no prefix
            at: Snapshot to query

        Returns:
            The account, or None if it does not exist at that snapshot

        Raises:
            ClientError: the query could not be answered
        """

    @abstractmethod
    async def get_storage_at(
        self,
        address: str,
        position: str,
        at: BlockKey,
    ) -> Optional[bytes]:
        """
        Fetch one storage slot of an account.

        Args:
            address: 40-character account address, no prefix
            position: Storage position, hex without prefix
            at: Snapshot to query

        Returns:
            Stored bytes, or None if the account or slot does not exist

        Raises:
            ClientError: the query could not be answered
        """

    async def close(self) -> None:
        """Release any connection held by the client."""
        return None
