"""
Seth RPC Package

Ethereum JSON-RPC compatibility layer for account queries:
eth_getBalance, eth_getStorageAt and eth_getCode are answered from the
validator's state through a `ValidatorClient`.

    from seth_rpc.client import MemoryValidatorClient
    from seth_rpc.rpc import RPCServer
    from seth_rpc.rpc.modules import build_method_table
"""

from .constants import NODE_VERSION

__version__ = NODE_VERSION

__all__ = ["__version__"]
