"""
Seth RPC Module

Provides the Ethereum JSON-RPC 2.0 interface:
- Method handlers for the eth_* account queries
- Transport-agnostic JSON-RPC server
- HTTP binding (FastAPI)
"""

from .server import RPCServer
from .config import RPCConfig

__all__ = [
    "RPCServer",
    "RPCConfig",
]
