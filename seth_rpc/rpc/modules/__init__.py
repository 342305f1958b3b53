"""
Seth RPC Modules

Ethereum JSON-RPC method implementations. Each module exposes
``get_method_list()``; `build_method_table` joins them in a fixed order.
"""

from typing import List, Tuple

from . import account
from .account import RequestHandler


def build_method_table() -> List[Tuple[str, RequestHandler]]:
    """Every method this server answers, as ordered (name, handler) pairs."""
    methods: List[Tuple[str, RequestHandler]] = []
    methods.extend(account.get_method_list())
    return methods


__all__ = [
    "RequestHandler",
    "build_method_table",
]
