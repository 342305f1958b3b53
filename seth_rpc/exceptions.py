"""
Seth RPC Exceptions

Custom exception classes for the RPC shim. JSON-RPC wire errors live in
`seth_rpc.rpc.errors`; the classes below never cross the RPC boundary.
"""


class SethRPCException(Exception):
    """Base exception for seth_rpc."""
    pass


class ClientError(SethRPCException):
    """The ledger client failed to answer a state query."""
    pass


class ConfigurationError(SethRPCException):
    """Configuration error."""
    pass
