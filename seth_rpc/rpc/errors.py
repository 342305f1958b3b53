"""
JSON-RPC Errors

Every failure that leaves an eth_* handler is one of three kinds:

- invalid params: the caller sent something malformed; the message says what
- not implemented: the method or block selection mode is not offered
- internal error: the ledger failed; no detail is reported to the caller
"""

from dataclasses import dataclass
from enum import IntEnum


class RPCErrorCode(IntEnum):
    """Standard JSON-RPC 2.0 error codes."""

    # Standard errors
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603

    # Server error range (-32000 to -32099)
    METHOD_NOT_SUPPORTED = -32004


NOT_IMPLEMENTED_MESSAGE = "Not implemented"
INTERNAL_ERROR_MESSAGE = "Internal error"


@dataclass
class RPCError(Exception):
    """JSON-RPC error."""

    code: int
    message: str

    def __str__(self) -> str:
        return f"{self.message} ({int(self.code)})"

    def to_dict(self) -> dict:
        return {
            "code": int(self.code),
            "message": self.message,
        }


def invalid_params(message: str) -> RPCError:
    return RPCError(RPCErrorCode.INVALID_PARAMS, message)


def not_implemented() -> RPCError:
    return RPCError(RPCErrorCode.METHOD_NOT_SUPPORTED, NOT_IMPLEMENTED_MESSAGE)


def internal_error() -> RPCError:
    return RPCError(RPCErrorCode.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)
