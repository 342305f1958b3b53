"""
Seth JSON-RPC 2.0 Server

Implements the JSON-RPC 2.0 specification on top of a method table:
- Method registration from (name, handler) pairs
- Batch requests
- Notifications
- Error handling with standard codes

Handlers are called as ``await handler(params, client)`` where *client* is
the ledger client the server was built with. The server is transport
agnostic; see `seth_rpc.rpc.http` for the HTTP binding.
"""

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from ..client import ValidatorClient
from ..logger import get_logger
from .errors import RPCError, RPCErrorCode, internal_error
from .modules import RequestHandler

logger = get_logger(__name__)


@dataclass
class RPCRequest:
    """JSON-RPC request."""

    jsonrpc: str
    method: str
    params: Union[List, Dict, None]
    id: Union[str, int, None]

    @classmethod
    def from_dict(cls, data: dict) -> "RPCRequest":
        return cls(
            jsonrpc=data.get("jsonrpc", "2.0"),
            method=data.get("method", ""),
            params=data.get("params"),
            id=data.get("id"),
        )

    @property
    def is_notification(self) -> bool:
        """Check if this is a notification (no id)."""
        return self.id is None


@dataclass
class RPCResponse:
    """JSON-RPC response."""

    jsonrpc: str = "2.0"
    result: Optional[Any] = None
    error: Optional[Dict] = None
    id: Union[str, int, None] = None

    def to_dict(self) -> dict:
        response = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            response["error"] = self.error
        else:
            response["result"] = self.result
        return response

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


class RPCServer:
    """
    JSON-RPC 2.0 server.

    Holds the method table and the ledger client handed to every handler.
    The table is filled once at startup and only read afterwards.
    """

    def __init__(self, client: ValidatorClient):
        self.client = client
        self._methods: Dict[str, RequestHandler] = {}

    def register_method(self, name: str, handler: RequestHandler):
        """
        Register a single RPC method.

        Args:
            name: Method name (e.g., "eth_getBalance")
            handler: Async function taking (params, client)
        """
        self._methods[name] = handler
        logger.debug(f"Registered RPC method: {name}")

    def register_methods(self, methods: Iterable[Tuple[str, RequestHandler]]):
        """
        Register every (name, handler) pair of a method table.

        Args:
            methods: Output of `build_method_table()` or a module's `get_method_list()`
        """
        count = 0
        for name, handler in methods:
            self.register_method(name, handler)
            count += 1
        logger.info(f"Registered {count} RPC methods")

    def get_methods(self) -> List[str]:
        """Get list of registered method names."""
        return list(self._methods.keys())

    async def handle_request(self, data: Union[str, bytes, dict, list]) -> Optional[str]:
        """
        Handle a JSON-RPC request.

        Args:
            data: Request data (JSON string, or already decoded)

        Returns:
            JSON response string, or None for notifications
        """
        try:
            if isinstance(data, (str, bytes)):
                parsed = json.loads(data)
            else:
                parsed = data
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            error = RPCError(RPCErrorCode.PARSE_ERROR, f"Parse error: {e}")
            return RPCResponse(error=error.to_dict()).to_json()

        if isinstance(parsed, list):
            if not parsed:
                error = RPCError(RPCErrorCode.INVALID_REQUEST, "Empty batch")
                return RPCResponse(error=error.to_dict()).to_json()

            responses = await asyncio.gather(*[
                self._handle_single(req) for req in parsed
            ])

            # Notifications get no response
            responses = [r for r in responses if r is not None]
            if not responses:
                return None
            return json.dumps(responses)

        response = await self._handle_single(parsed)
        if response is None:
            return None
        return json.dumps(response)

    async def _handle_single(self, data: Any) -> Optional[dict]:
        """Handle a single request and return response dict."""
        if not isinstance(data, dict):
            return RPCResponse(
                error=RPCError(RPCErrorCode.INVALID_REQUEST, "Invalid request").to_dict()
            ).to_dict()

        request = RPCRequest.from_dict(data)

        if request.jsonrpc != "2.0":
            return RPCResponse(
                id=request.id,
                error=RPCError(RPCErrorCode.INVALID_REQUEST, "Invalid JSON-RPC version").to_dict()
            ).to_dict()

        if not request.method or not isinstance(request.method, str):
            return RPCResponse(
                id=request.id,
                error=RPCError(RPCErrorCode.INVALID_REQUEST, "Missing method").to_dict()
            ).to_dict()

        handler = self._methods.get(request.method)
        if handler is None:
            if request.is_notification:
                return None
            return RPCResponse(
                id=request.id,
                error=RPCError(
                    RPCErrorCode.METHOD_NOT_FOUND,
                    f"Method not found: {request.method}"
                ).to_dict()
            ).to_dict()

        try:
            result = await handler(request.params, self.client)

            if request.is_notification:
                return None
            return RPCResponse(id=request.id, result=result).to_dict()

        except RPCError as e:
            if request.is_notification:
                return None
            return RPCResponse(id=request.id, error=e.to_dict()).to_dict()

        except Exception:
            # Handler bug; the traceback stays in the log
            logger.exception(f"Error handling RPC method {request.method}")
            if request.is_notification:
                return None
            return RPCResponse(id=request.id, error=internal_error().to_dict()).to_dict()
