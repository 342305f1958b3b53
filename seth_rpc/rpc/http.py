"""
HTTP transport for the JSON-RPC server.

A FastAPI app with a single JSON-RPC endpoint (``POST /``) plus a health
probe. Request bodies are handed to `RPCServer.handle_request` unparsed so
that batch requests and parse errors follow JSON-RPC semantics.
"""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse, Response

from ..constants import NODE_VERSION
from ..logger import get_logger
from .config import HTTPConfig
from .errors import RPCError, RPCErrorCode
from .server import RPCResponse, RPCServer

logger = get_logger(__name__)


def create_app(rpc_server: RPCServer, config: Optional[HTTPConfig] = None) -> FastAPI:
    """
    Build the ASGI app serving *rpc_server*.

    Args:
        rpc_server: Server with its method table registered
        config: HTTP settings (CORS, body size limit)
    """
    config = config or HTTPConfig()

    app = FastAPI(
        title="Seth RPC",
        description="Ethereum JSON-RPC account queries backed by the validator state.",
        version=NODE_VERSION,
    )
    app.state.rpc_server = rpc_server

    if config.cors_enabled:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    @app.post("/")
    async def rpc_endpoint(request: Request):
        """JSON-RPC 2.0 endpoint"""
        body = await request.body()
        if len(body) > config.max_request_size:
            error = RPCError(RPCErrorCode.INVALID_REQUEST, "Request too large")
            return Response(
                content=RPCResponse(error=error.to_dict()).to_json(),
                status_code=413,
                media_type="application/json",
            )

        result = await rpc_server.handle_request(body)
        if result is None:
            return Response(status_code=204)
        # handle_request returns a JSON string; send it raw to avoid double-encoding
        return Response(content=result, media_type="application/json")

    @app.get("/health")
    async def health():
        return JSONResponse({"ok": True, "methods": len(rpc_server.get_methods())})

    return app
