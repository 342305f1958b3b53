#!/usr/bin/env python3
"""
Seth RPC CLI

Usage:
    seth-rpc serve [--config FILE] [--bind HOST:PORT] [--connect URL] [-v...]
    seth-rpc methods
    seth-rpc query <method> [<param>...] [--url URL]
"""

import asyncio
import json
from typing import Optional, Tuple

import click

from .client import MemoryValidatorClient, ValidatorClient
from .config import NodeConfig, load_config
from .constants import NODE_VERSION
from .exceptions import ConfigurationError
from .logger import configure_logging, get_logger
from .rpc.modules import build_method_table
from .rpc.server import RPCServer

logger = get_logger(__name__)

# Ledger client implementations by URL scheme
CLIENT_SCHEMES = {
    "memory": MemoryValidatorClient,
}

_VERBOSITY = {0: None, 1: "INFO", 2: "DEBUG"}


def build_client(url: str) -> ValidatorClient:
    """Instantiate the ledger client for a validator URL."""
    scheme, sep, _ = url.partition("://")
    factory = CLIENT_SCHEMES.get(scheme) if sep else None
    if factory is None:
        supported = ", ".join(f"{s}://" for s in sorted(CLIENT_SCHEMES))
        raise ConfigurationError(
            f"Unsupported validator URL {url!r} (supported: {supported})"
        )
    return factory()


def build_server(client: ValidatorClient) -> RPCServer:
    server = RPCServer(client)
    server.register_methods(build_method_table())
    return server


def parse_bind(bind: str) -> Tuple[str, int]:
    host, sep, port = bind.rpartition(":")
    if not sep or not host:
        raise click.BadParameter(f"expected HOST:PORT, got {bind!r}", param_hint="--bind")
    try:
        return host, int(port)
    except ValueError:
        raise click.BadParameter(f"invalid port in {bind!r}", param_hint="--bind")


@click.group()
@click.version_option(version=NODE_VERSION, prog_name="seth-rpc")
def cli():
    """Ethereum JSON-RPC account queries backed by the validator state."""
    pass


@cli.command("serve")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="Path to config.toml")
@click.option("--bind", "-b", default=None, help="HOST:PORT to listen on")
@click.option("--connect", "-C", default=None, help="Validator URL (e.g. memory://)")
@click.option("--verbose", "-v", count=True, help="Increase log verbosity")
def serve_cmd(config_path: Optional[str], bind: Optional[str], connect: Optional[str], verbose: int):
    """Run the JSON-RPC HTTP server."""
    import uvicorn

    from .rpc.http import create_app

    try:
        config: NodeConfig = load_config(config_path)
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    configure_logging(_VERBOSITY.get(min(verbose, 2)) or config.node.log_level)

    if bind:
        config.rpc.http.host, config.rpc.http.port = parse_bind(bind)
    if connect:
        config.validator.url = connect

    try:
        client = build_client(config.validator.url)
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    server = build_server(client)
    app = create_app(server, config.rpc.http)

    logger.info(f"Validator: {config.validator.url}")
    logger.info(f"RPC endpoint: http://{config.rpc.http.host}:{config.rpc.http.port}/")
    try:
        uvicorn.run(
            app,
            host=config.rpc.http.host,
            port=config.rpc.http.port,
            access_log=False,
            log_config=None,
        )
    finally:
        asyncio.run(client.close())


@cli.command("methods")
def methods_cmd():
    """List the JSON-RPC methods this server answers."""
    for name, _ in build_method_table():
        click.echo(name)


@cli.command("query")
@click.argument("method")
@click.argument("params", nargs=-1)
@click.option("--url", "-u", default="http://127.0.0.1:3030/", help="RPC server URL")
def query_cmd(method: str, params: Tuple[str, ...], url: str):
    """Send one JSON-RPC request and print the result.

    Examples:

        seth-rpc query eth_getBalance 0x<address> latest
    """
    import httpx

    payload = {"jsonrpc": "2.0", "method": method, "params": list(params), "id": 1}
    try:
        response = httpx.post(url, json=payload, timeout=30.0)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPError as e:
        raise click.ClickException(f"Request failed: {e}")

    if "error" in data:
        error = data["error"]
        raise click.ClickException(f"{error.get('message')} ({error.get('code')})")
    click.echo(json.dumps(data.get("result")))


if __name__ == "__main__":
    cli()
