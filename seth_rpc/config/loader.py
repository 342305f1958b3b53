"""
Seth RPC TOML Configuration Loader

Loads config.toml at startup with environment variable overrides.

Environment variable mapping:
    [node] log_level       → SETH_LOG_LEVEL
    [rpc.http] host        → SETH_RPC_HOST
    [rpc.http] port        → SETH_RPC_PORT
    [validator] url        → SETH_VALIDATOR_URL
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

try:
    import tomllib as tomli  # Python 3.11+
except ImportError:
    import tomli  # type: ignore[no-redef]

from ..constants import LOG_LEVEL, SETH_VALIDATOR_URL
from ..exceptions import ConfigurationError
from ..rpc.config import HTTPConfig, RPCConfig

logger = logging.getLogger(__name__)


def _port(value: Any, source: str) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{source}: port must be an integer, got {value!r}") from e
    if not 0 < port < 65536:
        raise ConfigurationError(f"{source}: port out of range: {port}")
    return port


@dataclass
class NodeSectionConfig:
    """[node] section."""
    log_level: str = str(LOG_LEVEL)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NodeSectionConfig":
        return cls(log_level=data.get("log_level", str(LOG_LEVEL)))

    def apply_env(self) -> None:
        """Override from environment variables."""
        if v := os.environ.get("SETH_LOG_LEVEL"):
            self.log_level = v


@dataclass
class ValidatorSectionConfig:
    """[validator] section: where the ledger client connects."""
    url: str = str(SETH_VALIDATOR_URL)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValidatorSectionConfig":
        return cls(url=data.get("url", str(SETH_VALIDATOR_URL)))

    def apply_env(self) -> None:
        if v := os.environ.get("SETH_VALIDATOR_URL"):
            self.url = v


@dataclass
class NodeConfig:
    """
    Unified configuration.

    Loads every section of config.toml and applies environment variable
    overrides. This is the single source of truth at runtime.
    """
    node: NodeSectionConfig = field(default_factory=NodeSectionConfig)
    rpc: RPCConfig = field(default_factory=RPCConfig)
    validator: ValidatorSectionConfig = field(default_factory=ValidatorSectionConfig)

    # --- factories --------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NodeConfig":
        """Create NodeConfig from a parsed TOML dict."""
        try:
            rpc = RPCConfig.from_dict(data.get("rpc", {}))
        except TypeError as e:
            raise ConfigurationError(f"[rpc]: {e}") from e
        rpc.http.port = _port(rpc.http.port, "[rpc.http]")

        return cls(
            node=NodeSectionConfig.from_dict(data.get("node", {})),
            rpc=rpc,
            validator=ValidatorSectionConfig.from_dict(data.get("validator", {})),
        )

    @classmethod
    def from_file(cls, config_path: str) -> "NodeConfig":
        """
        Load configuration from a TOML file.

        Args:
            config_path: Path to config.toml

        Returns:
            NodeConfig instance
        """
        path = Path(config_path)
        if not path.exists():
            logger.warning("Config file not found: %s, using defaults", config_path)
            cfg = cls()
            cfg.apply_env()
            return cfg

        with open(path, "rb") as f:
            try:
                raw = tomli.load(f)
            except tomli.TOMLDecodeError as e:
                raise ConfigurationError(f"{config_path}: {e}") from e

        cfg = cls.from_dict(raw)
        cfg.apply_env()
        return cfg

    # --- env overrides ----------------------------------------------------

    def apply_env(self) -> None:
        """Apply environment variable overrides to all sections."""
        self.node.apply_env()
        self.validator.apply_env()
        if v := os.environ.get("SETH_RPC_HOST"):
            self.rpc.http.host = v
        if v := os.environ.get("SETH_RPC_PORT"):
            self.rpc.http.port = _port(v, "SETH_RPC_PORT")


def load_config(path: Optional[str] = None) -> NodeConfig:
    """
    Load configuration.

    Resolution order:
        1. Explicit *path* argument
        2. SETH_CONFIG env var
        3. ./config.toml in current directory
        4. Defaults (with env overrides)
    """
    if path is None:
        path = os.environ.get("SETH_CONFIG", "config.toml")

    return NodeConfig.from_file(path)
