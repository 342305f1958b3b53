"""
Seth RPC Configuration
"""

from dataclasses import dataclass, field
from typing import List

from ..constants import SETH_RPC_HOST, SETH_RPC_PORT


@dataclass
class HTTPConfig:
    """HTTP RPC configuration."""

    # Listen address
    host: str = str(SETH_RPC_HOST)

    # Listen port
    port: int = int(SETH_RPC_PORT)

    # Enable CORS
    cors_enabled: bool = True

    # CORS allowed origins
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    # Maximum request body size (bytes)
    max_request_size: int = 5 * 1024 * 1024  # 5MB


@dataclass
class RPCConfig:
    """RPC configuration."""

    # HTTP configuration
    http: HTTPConfig = field(default_factory=HTTPConfig)

    @classmethod
    def from_dict(cls, config: dict) -> "RPCConfig":
        """Create from dictionary."""
        config = dict(config)
        http_dict = config.pop("http", {})
        return cls(**config, http=HTTPConfig(**http_dict))
