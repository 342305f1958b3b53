"""
Seth RPC Configuration

Loads config.toml at startup.
Environment variables override TOML values.
"""

from .loader import (
    NodeConfig,
    NodeSectionConfig,
    ValidatorSectionConfig,
    load_config,
)

__all__ = [
    "NodeConfig",
    "NodeSectionConfig",
    "ValidatorSectionConfig",
    "load_config",
]
