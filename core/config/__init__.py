"""
Runtime Configuration Module

Provides configuration loading and management for the Merkle tools.
"""

from .runtime import (
    ClientConfig,
    MerkleConfig,
    RuntimeConfig,
    ServerConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "ClientConfig",
    "MerkleConfig",
    "RuntimeConfig",
    "ServerConfig",
    "get_default_config",
    "set_default_config",
]
