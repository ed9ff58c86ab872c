"""
Runtime Configuration

Central configuration for hasher selection, the file server and the client.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Optional
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


@dataclass
class MerkleConfig:
    """Configuration for tree construction."""
    hash_algorithm: str = "siphash13"


@dataclass
class ServerConfig:
    """Configuration for the file server."""
    host: str = "0.0.0.0"
    port: int = 8000


@dataclass
class ClientConfig:
    """Configuration for the file client."""
    server_url: str = "http://localhost:8000"
    timeout: float = 30.0
    root_file: str = "merkle_root.bin"


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    merkle: MerkleConfig = field(default_factory=MerkleConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    client: ClientConfig = field(default_factory=ClientConfig)
    log_level: str = "INFO"
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - MERKLE_HASH_ALGORITHM: Hasher name (siphash13, sha256)
        - MERKLE_HOST: Server bind host
        - MERKLE_PORT: Server bind port
        - MERKLE_SERVER_URL: Base URL the client talks to
        - MERKLE_CLIENT_TIMEOUT: Client request timeout in seconds
        - MERKLE_ROOT_FILE: Where the client stores the trusted root
        - MERKLE_LOG_LEVEL: Log level
        """
        overrides: dict[str, Any] = {}

        if os.getenv("MERKLE_HASH_ALGORITHM"):
            overrides.setdefault("merkle", {})["hash_algorithm"] = os.getenv("MERKLE_HASH_ALGORITHM")

        if os.getenv("MERKLE_HOST"):
            overrides.setdefault("server", {})["host"] = os.getenv("MERKLE_HOST")
        if os.getenv("MERKLE_PORT"):
            overrides.setdefault("server", {})["port"] = int(os.getenv("MERKLE_PORT", "8000"))

        if os.getenv("MERKLE_SERVER_URL"):
            overrides.setdefault("client", {})["server_url"] = os.getenv("MERKLE_SERVER_URL")
        if os.getenv("MERKLE_CLIENT_TIMEOUT"):
            overrides.setdefault("client", {})["timeout"] = float(os.getenv("MERKLE_CLIENT_TIMEOUT", "30"))
        if os.getenv("MERKLE_ROOT_FILE"):
            overrides.setdefault("client", {})["root_file"] = os.getenv("MERKLE_ROOT_FILE")

        if os.getenv("MERKLE_LOG_LEVEL"):
            overrides["log_level"] = os.getenv("MERKLE_LOG_LEVEL")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        merkle_data = data.get("merkle", {})
        server_data = data.get("server", {})
        client_data = data.get("client", {})

        merkle = MerkleConfig(**merkle_data) if merkle_data else MerkleConfig()
        server = ServerConfig(**server_data) if server_data else ServerConfig()
        client = ClientConfig(**client_data) if client_data else ClientConfig()

        return cls(
            merkle=merkle,
            server=server,
            client=client,
            log_level=data.get("log_level", "INFO"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        import copy
        new_config = copy.deepcopy(self)

        for section in ("merkle", "server", "client"):
            if section in overrides:
                target = getattr(new_config, section)
                for key, value in overrides[section].items():
                    setattr(target, key, value)

        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "merkle": {
                "hash_algorithm": self.merkle.hash_algorithm,
            },
            "server": {
                "host": self.server.host,
                "port": self.server.port,
            },
            "client": {
                "server_url": self.client.server_url,
                "timeout": self.client.timeout,
                "root_file": self.client.root_file,
            },
            "log_level": self.log_level,
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig | None) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
