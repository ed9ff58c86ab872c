"""
CLI Configuration

Configuration management for the Merkle CLI.
Supports environment variables and configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any


# Environment variable prefix
ENV_PREFIX = "MERKLE_"


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Tree settings
    hash_algorithm: str = "siphash13"

    # Server settings (serve command)
    host: str = "0.0.0.0"
    port: int = 8000

    # Client settings (client command)
    server_url: str = "http://localhost:8000"
    timeout: float = 30.0
    root_file: str = "merkle_root.bin"

    # Logging
    log_level: str = "WARNING"
    log_file: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_config_from_env(config: CLIConfig | None = None) -> CLIConfig:
    """Overlay environment variables on ``config`` (defaults when None)."""
    config = config or CLIConfig()

    if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
        config.hash_algorithm = os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM", config.hash_algorithm)
    if os.getenv(f"{ENV_PREFIX}HOST"):
        config.host = os.getenv(f"{ENV_PREFIX}HOST", config.host)
    if os.getenv(f"{ENV_PREFIX}PORT"):
        config.port = int(os.getenv(f"{ENV_PREFIX}PORT", "8000"))
    if os.getenv(f"{ENV_PREFIX}SERVER_URL"):
        config.server_url = os.getenv(f"{ENV_PREFIX}SERVER_URL", config.server_url)
    if os.getenv(f"{ENV_PREFIX}CLIENT_TIMEOUT"):
        config.timeout = float(os.getenv(f"{ENV_PREFIX}CLIENT_TIMEOUT", "30"))
    if os.getenv(f"{ENV_PREFIX}ROOT_FILE"):
        config.root_file = os.getenv(f"{ENV_PREFIX}ROOT_FILE", config.root_file)

    # Logging
    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", config.log_level)
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")

    return config


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    config = CLIConfig()
    for key, value in data.items():
        if hasattr(config, key):
            setattr(config, key, value)

    return config


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        default_paths = [
            Path.cwd() / "merkle.json",
            Path.cwd() / ".merkle.json",
            Path.home() / ".config" / "merkle" / "config.json",
        ]
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    return load_config_from_env(config)


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "hash_algorithm": "siphash13",
  "host": "0.0.0.0",
  "port": 8000,
  "server_url": "http://localhost:8000",
  "timeout": 30.0,
  "root_file": "merkle_root.bin",
  "log_level": "WARNING",
  "log_file": null
}
"""
