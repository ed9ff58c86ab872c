"""
API Dependencies

Dependency injection for the API: runtime config, hasher and file store.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml
from fastapi import Request

from api.store import FileStore
from core.config.runtime import RuntimeConfig
from core.crypto.hashing import Hasher, get_hasher

logger = logging.getLogger(__name__)


def load_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from a config file, then overlay environment variables.

    Search order for config file:
      1. ./merkle.yaml
      2. ./merkle.json
      3. ~/.config/merkle/config.json

    Environment variables ALWAYS override config file values.
    The .env file is loaded automatically by core.config.runtime on import.
    """
    search_paths = [
        Path.cwd() / "merkle.yaml",
        Path.cwd() / "merkle.json",
        Path.home() / ".config" / "merkle" / "config.json",
    ]

    config: RuntimeConfig | None = None

    for path in search_paths:
        if not path.exists():
            continue
        try:
            if path.suffix == ".yaml":
                config = RuntimeConfig.from_yaml(path)
            else:
                with open(path) as f:
                    config = RuntimeConfig.from_dict(json.load(f))
            logger.info(f"Loaded config from {path}")
            break
        except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
            logger.warning(f"Failed to parse {path}: {e}")

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


def build_hasher(config: RuntimeConfig) -> Hasher:
    """Resolve the configured hash primitive."""
    return get_hasher(config.merkle.hash_algorithm)


def get_store(request: Request) -> FileStore:
    """The file store attached to the running application."""
    return request.app.state.store
