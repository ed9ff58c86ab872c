"""
CLI Serve Command

Run the Merkle file server with uvicorn.

Usage:
    merkle serve [--host 127.0.0.1] [--port 8000] [--hasher sha256]
"""

from __future__ import annotations

import logging
from argparse import Namespace

import uvicorn

from api.app import create_app
from api.store import FileStore
from merkle_cli.commands.common import EXIT_SUCCESS, resolve_hasher


logger = logging.getLogger(__name__)


def serve_cmd(args: Namespace) -> int:
    """Execute the serve command."""
    config = args.cli_config
    host = args.host or config.host
    port = args.port or config.port
    hasher = resolve_hasher(args)

    app = create_app(FileStore(hasher))
    logger.info(f"Serving on {host}:{port} with hasher {hasher.name}")
    uvicorn.run(app, host=host, port=port, log_level=config.log_level.lower())
    return EXIT_SUCCESS
