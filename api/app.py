"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.deps import build_hasher, load_runtime_config
from api.errors import APIError, api_error_handler, generic_error_handler, merkle_error_handler
from api.routes import files, health, proofs
from api.store import FileStore
from core.schemas.errors import MerkleException


_config = load_runtime_config()

logging.basicConfig(
    level=getattr(logging, _config.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app(store: FileStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: File store to serve; a fresh one using the configured
               hasher is created when omitted
    """

    app = FastAPI(
        title="Merkle File Server",
        description="""
Stores files and serves Merkle inclusion proofs over them.

## Endpoints

- **POST /upload** - Store `{filename: content}` pairs and recompute the root
- **GET /download/{filename}** - Stored content
- **GET /proof/{filename}** - Side-tagged sibling path for one file
- **POST /multiproof** - Compact multiproof for several files
- **GET /root** - Current root
- **GET /health** - Health check

Each file's leaf is the decimal string of its content hash; leaves are
ordered by filename.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(MerkleException, merkle_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    app.include_router(health.router)
    app.include_router(files.router)
    app.include_router(proofs.router)

    app.state.store = store if store is not None else FileStore(build_hasher(_config))

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=_config.server.host, port=_config.server.port)
