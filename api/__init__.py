"""
Merkle File Server (FastAPI)

HTTP API that stores files and serves Merkle proofs over them:
- POST /upload - Store files, recompute root
- GET /download/{filename} - Fetch file content
- GET /proof/{filename} - Single-leaf inclusion proof
- POST /multiproof - Compact multiproof for several files
- GET /root - Current root
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
