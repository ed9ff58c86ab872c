"""
Proof Routes

Single-leaf proofs and compact multiproofs for stored files.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.deps import get_store
from api.errors import EmptyStoreError, InvalidRequestError, UnknownFileError
from api.models.requests import MultiProofRequest
from api.routes.files import base_filename
from api.store import FileStore
from core.schemas.proof import MultiProofBundle, ProofBundle


logger = logging.getLogger(__name__)

router = APIRouter(tags=["proofs"])


@router.get("/proof/{filename:path}", response_model=ProofBundle)
async def proof(
    filename: str,
    store: FileStore = Depends(get_store),
) -> ProofBundle:
    """
    Inclusion proof for one stored file.

    The leaf is the decimal string of the file's content hash; a client
    verifies by hashing the downloaded content, formatting the hash the
    same way, and checking the proof against its stored root.
    """
    if store.root is None:
        raise EmptyStoreError()

    name = base_filename(filename)
    try:
        root, index, leaf, path = store.prove(name)
    except KeyError:
        raise UnknownFileError(name)

    logger.info(f"Proof: {name} index={index} siblings={len(path)}")
    return ProofBundle.from_proof(root, path, index=index, leaf=leaf)


@router.post("/multiproof", response_model=MultiProofBundle)
async def multiproof(
    request: MultiProofRequest,
    store: FileStore = Depends(get_store),
) -> MultiProofBundle:
    """Compact multiproof for several stored files, in request order."""
    if store.root is None:
        raise EmptyStoreError()

    names = [base_filename(name) for name in request.filenames]
    if len(set(names)) != len(names):
        raise InvalidRequestError(
            "Duplicate filenames in multiproof request",
            details={"filenames": names},
        )

    try:
        root, leaves, compact = store.prove_many(names)
    except KeyError as e:
        raise UnknownFileError(str(e.args[0]))

    logger.info(f"Multiproof: {len(names)} files, {len(compact.hashes)} hashes")
    return MultiProofBundle.from_proof(root, compact, leaves=leaves)
