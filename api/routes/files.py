"""
File Routes

Upload files, download them back, and read the current root.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Depends

from api.deps import get_store
from api.errors import EmptyStoreError, InvalidRequestError, UnknownFileError
from api.models.responses import RootResponse, UploadResponse
from api.store import FileStore


logger = logging.getLogger(__name__)

router = APIRouter(tags=["files"])


def base_filename(path: str) -> str:
    """Last path segment; clients may send the path they read the file from."""
    return path.rsplit("/", 1)[-1]


@router.post("/upload", response_model=UploadResponse)
async def upload(
    files: dict[str, str] = Body(..., description="Mapping of filename to content"),
    store: FileStore = Depends(get_store),
) -> UploadResponse:
    """
    Store files and recompute the Merkle root over every stored file.

    Re-uploading a filename replaces its content.
    """
    if not files:
        raise InvalidRequestError("Upload must contain at least one file")

    named = {base_filename(name): content for name, content in files.items()}
    if any(not name for name in named):
        raise InvalidRequestError("Filenames must not be empty")

    root = store.upload(named)
    return UploadResponse(ok=True, root=root, files=store.filenames())


@router.get("/download/{filename:path}", response_model=str)
async def download(
    filename: str,
    store: FileStore = Depends(get_store),
) -> str:
    """Return the stored content of a file as a JSON string."""
    name = base_filename(filename)
    stored = store.get(name)
    if stored is None:
        raise UnknownFileError(name)
    logger.info(f"Download: {name}")
    return stored.content


@router.get("/root", response_model=RootResponse)
async def current_root(store: FileStore = Depends(get_store)) -> RootResponse:
    """Current Merkle root over all stored files."""
    root = store.root
    if root is None:
        raise EmptyStoreError()
    return RootResponse(root=root, num_files=len(store))
