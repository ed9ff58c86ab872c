"""
Module 01 - Schemas
File: __init__.py

Purpose: Export the error taxonomy. Wire models live in core.schemas.proof
and are imported from there directly.
"""

from .errors import (
    DuplicateLeafIndexException,
    ErrorCodes,
    LeafIndexOutOfRangeException,
    MerkleError,
    MerkleException,
    UnknownHasherException,
)

__all__ = [
    "DuplicateLeafIndexException",
    "ErrorCodes",
    "LeafIndexOutOfRangeException",
    "MerkleError",
    "MerkleException",
    "UnknownHasherException",
]
