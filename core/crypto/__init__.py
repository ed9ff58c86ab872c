"""
Core cryptographic utilities.

Module 02 provides the hash primitive and hash combination used by the
Merkle tree.
"""
from .hashing import (
    DEFAULT_HASHER,
    HashValue,
    Hasher,
    Sha256Hasher,
    SipHasher,
    combine,
    encode_hash,
    from_hex,
    from_le_bytes,
    get_hasher,
    hash_word,
    to_hex,
    to_le_bytes,
)

__all__ = [
    "DEFAULT_HASHER",
    "HashValue",
    "Hasher",
    "Sha256Hasher",
    "SipHasher",
    "combine",
    "encode_hash",
    "from_hex",
    "from_le_bytes",
    "get_hasher",
    "hash_word",
    "to_hex",
    "to_le_bytes",
]
