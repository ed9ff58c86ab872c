"""
Module 02 - Hashing Utilities
Hash primitive and canonical hash combination for Merkle commitments.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- HashValue: fixed-width unsigned 64-bit integer hash
- hash_word: leaf hash of a data block (string)
- encode_hash: canonical encoding (8 bytes little-endian, lowercase hex)
- combine: order-sensitive parent hash of two child hashes
- Pluggable hashers (SipHash-1-3 default, truncated SHA-256 alternative)
- Little-endian wire helpers and 0x-prefixed hex display helpers

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = H(word)
2. Hash encoding: hex(h.to_bytes(8, "little"))
3. Parent hashing: parent = H(encode_hash(left) + encode_hash(right))

Any reimplementation must reproduce rule 2 byte for byte, or roots
computed from identical data will not match.
"""
from __future__ import annotations

import hashlib
from typing import Protocol

from core.crypto.siphash import siphash13_str
from core.schemas.errors import UnknownHasherException


# A hash is an unsigned 64-bit integer
HashValue = int

HASH_WIDTH_BYTES = 8
HASH_MAX = (1 << (8 * HASH_WIDTH_BYTES)) - 1


def is_hash_value(value: object) -> bool:
    """Check that ``value`` is a plain int in the HashValue range."""
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 <= value <= HASH_MAX
    )


def to_le_bytes(value: HashValue) -> bytes:
    """
    Encode a hash as fixed-width little-endian bytes.

    Raises:
        OverflowError: If value does not fit in 64 bits or is negative
    """
    return value.to_bytes(HASH_WIDTH_BYTES, "little")


def from_le_bytes(data: bytes) -> HashValue:
    """
    Decode a hash from little-endian bytes.

    Only the first 8 bytes are read.

    Raises:
        ValueError: If fewer than 8 bytes are supplied
    """
    if len(data) < HASH_WIDTH_BYTES:
        raise ValueError(
            f"Need {HASH_WIDTH_BYTES} bytes to decode a hash, got {len(data)}"
        )
    return int.from_bytes(data[:HASH_WIDTH_BYTES], "little")


def encode_hash(value: HashValue) -> str:
    """
    Canonical text encoding of a hash used for parent hashing.

    Example:
        >>> encode_hash(1)
        '0100000000000000'
    """
    return to_le_bytes(value).hex()


class Hasher(Protocol):
    """Hash primitive used by every tree operation."""

    name: str

    def hash_word(self, word: str) -> HashValue: ...

    def combine(self, left: HashValue, right: HashValue) -> HashValue: ...


class SipHasher:
    """
    Default hasher: zero-keyed SipHash-1-3 over the string bytes plus a
    0xff terminator.
    """

    name = "siphash13"

    def hash_word(self, word: str) -> HashValue:
        return siphash13_str(word)

    def combine(self, left: HashValue, right: HashValue) -> HashValue:
        return self.hash_word(encode_hash(left) + encode_hash(right))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class Sha256Hasher:
    """
    SHA-256 based hasher: the first 8 bytes of the digest, read little-endian.

    Same tree protocol as SipHasher, stronger primitive. Roots are not
    interchangeable between hashers.
    """

    name = "sha256"

    def hash_word(self, word: str) -> HashValue:
        digest = hashlib.sha256(word.encode("utf-8")).digest()
        return int.from_bytes(digest[:HASH_WIDTH_BYTES], "little")

    def combine(self, left: HashValue, right: HashValue) -> HashValue:
        return self.hash_word(encode_hash(left) + encode_hash(right))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


DEFAULT_HASHER: Hasher = SipHasher()

_HASHERS: dict[str, Hasher] = {
    SipHasher.name: DEFAULT_HASHER,
    Sha256Hasher.name: Sha256Hasher(),
}


def available_hashers() -> list[str]:
    """Names accepted by get_hasher()."""
    return sorted(_HASHERS)


def get_hasher(name: str | None = None) -> Hasher:
    """
    Resolve a hasher by name.

    Args:
        name: Hasher name ("siphash13" or "sha256"); None gives the default

    Returns:
        Hasher instance

    Raises:
        UnknownHasherException: If the name is not registered
    """
    if name is None:
        return DEFAULT_HASHER
    try:
        return _HASHERS[name.lower()]
    except KeyError:
        raise UnknownHasherException(name, available_hashers()) from None


def hash_word(word: str) -> HashValue:
    """
    Hash a leaf block with the default hasher.

    Example:
        >>> hash_word("trust") == hash_word("trust")
        True
    """
    return DEFAULT_HASHER.hash_word(word)


def combine(left: HashValue, right: HashValue) -> HashValue:
    """
    Compute the parent hash of two child nodes with the default hasher.

    Order-sensitive: combine(a, b) != combine(b, a) in general.

    Args:
        left: Left child hash
        right: Right child hash

    Returns:
        Parent hash
    """
    return DEFAULT_HASHER.combine(left, right)


def to_hex(value: HashValue) -> str:
    """
    Display form of a hash: 0x-prefixed, 16 hex digits, big-endian.

    Example:
        >>> to_hex(255)
        '0x00000000000000ff'
    """
    return f"0x{value:016x}"


def from_hex(hex_string: str) -> HashValue:
    """
    Parse the display form produced by to_hex().

    Raises:
        ValueError: If the string lacks the 0x prefix, is not valid hex,
                   or does not fit in 64 bits
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]
    if not hex_content:
        raise ValueError("Hex string has no digits after 0x prefix")

    try:
        value = int(hex_content, 16)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e

    if value < 0 or value > HASH_MAX:
        raise ValueError(f"Hex value does not fit in 64 bits: {hex_string}")
    return value


__all__ = [
    "HashValue",
    "HASH_WIDTH_BYTES",
    "HASH_MAX",
    "Hasher",
    "SipHasher",
    "Sha256Hasher",
    "DEFAULT_HASHER",
    "available_hashers",
    "get_hasher",
    "is_hash_value",
    "to_le_bytes",
    "from_le_bytes",
    "encode_hash",
    "hash_word",
    "combine",
    "to_hex",
    "from_hex",
]
