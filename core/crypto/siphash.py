"""
Module 02 - SipHash-1-3
Keyed 64-bit hash used as the default leaf/node hash primitive.

The default tree hasher feeds strings through SipHash-1-3 with both keys
set to zero, appending a single 0xff terminator byte after the UTF-8 bytes
of the string. This is the byte stream a zero-keyed SipHasher13 sees when a
string is hashed, so roots computed here match roots computed by other
implementations of the same tree protocol.

SipHash is NOT a collision-resistant hash when the key is public. It is a
placeholder primitive; see core.crypto.hashing for the pluggable hashers.
"""
from __future__ import annotations

import struct

_MASK = 0xFFFFFFFFFFFFFFFF

# Initialisation constants: "somepseudorandomlygeneratedbytes"
_C0 = 0x736F6D6570736575
_C1 = 0x646F72616E646F6D
_C2 = 0x6C7967656E657261
_C3 = 0x7465646279746573

STR_TERMINATOR = b"\xff"


def _rotl(x: int, b: int) -> int:
    return ((x << b) | (x >> (64 - b))) & _MASK


def _sipround(v0: int, v1: int, v2: int, v3: int) -> tuple[int, int, int, int]:
    v0 = (v0 + v1) & _MASK
    v1 = _rotl(v1, 13)
    v1 ^= v0
    v0 = _rotl(v0, 32)
    v2 = (v2 + v3) & _MASK
    v3 = _rotl(v3, 16)
    v3 ^= v2
    v0 = (v0 + v3) & _MASK
    v3 = _rotl(v3, 21)
    v3 ^= v0
    v2 = (v2 + v1) & _MASK
    v1 = _rotl(v1, 17)
    v1 ^= v2
    v2 = _rotl(v2, 32)
    return v0, v1, v2, v3


def siphash(
    data: bytes,
    k0: int = 0,
    k1: int = 0,
    c_rounds: int = 1,
    d_rounds: int = 3,
) -> int:
    """
    Compute SipHash-c-d of ``data`` under the 128-bit key (k0, k1).

    Defaults give SipHash-1-3 with a zero key.

    Args:
        data: Message bytes
        k0: Low 64 bits of the key
        k1: High 64 bits of the key
        c_rounds: Compression rounds per 8-byte block
        d_rounds: Finalization rounds

    Returns:
        Unsigned 64-bit digest as an int
    """
    v0 = k0 ^ _C0
    v1 = k1 ^ _C1
    v2 = k0 ^ _C2
    v3 = k1 ^ _C3

    length = len(data)
    full = length - (length % 8)

    for offset in range(0, full, 8):
        (m,) = struct.unpack_from("<Q", data, offset)
        v3 ^= m
        for _ in range(c_rounds):
            v0, v1, v2, v3 = _sipround(v0, v1, v2, v3)
        v0 ^= m

    # Last block: remaining bytes plus the message length in the top byte
    tail = data[full:] + b"\x00" * (7 - (length - full))
    b = ((length & 0xFF) << 56) | int.from_bytes(tail, "little")

    v3 ^= b
    for _ in range(c_rounds):
        v0, v1, v2, v3 = _sipround(v0, v1, v2, v3)
    v0 ^= b

    v2 ^= 0xFF
    for _ in range(d_rounds):
        v0, v1, v2, v3 = _sipround(v0, v1, v2, v3)

    return (v0 ^ v1 ^ v2 ^ v3) & _MASK


def siphash13_str(text: str) -> int:
    """Hash a string the way a zero-keyed SipHasher13 hashes a ``str``."""
    return siphash(text.encode("utf-8") + STR_TERMINATOR)


__all__ = [
    "STR_TERMINATOR",
    "siphash",
    "siphash13_str",
]
