"""
Module 02 - Proof Size Comparison
Compare compact multiproofs with the equivalent set of single proofs.

Byte accounting follows the reference layout of the original system
(64-bit platform):
- compact:    8 per leaf index + 8 per hash + 2 vector headers of 24
- individual: per proof, one vector header of 24 + 16 per sibling node
              (a side-tagged 64-bit hash)
"""
from __future__ import annotations

import logging
import random
import string
from dataclasses import dataclass, asdict
from typing import Any

from core.crypto.hashing import DEFAULT_HASHER, Hasher, HASH_WIDTH_BYTES
from core.merkle.merkle_tree import generate_proof, split_words
from core.merkle.multiproof import CompactMerkleMultiProof, generate_compact_multiproof


logger = logging.getLogger(__name__)

INDEX_SIZE = 8
VEC_HEADER_SIZE = 24
SIBLING_NODE_SIZE = 16


@dataclass(frozen=True)
class ProofSizeComparison:
    """Result of compare_proof_sizes()."""
    indices: list[int]
    compact_size: int
    individual_size: int
    compact_hashes: int
    individual_hashes: int

    @property
    def ratio(self) -> float:
        """How many times smaller the compact proof is."""
        if self.compact_size == 0:
            return 0.0
        return self.individual_size / self.compact_size

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["ratio"] = self.ratio
        return d


def compact_proof_size(proof: CompactMerkleMultiProof) -> int:
    """Serialized size of a compact multiproof in bytes."""
    return (
        INDEX_SIZE * len(proof.leaf_indices)
        + HASH_WIDTH_BYTES * len(proof.hashes)
        + 2 * VEC_HEADER_SIZE
    )


def single_proof_size(num_siblings: int) -> int:
    """Serialized size of one side-tagged sibling path in bytes."""
    return VEC_HEADER_SIZE + SIBLING_NODE_SIZE * num_siblings


def string_of_random_words(n: int, seed: int | None = None, length: int = 4) -> str:
    """
    Generate ``n`` random lowercase words of ``length`` letters, space separated.

    Args:
        n: Number of words
        seed: RNG seed for reproducible output
        length: Letters per word

    Returns:
        Space-separated words
    """
    rng = random.Random(seed)
    return " ".join(
        "".join(rng.choice(string.ascii_lowercase) for _ in range(length))
        for _ in range(n)
    )


def compare_proof_sizes(
    sentence: str,
    length: int,
    num_proofs: int,
    seed: int,
    hasher: Hasher | None = None,
) -> ProofSizeComparison:
    """
    Prove ``num_proofs`` random indices from ``[0, length)`` both ways.

    Proofs are generated, not validated.

    Args:
        sentence: Whitespace-separated leaf blocks
        length: Size of the index range sampled from
        num_proofs: Number of distinct indices to prove
        seed: RNG seed for the index sample
        hasher: Hash primitive (default: SipHash-1-3)

    Returns:
        ProofSizeComparison

    Raises:
        ValueError: If num_proofs > length
    """
    if num_proofs > length:
        raise ValueError("Cannot make more proofs than available indices")

    hasher = hasher or DEFAULT_HASHER
    words = split_words(sentence)
    indices = random.Random(seed).sample(range(length), num_proofs)

    _, compact = generate_compact_multiproof(words, indices, hasher)

    individual_size = 0
    individual_hashes = 0
    for index in indices:
        _, proof = generate_proof(words, index, hasher)
        individual_size += single_proof_size(len(proof))
        individual_hashes += len(proof)

    result = ProofSizeComparison(
        indices=indices,
        compact_size=compact_proof_size(compact),
        individual_size=individual_size,
        compact_hashes=len(compact.hashes),
        individual_hashes=individual_hashes,
    )
    logger.debug(
        "Compared %d proofs: compact=%d bytes individual=%d bytes",
        num_proofs,
        result.compact_size,
        result.individual_size,
    )
    return result


def find_breakpoint(
    sentence: str,
    length: int,
    target_ratio: float,
    seed: int,
    hasher: Hasher | None = None,
) -> int | None:
    """
    Smallest number of proofs for which individual/compact >= target_ratio.

    Returns None when no count up to ``length`` reaches the ratio.
    """
    for num_proofs in range(1, length + 1):
        comparison = compare_proof_sizes(sentence, length, num_proofs, seed, hasher)
        if comparison.ratio >= target_ratio:
            return num_proofs
    return None


__all__ = [
    "ProofSizeComparison",
    "compact_proof_size",
    "single_proof_size",
    "string_of_random_words",
    "compare_proof_sizes",
    "find_breakpoint",
]
