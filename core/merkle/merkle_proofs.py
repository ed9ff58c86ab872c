"""
Module 02 - Merkle Proofs Convenience Wrappers
Thin wrappers around the core Merkle functions for a cleaner API.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides class-based interfaces:
- MerkleProver: Compute roots and generate single proofs and multiproofs
- MerkleVerifier: Verify single proofs and multiproofs

Both bind a hasher once so callers that configure a non-default hash
primitive do not need to thread it through every call.
"""
from __future__ import annotations

from typing import Sequence

from core.crypto.hashing import DEFAULT_HASHER, Hasher, HashValue, get_hasher
from core.merkle.merkle_tree import (
    MerkleProof,
    SiblingNode,
    generate_proof,
    root_of,
    split_words,
    validate_proof,
)
from core.merkle.multiproof import (
    CompactMerkleMultiProof,
    generate_compact_multiproof,
    validate_compact_multiproof,
)


class MerkleProver:
    """
    Convenience class for computing roots and generating proofs.

    Example:
        >>> prover = MerkleProver()
        >>> root, proof = prover.prove(["You", "trust", "me,", "right?"], 1)
        >>> len(proof)
        2
    """

    def __init__(self, hasher: Hasher | None = None) -> None:
        self.hasher = hasher or DEFAULT_HASHER

    @classmethod
    def with_hasher_name(cls, name: str | None) -> "MerkleProver":
        """Build a prover from a hasher name ("siphash13", "sha256")."""
        return cls(get_hasher(name))

    def compute_root(self, leaves: Sequence[str]) -> HashValue:
        """Merkle root of an ordered sequence of leaf blocks."""
        return root_of(leaves, self.hasher)

    def compute_root_from_text(self, text: str) -> HashValue:
        """Merkle root of whitespace-separated text."""
        return root_of(split_words(text), self.hasher)

    def prove(self, leaves: Sequence[str], index: int) -> tuple[HashValue, MerkleProof]:
        """
        Generate a single-leaf proof.

        Raises:
            LeafIndexOutOfRangeException: If index is out of range
        """
        return generate_proof(leaves, index, self.hasher)

    def prove_text(self, text: str, index: int) -> tuple[HashValue, MerkleProof]:
        """Generate a single-leaf proof for one word of ``text``."""
        return generate_proof(split_words(text), index, self.hasher)

    def prove_many(
        self,
        leaves: Sequence[str],
        indices: Sequence[int],
    ) -> tuple[HashValue, CompactMerkleMultiProof]:
        """
        Generate a compact multiproof.

        Raises:
            LeafIndexOutOfRangeException: If any index is out of range
            DuplicateLeafIndexException: If any index is duplicated
        """
        return generate_compact_multiproof(leaves, indices, self.hasher)

    def prove_many_text(
        self,
        text: str,
        indices: Sequence[int],
    ) -> tuple[HashValue, CompactMerkleMultiProof]:
        """Generate a compact multiproof for several words of ``text``."""
        return generate_compact_multiproof(split_words(text), indices, self.hasher)


class MerkleVerifier:
    """
    Convenience class for verifying proofs.

    Verification never raises on untrusted proofs; it returns False.

    Example:
        >>> root, proof = MerkleProver().prove(["a", "b"], 0)
        >>> MerkleVerifier().verify(root, "a", proof)
        True
    """

    def __init__(self, hasher: Hasher | None = None) -> None:
        self.hasher = hasher or DEFAULT_HASHER

    @classmethod
    def with_hasher_name(cls, name: str | None) -> "MerkleVerifier":
        """Build a verifier from a hasher name ("siphash13", "sha256")."""
        return cls(get_hasher(name))

    def verify(self, root: HashValue, word: str, proof: Sequence[SiblingNode]) -> bool:
        """Verify a single-leaf proof against ``root``."""
        return validate_proof(root, word, proof, self.hasher)

    def verify_many(
        self,
        root: HashValue,
        words: Sequence[str],
        proof: CompactMerkleMultiProof,
    ) -> bool:
        """Verify a compact multiproof; ``words`` follow proof.leaf_indices."""
        return validate_compact_multiproof(root, words, proof, self.hasher)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
