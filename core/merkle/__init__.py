"""
Module 02 - Merkle Tree and Commitments
Deterministic Merkle tree construction, single-leaf proofs and compact
multiproofs.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- root_of: Compute the root of an ordered leaf sequence
- generate_proof / validate_proof: Side-tagged single-leaf proofs
- generate_compact_multiproof / validate_compact_multiproof: Proofs for
  several leaves sharing internal hashes
- MerkleProver / MerkleVerifier: Hasher-bound convenience classes

Canonical Commitment Rules:
1. Leaf hashing: H(word), SipHash-1-3 by default
2. Parent hashing: H(hex_le(left) + hex_le(right))
3. Padding: Append "" leaves until the count is a power of two
4. Empty tree: 0
5. Single leaf: root = H(leaf)

Usage:
    from core.merkle import generate_compact_multiproof, validate_compact_multiproof

    words = "Here's an eight word sentence, special for you.".split()
    root, proof = generate_compact_multiproof(words, [0, 1, 6])
    assert validate_compact_multiproof(root, ["Here's", "an", "for"], proof)
"""
from .merkle_tree import (
    EMPTY_TREE_ROOT,
    PADDING_LEAF,
    MerkleProof,
    Side,
    SiblingNode,
    build_layers,
    calculate_merkle_root,
    compute_tree_depth,
    generate_proof,
    is_power_of_two,
    pad_base_layer,
    root_of,
    split_words,
    validate_proof,
)

from .multiproof import (
    CompactMerkleMultiProof,
    generate_compact_multiproof,
    validate_compact_multiproof,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "EMPTY_TREE_ROOT",
    "PADDING_LEAF",
    "MerkleProof",
    "Side",
    "SiblingNode",
    "CompactMerkleMultiProof",
    # Core functions
    "build_layers",
    "calculate_merkle_root",
    "compute_tree_depth",
    "generate_proof",
    "is_power_of_two",
    "pad_base_layer",
    "root_of",
    "split_words",
    "validate_proof",
    "generate_compact_multiproof",
    "validate_compact_multiproof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
