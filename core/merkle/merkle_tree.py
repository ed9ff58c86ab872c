"""
Module 02 - Merkle Tree Implementation
Deterministic Merkle root computation, single-leaf proof generation,
and single-leaf proof verification.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- Padding of the base layer to a power of two with empty-string leaves
- Deterministic Merkle root computation
- Side-tagged sibling paths (MerkleProof) for any leaf index
- Proof validation from the original leaf content

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = hasher.hash_word(word)
2. Parent hashing: parent = hasher.combine(left, right)
3. Padding rule: append "" leaves until the count is a power of two
4. Empty leaves: root_of([]) returns 0
5. Single leaf: root = hash of that leaf (no combination)

Determinism Notes:
- No randomness or non-deterministic ordering
- Leaf ordering is defined by the caller; this module never sorts leaves
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from core.crypto.hashing import DEFAULT_HASHER, Hasher, HashValue, is_hash_value
from core.schemas.errors import LeafIndexOutOfRangeException


logger = logging.getLogger(__name__)

# Root of a tree with no leaves
EMPTY_TREE_ROOT: HashValue = 0

# Value appended to the base layer until its length is a power of two
PADDING_LEAF: str = ""


class Side(str, Enum):
    """Which side of the path node a sibling sits on."""

    LEFT = "Left"
    RIGHT = "Right"


@dataclass(frozen=True)
class SiblingNode:
    """
    A sibling hash along the path from a leaf to the root.

    Attributes:
        side: LEFT combines as (sibling, current), RIGHT as (current, sibling)
        hash: The sibling's hash
    """
    side: Side
    hash: HashValue

    def __post_init__(self) -> None:
        """Normalize the side tag; "Left"/"Right" strings are accepted."""
        if not isinstance(self.side, Side):
            object.__setattr__(self, "side", Side(self.side))

    def flipped(self) -> "SiblingNode":
        """Same hash with the opposite side tag."""
        other = Side.RIGHT if self.side is Side.LEFT else Side.LEFT
        return SiblingNode(other, self.hash)

    @classmethod
    def left(cls, value: HashValue) -> "SiblingNode":
        return cls(Side.LEFT, value)

    @classmethod
    def right(cls, value: HashValue) -> "SiblingNode":
        return cls(Side.RIGHT, value)


# Ordered sibling path, index 0 closest to the leaf
MerkleProof = list[SiblingNode]


def split_words(sentence: str) -> list[str]:
    """
    Split content into leaf blocks on runs of whitespace.

    Punctuation stays attached to its word.

    Example:
        >>> split_words("You  trust me, right?")
        ['You', 'trust', 'me,', 'right?']
    """
    return sentence.split()


def is_power_of_two(n: int) -> bool:
    """Check whether n is a positive power of two."""
    return n > 0 and (n & (n - 1)) == 0


def padded_size(num_leaves: int) -> int:
    """Length of the base layer after padding (0 stays 0)."""
    if num_leaves <= 0:
        return 0
    size = 1
    while size < num_leaves:
        size *= 2
    return size


def pad_base_layer(blocks: Sequence[str]) -> list[str]:
    """
    Return a copy of ``blocks`` padded with empty strings to a power of two.

    Example:
        >>> pad_base_layer(["a", "b", "c"])
        ['a', 'b', 'c', '']
    """
    padded = list(blocks)
    padded.extend([PADDING_LEAF] * (padded_size(len(padded)) - len(padded)))
    return padded


def leaf_hashes(leaves: Sequence[str], hasher: Hasher | None = None) -> list[HashValue]:
    """Pad the leaves and hash each one independently."""
    hasher = hasher or DEFAULT_HASHER
    return [hasher.hash_word(leaf) for leaf in pad_base_layer(leaves)]


def next_layer(layer: Sequence[HashValue], hasher: Hasher | None = None) -> list[HashValue]:
    """
    Fold one layer into its parent layer.

    Adjacent hashes are paired left to right. A leftover singleton (only
    possible for unpadded input) is promoted unchanged.
    """
    hasher = hasher or DEFAULT_HASHER
    parents: list[HashValue] = []
    for i in range(0, len(layer) - 1, 2):
        parents.append(hasher.combine(layer[i], layer[i + 1]))
    if len(layer) % 2 == 1:
        parents.append(layer[-1])
    return parents


def build_layers(leaves: Sequence[str], hasher: Hasher | None = None) -> list[list[HashValue]]:
    """
    Build every layer of the tree, from the padded leaf hashes to the root.

    Returns:
        List of layers; layers[0] is the leaf layer, layers[-1] == [root].
        Empty input gives an empty list.
    """
    hasher = hasher or DEFAULT_HASHER
    layer = leaf_hashes(leaves, hasher)
    if not layer:
        return []

    layers = [layer]
    while len(layer) > 1:
        layer = next_layer(layer, hasher)
        layers.append(layer)
    return layers


def root_of(leaves: Sequence[str], hasher: Hasher | None = None) -> HashValue:
    """
    Compute the Merkle root of an ordered sequence of leaf blocks.

    Algorithm:
    1. If empty: return 0
    2. Pad with "" leaves to a power of two and hash each leaf
    3. Pair adjacent hashes and combine until one hash remains

    A single leaf's root is its own hash.

    Args:
        leaves: Ordered leaf blocks. Order matters and is preserved.
        hasher: Hash primitive (default: SipHash-1-3)

    Returns:
        The Merkle root

    Example:
        >>> root_of(["a"]) == hash_word("a")
        True
    """
    hasher = hasher or DEFAULT_HASHER
    layer = leaf_hashes(leaves, hasher)
    if not layer:
        return EMPTY_TREE_ROOT

    while len(layer) > 1:
        layer = next_layer(layer, hasher)
    return layer[0]


def calculate_merkle_root(sentence: str, hasher: Hasher | None = None) -> HashValue:
    """Merkle root of a sentence, one leaf per whitespace-separated word."""
    return root_of(split_words(sentence), hasher)


def generate_proof(
    leaves: Sequence[str],
    index: int,
    hasher: Hasher | None = None,
) -> tuple[HashValue, MerkleProof]:
    """
    Generate a sibling-path proof for the leaf at ``index``.

    At each layer an even index has its sibling on the right (tag RIGHT),
    an odd index on the left (tag LEFT); then index //= 2.

    Indices that fall on padding are valid and prove the empty leaf.

    Args:
        leaves: Ordered leaf blocks
        index: 0-based position in the padded leaf layer
        hasher: Hash primitive (default: SipHash-1-3)

    Returns:
        (root, proof) with the proof ordered from leaf to root

    Raises:
        LeafIndexOutOfRangeException: If index is negative or not below
            the padded leaf count (always, for empty input)
    """
    hasher = hasher or DEFAULT_HASHER
    layer = leaf_hashes(leaves, hasher)

    if index < 0 or index >= len(layer):
        raise LeafIndexOutOfRangeException(index, len(layer))

    proof: MerkleProof = []
    current = index
    while len(layer) > 1:
        if current % 2 == 0:
            proof.append(SiblingNode.right(layer[current + 1]))
        else:
            proof.append(SiblingNode.left(layer[current - 1]))
        current //= 2
        layer = next_layer(layer, hasher)

    logger.debug("Generated proof for index %d with %d siblings", index, len(proof))
    return layer[0], proof


def validate_proof(
    root: HashValue,
    word: str,
    proof: Sequence[SiblingNode],
    hasher: Hasher | None = None,
) -> bool:
    """
    Check that ``word`` is committed under ``root`` using a sibling path.

    The proof is untrusted input: anything malformed resolves to False
    rather than raising.

    Algorithm:
    1. Start with h = hash(word)
    2. For each sibling: LEFT -> h = combine(sibling, h),
       RIGHT -> h = combine(h, sibling)
    3. Compare h with root

    Args:
        root: Trusted Merkle root
        word: Original leaf content (not pre-hashed)
        proof: Sibling path from leaf to root
        hasher: Hash primitive (default: SipHash-1-3)

    Returns:
        True if the recomputed root equals ``root``
    """
    hasher = hasher or DEFAULT_HASHER
    if not isinstance(word, str):
        return False

    current = hasher.hash_word(word)
    try:
        for node in proof:
            if not isinstance(node, SiblingNode) or not is_hash_value(node.hash):
                return False
            if node.side is Side.LEFT:
                current = hasher.combine(node.hash, current)
            elif node.side is Side.RIGHT:
                current = hasher.combine(current, node.hash)
            else:
                return False
    except TypeError:
        # proof is not iterable
        return False

    return current == root


def compute_tree_depth(num_leaves: int) -> int:
    """
    Number of layers in the padded tree, leaf layer and root included.

    A single leaf has depth 1, two leaves depth 2, three or four leaves
    depth 3, and so on. An empty tree has depth 0.
    """
    size = padded_size(num_leaves)
    if size == 0:
        return 0
    return size.bit_length()


__all__ = [
    "EMPTY_TREE_ROOT",
    "PADDING_LEAF",
    "Side",
    "SiblingNode",
    "MerkleProof",
    "split_words",
    "is_power_of_two",
    "padded_size",
    "pad_base_layer",
    "leaf_hashes",
    "next_layer",
    "build_layers",
    "root_of",
    "calculate_merkle_root",
    "generate_proof",
    "validate_proof",
    "compute_tree_depth",
]
