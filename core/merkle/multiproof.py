"""
Module 02 - Compact Merkle Multiproofs
Prove membership of several leaves at once while sharing internal hashes.

Owner: Protocol/Crypto Engineer
Module ID: M02

A compact multiproof carries only the hashes the verifier cannot derive
from the leaves it already holds. Both sides walk the tree layer by layer
tracking the frontier: the node positions whose hash the verifier knows.

For each pair (2k, 2k+1) in a layer:
- both known    -> parent k becomes known, nothing emitted
- one known     -> the other hash is emitted, parent k becomes known
- neither known -> parent k stays unknown, nothing emitted

Example, 8 leaves, indices [0, 1, 6] (H_n marks the n-th emitted hash):

                         O
                      /     \\
                   O           O
                 /   \\       /   \\
                O    H_1   H_2    O
               / \\   / \\   / \\   / \\
              X  X  O  O  O  O  X  H_0

Emitted hashes are ordered by increasing height, then by ascending
position within a height, which is the order in which the verifier
consumes them.
"""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Sequence

from core.crypto.hashing import DEFAULT_HASHER, Hasher, HashValue, HASH_MAX, is_hash_value
from core.merkle.merkle_tree import EMPTY_TREE_ROOT, leaf_hashes
from core.schemas.errors import DuplicateLeafIndexException, LeafIndexOutOfRangeException


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompactMerkleMultiProof:
    """
    A compact proof covering several leaves of one tree.

    Attributes:
        leaf_indices: Leaf positions covered, in the caller's order
        hashes: Extra hashes the verifier cannot derive, lowest layer first,
                ascending position within a layer
    """
    leaf_indices: list[int] = field(default_factory=list)
    hashes: list[HashValue] = field(default_factory=list)


def _check_requested_indices(indices: Sequence[int], num_leaves: int) -> None:
    for index in indices:
        if index < 0 or index >= num_leaves:
            raise LeafIndexOutOfRangeException(index, num_leaves)

    counts = Counter(indices)
    duplicates = sorted(index for index, count in counts.items() if count > 1)
    if duplicates:
        raise DuplicateLeafIndexException(duplicates)


def generate_compact_multiproof(
    leaves: Sequence[str],
    indices: Sequence[int],
    hasher: Hasher | None = None,
) -> tuple[HashValue, CompactMerkleMultiProof]:
    """
    Generate a compact multiproof for the leaves at ``indices``.

    Args:
        leaves: Ordered leaf blocks (padded internally to a power of two)
        indices: Distinct positions in the padded leaf layer; order is kept
        hasher: Hash primitive (default: SipHash-1-3)

    Returns:
        (root, proof)

    Raises:
        LeafIndexOutOfRangeException: If any index is outside the padded layer
        DuplicateLeafIndexException: If any index appears more than once
    """
    hasher = hasher or DEFAULT_HASHER
    requested = list(indices)
    layer = leaf_hashes(leaves, hasher)

    _check_requested_indices(requested, len(layer))

    if not layer:
        return EMPTY_TREE_ROOT, CompactMerkleMultiProof(leaf_indices=[], hashes=[])

    frontier = frozenset(requested)
    emitted: list[HashValue] = []

    while len(layer) > 1:
        parents: list[HashValue] = []
        promoted: set[int] = set()

        for k in range(len(layer) // 2):
            left, right = 2 * k, 2 * k + 1
            parents.append(hasher.combine(layer[left], layer[right]))

            left_known = left in frontier
            right_known = right in frontier
            if left_known and right_known:
                promoted.add(k)
            elif left_known:
                emitted.append(layer[right])
                promoted.add(k)
            elif right_known:
                emitted.append(layer[left])
                promoted.add(k)

        layer = parents
        frontier = frozenset(promoted)

    logger.debug(
        "Generated multiproof for %d leaves with %d hashes",
        len(requested),
        len(emitted),
    )
    return layer[0], CompactMerkleMultiProof(leaf_indices=requested, hashes=emitted)


def _is_leaf_index(value: object) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 <= value <= HASH_MAX
    )


def validate_compact_multiproof(
    root: HashValue,
    words: Sequence[str],
    proof: CompactMerkleMultiProof,
    hasher: Hasher | None = None,
) -> bool:
    """
    Check that ``words`` sit at ``proof.leaf_indices`` in the tree under ``root``.

    The proof is untrusted input. Every malformed or inconsistent proof
    resolves to False: mismatched word count, duplicate or invalid indices,
    too few or too many hashes, or a reconstructed root that differs.

    An empty proof (no indices, no hashes) with no words is vacuously valid.

    Args:
        root: Trusted Merkle root
        words: Original leaf contents, in the same order as proof.leaf_indices
        proof: The compact multiproof
        hasher: Hash primitive (default: SipHash-1-3)

    Returns:
        True if the reconstructed root equals ``root``
    """
    hasher = hasher or DEFAULT_HASHER
    try:
        indices = list(proof.leaf_indices)
        hashes = list(proof.hashes)
        words = list(words)
    except (AttributeError, TypeError):
        return False

    if len(words) != len(indices):
        return False
    if not indices:
        return not hashes
    if not all(_is_leaf_index(index) for index in indices):
        return False
    if len(set(indices)) != len(indices):
        return False
    if not all(isinstance(word, str) for word in words):
        return False
    if not all(is_hash_value(h) for h in hashes):
        return False

    known: dict[int, HashValue] = {
        index: hasher.hash_word(word) for index, word in zip(indices, words)
    }
    cursor = 0

    # Stop once only the root position is known and every hash is consumed
    while not (len(known) == 1 and 0 in known and cursor == len(hashes)):
        parents: dict[int, HashValue] = {}
        for k in sorted({index // 2 for index in known}):
            left_hash = known.get(2 * k)
            right_hash = known.get(2 * k + 1)

            if left_hash is not None and right_hash is not None:
                parents[k] = hasher.combine(left_hash, right_hash)
                continue

            if cursor >= len(hashes):
                logger.debug("Multiproof ran out of hashes at parent %d", k)
                return False
            sibling = hashes[cursor]
            cursor += 1

            if left_hash is not None:
                parents[k] = hasher.combine(left_hash, sibling)
            else:
                parents[k] = hasher.combine(sibling, right_hash)
        known = parents

    return known[0] == root


__all__ = [
    "CompactMerkleMultiProof",
    "generate_compact_multiproof",
    "validate_compact_multiproof",
]
