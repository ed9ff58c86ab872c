"""
Common test fixtures shared by all modules.

Provides the sentences and expected values used across the Merkle tests:
- Reference sentences and their known roots
- Reference single-leaf and compact multiproofs
- Sample files for the file server
"""

from core.merkle.merkle_tree import SiblingNode
from core.merkle.multiproof import CompactMerkleMultiProof


# =============================================================================
# Reference Vectors
# =============================================================================

TRUST_SENTENCE = "You trust me, right?"
TRUST_ROOT = 4373588283528574023
TRUST_PROOF_INDEX_1 = [
    SiblingNode.left(4099928055547683737),
    SiblingNode.right(2769272874327709143),
]

SHORT_SENTENCE = "You trust me?"
SHORT_ROOT = 8656240816105094750

EIGHT_WORD_SENTENCE = "Here's an eight word sentence, special for you."
EIGHT_WORD_ROOT = 14965309246218747603
EIGHT_WORD_INDICES = [0, 1, 6]
EIGHT_WORD_HASHES = [
    1513025021886310739,
    7640678380001893133,
    5879108026335697459,
]
EIGHT_WORD_LEAVES = ["Here's", "an", "for"]

# combine(hash_word("a"), hash_word("b"))
COMBINE_A_B = 13491948173500414413

ELEVEN_WORD_SENTENCE = "apex rite gite mite gleg meno merl nard bile ills hili"


def make_eight_word_multiproof() -> CompactMerkleMultiProof:
    """The compact multiproof for indices [0, 1, 6] of EIGHT_WORD_SENTENCE."""
    return CompactMerkleMultiProof(
        leaf_indices=list(EIGHT_WORD_INDICES),
        hashes=list(EIGHT_WORD_HASHES),
    )


# =============================================================================
# File Server Samples
# =============================================================================

SAMPLE_UPLOAD = {
    "file1.txt": "This is the content of file1.",
    "file2.txt": "File2 contains different content.",
}


def make_upload(num_files: int = 3, prefix: str = "file") -> dict[str, str]:
    """
    Create an upload payload of ``num_files`` distinct files.

    Args:
        num_files: Number of files
        prefix: Filename prefix

    Returns:
        {filename: content}
    """
    return {
        f"{prefix}{i}.txt": f"Content of {prefix} number {i}."
        for i in range(1, num_files + 1)
    }
