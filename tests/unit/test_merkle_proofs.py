"""
Module 02 - Prover/Verifier Unit Tests
Tests for core/merkle/merkle_proofs.py
"""
import pytest

from core.crypto.hashing import Sha256Hasher
from core.merkle.merkle_proofs import MerkleProver, MerkleVerifier
from core.merkle.merkle_tree import split_words
from core.schemas.errors import UnknownHasherException

from fixtures.common import (
    EIGHT_WORD_INDICES,
    EIGHT_WORD_LEAVES,
    EIGHT_WORD_ROOT,
    EIGHT_WORD_SENTENCE,
    TRUST_PROOF_INDEX_1,
    TRUST_ROOT,
    TRUST_SENTENCE,
)


class TestMerkleProver:
    """Tests for MerkleProver."""

    def test_compute_root(self):
        prover = MerkleProver()
        assert prover.compute_root(split_words(TRUST_SENTENCE)) == TRUST_ROOT
        assert prover.compute_root_from_text(TRUST_SENTENCE) == TRUST_ROOT

    def test_prove(self):
        root, proof = MerkleProver().prove_text(TRUST_SENTENCE, 1)

        assert root == TRUST_ROOT
        assert proof == TRUST_PROOF_INDEX_1

    def test_prove_many(self):
        root, proof = MerkleProver().prove_many_text(EIGHT_WORD_SENTENCE, EIGHT_WORD_INDICES)

        assert root == EIGHT_WORD_ROOT
        assert proof.leaf_indices == EIGHT_WORD_INDICES

    def test_with_hasher_name(self):
        prover = MerkleProver.with_hasher_name("sha256")
        assert isinstance(prover.hasher, Sha256Hasher)
        assert prover.compute_root_from_text(TRUST_SENTENCE) != TRUST_ROOT

    def test_unknown_hasher_name(self):
        with pytest.raises(UnknownHasherException):
            MerkleProver.with_hasher_name("crc32")


class TestMerkleVerifier:
    """Tests for MerkleVerifier."""

    def test_verify(self):
        assert MerkleVerifier().verify(TRUST_ROOT, "trust", TRUST_PROOF_INDEX_1)

    def test_verify_rejects_wrong_word(self):
        assert not MerkleVerifier().verify(TRUST_ROOT, "me,", TRUST_PROOF_INDEX_1)

    def test_verify_many(self, eight_word_multiproof):
        assert MerkleVerifier().verify_many(EIGHT_WORD_ROOT, EIGHT_WORD_LEAVES, eight_word_multiproof)

    def test_prover_and_verifier_share_hasher(self):
        prover = MerkleProver.with_hasher_name("sha256")
        verifier = MerkleVerifier.with_hasher_name("sha256")
        words = split_words(EIGHT_WORD_SENTENCE)

        root, proof = prover.prove_many(words, [2, 3])
        assert verifier.verify_many(root, [words[2], words[3]], proof)
        assert not MerkleVerifier().verify_many(root, [words[2], words[3]], proof)
