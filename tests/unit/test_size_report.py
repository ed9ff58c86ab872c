"""
Module 02 - Proof Size Report Unit Tests
Tests for core/merkle/size_report.py
"""
import pytest

from core.merkle.multiproof import CompactMerkleMultiProof
from core.merkle.size_report import (
    compact_proof_size,
    compare_proof_sizes,
    find_breakpoint,
    single_proof_size,
    string_of_random_words,
)


class TestRandomWords:
    """Tests for string_of_random_words."""

    def test_word_count_and_length(self):
        words = string_of_random_words(9, seed=1).split(" ")

        assert len(words) == 9
        assert all(len(w) == 4 and w.isalpha() and w.islower() for w in words)

    def test_seeded_is_reproducible(self):
        assert string_of_random_words(50, seed=7) == string_of_random_words(50, seed=7)

    def test_custom_length(self):
        assert all(len(w) == 6 for w in string_of_random_words(5, seed=3, length=6).split())

    def test_zero_words(self):
        assert string_of_random_words(0, seed=1) == ""


class TestByteAccounting:
    """Reference byte accounting."""

    def test_compact_size(self):
        proof = CompactMerkleMultiProof(leaf_indices=[0, 1, 6], hashes=[1, 2, 3])
        assert compact_proof_size(proof) == 8 * 3 + 8 * 3 + 48

    def test_empty_compact_size(self):
        assert compact_proof_size(CompactMerkleMultiProof()) == 48

    def test_single_proof_size(self):
        assert single_proof_size(3) == 24 + 16 * 3


class TestCompareProofSizes:
    """Tests for compare_proof_sizes."""

    def test_small_tree(self):
        sentence = string_of_random_words(9, seed=5)
        result = compare_proof_sizes(sentence, length=8, num_proofs=3, seed=12345678)

        assert len(result.indices) == 3
        assert len(set(result.indices)) == 3
        assert all(0 <= i < 8 for i in result.indices)
        assert result.compact_size <= result.individual_size
        assert result.compact_hashes <= result.individual_hashes

    def test_individual_size_matches_hash_count(self):
        sentence = string_of_random_words(100, seed=2)
        result = compare_proof_sizes(sentence, length=100, num_proofs=10, seed=4)

        # 100 leaves pad to 128: every single proof has 7 siblings
        assert result.individual_hashes == 70
        assert result.individual_size == 10 * single_proof_size(7)

    def test_seeded_is_reproducible(self):
        sentence = string_of_random_words(64, seed=1)
        first = compare_proof_sizes(sentence, 64, 16, seed=9)
        second = compare_proof_sizes(sentence, 64, 16, seed=9)

        assert first == second

    def test_ratio_grows_with_proof_count(self):
        sentence = string_of_random_words(256, seed=1)
        few = compare_proof_sizes(sentence, 256, 2, seed=3)
        many = compare_proof_sizes(sentence, 256, 200, seed=3)

        assert many.ratio > few.ratio

    def test_to_dict_includes_ratio(self):
        sentence = string_of_random_words(16, seed=1)
        data = compare_proof_sizes(sentence, 16, 4, seed=1).to_dict()

        assert set(data) == {
            "indices", "compact_size", "individual_size",
            "compact_hashes", "individual_hashes", "ratio",
        }

    def test_too_many_proofs_raises(self):
        with pytest.raises(ValueError):
            compare_proof_sizes("a b c", length=3, num_proofs=4, seed=1)


class TestFindBreakpoint:
    """Tests for find_breakpoint."""

    def test_reaches_ratio(self):
        sentence = string_of_random_words(128, seed=8)
        count = find_breakpoint(sentence, 128, target_ratio=2.0, seed=8)

        assert count is not None
        assert compare_proof_sizes(sentence, 128, count, seed=8).ratio >= 2.0
        if count > 1:
            assert compare_proof_sizes(sentence, 128, count - 1, seed=8).ratio < 2.0

    def test_unreachable_ratio(self):
        sentence = string_of_random_words(8, seed=8)
        assert find_breakpoint(sentence, 8, target_ratio=1000.0, seed=8) is None
