"""
Test fixtures package for Merkle tests.

- common.py: Reference vectors and upload payload factories

Usage:
    from fixtures.common import TRUST_ROOT, make_upload

    def test_something():
        payload = make_upload(num_files=4)
"""

from .common import (
    make_eight_word_multiproof,
    make_upload,
)

__all__ = [
    "make_eight_word_multiproof",
    "make_upload",
]
