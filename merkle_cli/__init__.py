"""
Merkle CLI

Command-line interface for Merkle roots, proofs and compact multiproofs.

Usage:
    python -m merkle_cli root "You trust me, right?"
    python -m merkle_cli prove "You trust me, right?" --index 1 --out proof.json
    python -m merkle_cli verify proof.json --word right?
    python -m merkle_cli multiprove --file sentence.txt --indices 0,1,6 --out multi.json
    python -m merkle_cli verify-multi multi.json
    python -m merkle_cli compare --length 2023 --num-proofs 500 --seed 12345678
    python -m merkle_cli serve
    python -m merkle_cli client upload data/file1.txt data/file2.txt
    python -m merkle_cli client verify file1.txt file2.txt
"""

__version__ = "0.1.0"
