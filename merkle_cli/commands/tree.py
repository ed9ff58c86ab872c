"""
CLI Tree Commands

Compute roots and generate proofs from a sentence or a text file.

Usage:
    merkle root "You trust me, right?"
    merkle prove "You trust me, right?" --index 1 --out proof.json
    merkle multiprove --file words.txt --indices 0,1,6 --out multi.json
"""

from __future__ import annotations

import logging
from argparse import Namespace
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any

from core.crypto.hashing import to_hex
from core.merkle.merkle_tree import compute_tree_depth, generate_proof, pad_base_layer, root_of
from core.merkle.multiproof import generate_compact_multiproof
from core.schemas.errors import MerkleException
from core.schemas.proof import MultiProofBundle, ProofBundle
from merkle_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    print_error,
    print_json,
    read_leaves,
    resolve_hasher,
    write_json_file,
)


logger = logging.getLogger(__name__)


@dataclass
class RootSummary:
    """Summary of a root computation for CLI output."""
    root: int
    root_hex: str
    num_leaves: int
    depth: int
    hasher: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def root_cmd(args: Namespace) -> int:
    """Execute the root command."""
    try:
        leaves = read_leaves(args)
    except (OSError, ValueError) as e:
        print_error(str(e))
        return EXIT_RUNTIME_ERROR

    hasher = resolve_hasher(args)
    root = root_of(leaves, hasher)
    summary = RootSummary(
        root=root,
        root_hex=to_hex(root),
        num_leaves=len(leaves),
        depth=compute_tree_depth(len(leaves)),
        hasher=hasher.name,
    )

    if args.json:
        print_json(summary.to_dict())
    else:
        print(f"root: {summary.root}")
        print(f"root_hex: {summary.root_hex}")
        print(f"leaves: {summary.num_leaves}")
        print(f"depth: {summary.depth}")
    return EXIT_SUCCESS


def prove_cmd(args: Namespace) -> int:
    """Execute the prove command."""
    try:
        leaves = read_leaves(args)
    except (OSError, ValueError) as e:
        print_error(str(e))
        return EXIT_RUNTIME_ERROR

    hasher = resolve_hasher(args)
    try:
        root, proof = generate_proof(leaves, args.index, hasher)
    except MerkleException as e:
        print_error(e.message)
        return EXIT_RUNTIME_ERROR

    leaf = pad_base_layer(leaves)[args.index]
    bundle = ProofBundle.from_proof(root, proof, index=args.index, leaf=leaf)
    data = bundle.model_dump()

    if args.out:
        write_json_file(Path(args.out), data)
        logger.info(f"Proof written to {args.out}")

    if args.json:
        print_json(data)
    else:
        print(f"root: {root}")
        print(f"index: {args.index}")
        print(f"leaf: {leaf!r}")
        print(f"siblings ({len(proof)}):")
        for node in proof:
            print(f"  {node.side.value}: {node.hash}")
        if args.out:
            print(f"written: {args.out}")
    return EXIT_SUCCESS


def multiprove_cmd(args: Namespace) -> int:
    """Execute the multiprove command."""
    try:
        leaves = read_leaves(args)
    except (OSError, ValueError) as e:
        print_error(str(e))
        return EXIT_RUNTIME_ERROR

    hasher = resolve_hasher(args)
    try:
        root, proof = generate_compact_multiproof(leaves, args.indices, hasher)
    except MerkleException as e:
        print_error(e.message)
        return EXIT_RUNTIME_ERROR

    padded = pad_base_layer(leaves)
    covered = [padded[i] for i in proof.leaf_indices]
    bundle = MultiProofBundle.from_proof(root, proof, leaves=covered)
    data = bundle.model_dump()

    if args.out:
        write_json_file(Path(args.out), data)
        logger.info(f"Multiproof written to {args.out}")

    if args.json:
        print_json(data)
    else:
        print(f"root: {root}")
        print(f"indices: {', '.join(str(i) for i in proof.leaf_indices)}")
        print(f"hashes ({len(proof.hashes)}):")
        for value in proof.hashes:
            print(f"  {value}")
        if args.out:
            print(f"written: {args.out}")
    return EXIT_SUCCESS
